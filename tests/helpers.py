"""
测试辅助函数

构造确定性的牌局状态：庄家位固定、可以直接指定下注额。
"""

import random
from typing import List, Optional

from poker_chips.core import (
    Action, ActionType, GameSettings, GameState, Player, PlayerStatus,
    initialize_game, process_action,
)


class FixedDealer(random.Random):
    """总是把庄家位放在指定座位的随机数源"""

    def __init__(self, seat: int = 0):
        super().__init__(0)
        self.seat = seat

    def randrange(self, *args, **kwargs):
        return self.seat


def new_game(player_count: int = 4, dealer: int = 0, **kwargs) -> GameState:
    """按指定庄家位开局，默认10000筹码、盲注100/200"""
    kwargs.setdefault('starting_chips', 10000)
    kwargs.setdefault('small_blind', 100)
    kwargs.setdefault('big_blind', 200)
    settings = GameSettings(player_count=player_count, **kwargs)
    return initialize_game(settings, FixedDealer(dealer))


def act(state: GameState, action_type: ActionType, player_id: Optional[str] = None,
        amount: Optional[int] = None) -> GameState:
    """以当前行动玩家（或指定玩家）执行行动"""
    if player_id is None:
        player_id = state.get_current_player().id
    return process_action(state, Action(action_type, player_id, amount))


def call_around(state: GameState) -> GameState:
    """当前下注轮里所有人跟注或过牌，直到阶段改变"""
    stage = state.stage
    while state.stage == stage and state.is_betting_stage:
        player = state.get_current_player()
        action = ActionType.CHECK if player.current_bet == state.current_bet else ActionType.CALL
        state = act(state, action)
    return state


def make_state(bets: List[int], statuses: Optional[List[PlayerStatus]] = None,
               chips: Optional[List[int]] = None) -> GameState:
    """
    直接构造各玩家本轮下注的状态，用于底池计算测试

    Args:
        bets: 每个座位的current_bet
        statuses: 每个座位的状态，默认全部active
        chips: 每个座位剩余筹码，默认1000
    """
    count = len(bets)
    statuses = statuses or [PlayerStatus.ACTIVE] * count
    chips = chips or [1000] * count
    players = [
        Player(id=f"player-{i}", name=f"Player {i + 1}", chips=chips[i],
               current_bet=bets[i], status=statuses[i], position=i)
        for i in range(count)
    ]
    return GameState(
        settings=GameSettings(player_count=count),
        players=players,
        total_pot=sum(bets),
        current_bet=max(bets) if bets else 0,
        min_raise=200,
    )
