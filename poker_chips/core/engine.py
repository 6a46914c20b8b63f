"""
筹码引擎状态机.

负责开局、处理玩家行动、判断下注轮结束、推进阶段（累计底池）、
分配底池和进入下一手牌。所有公开函数都是纯函数：
传入的GameState不会被修改，返回的总是新的状态。

非法操作（未知玩家、非活跃玩家、不合法的加注）不会抛出异常，
而是返回与输入等值的新状态。
"""

import logging
import random
from dataclasses import replace
from typing import Iterable, List, Optional

from .config import GameSettings
from .enums import (
    Action, ActionType, GameStage, PlayerStatus, PotWinner,
    COMMUNITY_CARDS_BY_STAGE,
)
from .player import Player
from .pot import calculate_pots, merge_round_pots
from .state import GameState

__all__ = [
    'initialize_game',
    'process_action',
    'distribute_chips',
    'start_next_game',
]

logger = logging.getLogger(__name__)


def initialize_game(settings: GameSettings, rng: Optional[random.Random] = None) -> GameState:
    """
    根据设置创建新的一手牌.

    庄家位从所有座位中均匀随机选择，小盲、大盲为庄家顺时针的下两个座位，
    第一个行动的是大盲之后的座位。启用盲注时立即下盲注。

    Args:
        settings: 游戏设置
        rng: 随机数源，用于选择庄家位（测试时可注入固定种子）

    Returns:
        GameState: 翻牌前阶段的新状态
    """
    rng = rng or random.Random()
    players = [
        Player(
            id=f"player-{i}",
            name=settings.player_names[i],
            chips=settings.starting_chips,
            position=i,
        )
        for i in range(settings.player_count)
    ]
    dealer = rng.randrange(settings.player_count)

    state = GameState(settings=settings, players=players)
    _seat_table(state, dealer)
    logger.debug(
        "开局: %d名玩家, 庄家位=%d, 盲注=%d/%d",
        len(players), dealer, settings.small_blind, settings.big_blind,
    )
    return state


def process_action(state: GameState, action: Action) -> GameState:
    """
    处理一个玩家行动.

    Args:
        state: 当前状态（不会被修改）
        action: 玩家行动

    Returns:
        GameState: 新状态；行动非法时为与输入等值的副本
    """
    new_state = state.clone()
    player = new_state.get_player(action.player_id)

    if player is None or not player.is_active or not new_state.is_betting_stage:
        logger.debug("忽略行动 %s: 玩家 %s 当前无法行动", action.action_type.value, action.player_id)
        return new_state

    if action.action_type == ActionType.RAISE and not _raise_is_legal(new_state, player, action.amount):
        logger.debug("忽略不合法的加注: 玩家 %s, 数量 %s", player.id, action.amount)
        return new_state

    player.has_acted = True

    if action.action_type == ActionType.FOLD:
        player.status = PlayerStatus.FOLDED
        # 弃牌玩家立即失去之前各轮底池的资格
        in_hand_ids = [p.id for p in new_state.get_players_in_hand()]
        new_state.pots = merge_round_pots(new_state.pots, [], in_hand_ids)

    elif action.action_type == ActionType.CHECK:
        # 不校验能否过牌，由调用方先用can_check判断
        pass

    elif action.action_type == ActionType.CALL:
        new_state.total_pot += player.commit(new_state.current_bet - player.current_bet)

    elif action.action_type == ActionType.RAISE:
        _apply_raise(new_state, player, action.amount)

    elif action.action_type == ActionType.ALL_IN:
        _apply_all_in(new_state, player)

    if _is_betting_complete(new_state):
        _advance_stage(new_state)
    else:
        seat = new_state.get_player_index(player.id)
        new_state.current_player_index = _next_active_index(new_state, seat)

    return new_state


def distribute_chips(state: GameState, pot_winners: Iterable[PotWinner]) -> GameState:
    """
    按每个底池声明的赢家分配筹码.

    每个赢家获得向下取整的均分额，列表中第一个赢家额外获得余数。
    不重新校验赢家资格，由摊牌流程保证赢家来自pot.eligible_players。

    Args:
        state: 当前状态（不会被修改）
        pot_winners: 每个底池的赢家声明

    Returns:
        GameState: 底池清空、阶段为gameOver的新状态
    """
    new_state = state.clone()

    for entry in pot_winners:
        if not 0 <= entry.pot_index < len(new_state.pots) or not entry.winners:
            continue

        pot = new_state.pots[entry.pot_index]
        share, remainder = divmod(pot.amount, len(entry.winners))

        for i, winner_id in enumerate(entry.winners):
            winner = new_state.get_player(winner_id)
            if winner is None:
                logger.warning("底池 %d 的赢家 %s 不存在", entry.pot_index, winner_id)
                continue
            winner.chips += share + (remainder if i == 0 else 0)

    new_state.total_pot = 0
    new_state.pots = []
    new_state.stage = GameStage.GAME_OVER
    return new_state


def start_next_game(state: GameState) -> GameState:
    """
    进入下一手牌.

    筹码为0的玩家被淘汰，座位重新编号（玩家ID保持不变）。
    幸存玩家少于2人时原样返回同一个状态对象。
    开启自动涨盲时，盲注在当前值基础上×1.5（向下取整）。
    庄家位移动到原庄家顺时针方向的下一个幸存玩家。

    Args:
        state: 当前状态（不会被修改）

    Returns:
        GameState: 新一手牌的翻牌前状态，或无法继续时的原状态
    """
    survivors = [p for p in state.players if p.chips > 0]
    if len(survivors) < 2:
        logger.debug("幸存玩家不足2人，无法开始下一手")
        return state

    settings = state.settings
    if settings.auto_increase_blind:
        settings = settings.increased_blinds()
    settings = replace(
        settings,
        player_count=len(survivors),
        player_names=[p.name for p in survivors],
    )

    players = [
        Player(id=p.id, name=p.name, chips=p.chips, position=i)
        for i, p in enumerate(survivors)
    ]
    dealer = _next_dealer_index(state, survivors)

    new_state = GameState(settings=settings, players=players, game_number=state.game_number + 1)
    _seat_table(new_state, dealer)
    logger.debug(
        "第%d手: %d名玩家, 庄家位=%d, 盲注=%d/%d",
        new_state.game_number, len(players), dealer, settings.small_blind, settings.big_blind,
    )
    return new_state


def _seat_table(state: GameState, dealer: int) -> None:
    """设置庄家、盲注位和首个行动者，并下盲注"""
    count = len(state.players)
    state.dealer_button_index = dealer
    state.small_blind_index = (dealer + 1) % count
    state.big_blind_index = (dealer + 2) % count
    state.min_raise = state.settings.big_blind

    if state.settings.blinds_enabled:
        _post_blinds(state)

    if not state.get_active_players():
        # 所有人都被盲注打光，没有人可以下注
        _advance_stage(state)
        return

    state.current_player_index = _next_active_index(state, state.big_blind_index)


def _post_blinds(state: GameState) -> None:
    """下小盲和大盲，不足时以全部筹码全押"""
    sb_player = state.players[state.small_blind_index]
    bb_player = state.players[state.big_blind_index]

    sb_amount = sb_player.commit(state.settings.small_blind)
    bb_amount = bb_player.commit(state.settings.big_blind)

    state.total_pot = sb_amount + bb_amount
    state.current_bet = max(sb_amount, bb_amount)
    state.min_raise = state.settings.big_blind


def _raise_is_legal(state: GameState, player: Player, amount: Optional[int]) -> bool:
    if amount is None or amount <= 0 or amount < state.min_raise:
        return False
    return (state.current_bet - player.current_bet) + amount <= player.chips


def _apply_raise(state: GameState, player: Player, amount: int) -> None:
    to_add = (state.current_bet - player.current_bet) + amount
    state.total_pot += player.commit(to_add)
    state.current_bet += amount
    state.last_raise_amount = amount
    state.min_raise = amount
    _reopen_action(state, player)


def _apply_all_in(state: GameState, player: Player) -> None:
    state.total_pot += player.commit(player.chips)
    player.status = PlayerStatus.ALL_IN

    if player.current_bet > state.current_bet:
        # 超过桌面下注的全押视为加注，重新开放行动
        raise_size = player.current_bet - state.current_bet
        state.current_bet = player.current_bet
        state.min_raise = max(state.min_raise, raise_size)
        _reopen_action(state, player)


def _reopen_action(state: GameState, raiser: Player) -> None:
    for p in state.players:
        if p.id != raiser.id and p.is_active:
            p.has_acted = False


def _is_betting_complete(state: GameState) -> bool:
    """
    判断本下注轮是否结束.

    仍在牌局中的玩家不超过1人、没有人可以行动、
    或所有活跃玩家都已行动且下注额等于桌面下注时结束。
    """
    if len(state.get_players_in_hand()) <= 1:
        return True

    can_act = state.get_active_players()
    if not can_act:
        return True

    return all(p.has_acted and p.current_bet == state.current_bet for p in can_act)


def _next_active_index(state: GameState, from_index: int) -> int:
    """从from_index的下一个座位开始顺时针查找活跃玩家，找不到时返回from_index"""
    count = len(state.players)
    for offset in range(1, count + 1):
        index = (from_index + offset) % count
        if state.players[index].is_active:
            return index
    return from_index


def _next_dealer_index(state: GameState, survivors: List[Player]) -> int:
    """原庄家顺时针方向的第一个幸存玩家在新座位表中的索引"""
    survivor_ids = [p.id for p in survivors]
    count = len(state.players)
    for offset in range(1, count + 1):
        candidate = state.players[(state.dealer_button_index + offset) % count]
        if candidate.id in survivor_ids:
            return survivor_ids.index(candidate.id)
    return 0


def _advance_stage(state: GameState) -> None:
    """
    结束当前下注轮并推进阶段（原地修改state，仅供内部在副本上调用）.

    本轮下注先合并到累计底池，然后清零本轮下注。只剩一名玩家时直接获得全部底池；
    可以行动的玩家少于2人时连续推进直到摊牌。
    """
    while True:
        in_hand_ids = [p.id for p in state.get_players_in_hand()]
        state.pots = merge_round_pots(state.pots, calculate_pots(state), in_hand_ids)
        for p in state.players:
            p.reset_for_new_round()
        state.current_bet = 0

        remaining = state.get_players_in_hand()
        if len(remaining) == 1:
            winner = remaining[0]
            winner.chips += state.total_pot
            logger.debug("玩家 %s 无人跟随，直接赢得底池 %d", winner.id, state.total_pot)
            state.total_pot = 0
            state.pots = []
            state.stage = GameStage.GAME_OVER
            return

        if state.stage != GameStage.SHOWDOWN:
            state.stage = state.stage.next_stage()
        state.community_cards = COMMUNITY_CARDS_BY_STAGE.get(state.stage, state.community_cards)
        logger.debug("进入阶段 %s, 底池 %d", state.stage.value, state.total_pot)

        if state.stage == GameStage.SHOWDOWN:
            break

        if len([p for p in remaining if p.is_active]) < 2:
            continue

        state.current_player_index = _next_active_index(state, state.dealer_button_index)
        state.min_raise = state.settings.big_blind
        state.last_raise_amount = 0
        break

    state.betting_round += 1
