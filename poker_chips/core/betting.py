"""
下注规则

针对GameState的纯查询函数：跟注额、能否过牌、加注上下限、加注校验和可用行动。
"""

from typing import List

from .enums import ActionType, RaiseValidation
from .player import Player
from .state import GameState

__all__ = [
    'get_call_amount',
    'can_check',
    'get_minimum_raise',
    'get_maximum_raise',
    'validate_raise_amount',
    'get_available_actions',
]


def get_call_amount(state: GameState, player_id: str) -> int:
    """
    计算玩家跟注需要的筹码

    Returns:
        min(桌面下注 - 玩家本轮下注, 玩家筹码)，未知玩家返回0，不会为负数
    """
    player = state.get_player(player_id)
    if player is None:
        return 0
    return max(0, min(state.current_bet - player.current_bet, player.chips))


def can_check(state: GameState, player_id: str) -> bool:
    player = state.get_player(player_id)
    if player is None:
        return False
    return player.current_bet == state.current_bet


def get_minimum_raise(state: GameState) -> int:
    """最小加注增量（不是总下注额）"""
    return state.min_raise


def get_maximum_raise(state: GameState, player_id: str) -> int:
    """跟注之后最多还能加注的数量"""
    player = state.get_player(player_id)
    if player is None:
        return 0
    return max(0, player.chips - (state.current_bet - player.current_bet))


def validate_raise_amount(state: GameState, player: Player, raise_amount: int) -> RaiseValidation:
    """
    校验加注数量

    先检查筹码是否足够，再检查是否达到最小加注。

    Args:
        state: 游戏状态
        player: 加注的玩家
        raise_amount: 跟注之上的加注增量

    Returns:
        RaiseValidation: 校验结果和错误信息
    """
    call_amount = state.current_bet - player.current_bet
    if call_amount + raise_amount > player.chips:
        return RaiseValidation.fail("筹码不足")

    if raise_amount < state.min_raise:
        return RaiseValidation.fail(f"最小加注额为 {state.min_raise}")

    return RaiseValidation.ok()


def get_available_actions(state: GameState) -> List[ActionType]:
    """
    获取当前行动玩家的可用行动

    顺序为 弃牌、全押、过牌或跟注、加注（筹码足够完成最小加注时）。
    非下注阶段或当前座位无效时返回空列表。
    """
    if not state.is_betting_stage:
        return []

    player = state.get_current_player()
    if player is None:
        return []

    actions = [ActionType.FOLD, ActionType.ALL_IN]
    actions.append(ActionType.CHECK if can_check(state, player.id) else ActionType.CALL)

    call_amount = state.current_bet - player.current_bet
    if player.chips > call_amount + state.min_raise:
        actions.append(ActionType.RAISE)

    return actions
