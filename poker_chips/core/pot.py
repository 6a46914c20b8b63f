"""
底池计算器

根据各玩家本轮下注额和状态计算主池与边池，并在阶段推进时合并到累计底池中。
"""

from typing import Iterable, List, Optional

from .enums import PotType
from .state import GameState, Pot

__all__ = [
    'calculate_pots',
    'get_total_pot_amount',
    'format_pot_display',
    'merge_round_pots',
]


def calculate_pots(state: GameState) -> List[Pot]:
    """
    计算本轮下注形成的主池和边池

    按下注额从低到高逐档切分：每档金额为
    (本档额度 - 上一档额度) × 下注额不低于本档的玩家数。
    弃牌玩家的筹码计入金额，但不进入资格列表。

    Args:
        state: 游戏状态

    Returns:
        按额度升序排列的底池列表，第一个为主池
    """
    levels = sorted({p.current_bet for p in state.players if p.current_bet > 0})
    pots: List[Pot] = []
    previous_level = 0

    for level in levels:
        eligible = [
            p.id for p in state.players
            if p.current_bet >= level and p.in_hand
        ]
        if not eligible:
            # 上一档额度保持不变，差额并入下一档
            continue

        contributors = sum(1 for p in state.players if p.current_bet >= level)
        amount = (level - previous_level) * contributors
        if amount == 0:
            continue

        pots.append(Pot(
            amount=amount,
            eligible_players=eligible,
            pot_type=PotType.MAIN if not pots else PotType.SIDE,
        ))
        previous_level = level

    # 最高档只有弃牌玩家时没有后续档位吸收差额，并入最后一个底池
    uncollected = sum(p.current_bet for p in state.players) - get_total_pot_amount(pots)
    if pots and uncollected > 0:
        pots[-1].amount += uncollected

    return pots


def get_total_pot_amount(pots: List[Pot]) -> int:
    """所有底池金额之和"""
    return sum(pot.amount for pot in pots)


def format_pot_display(pots: List[Pot]) -> str:
    """
    格式化底池显示文本

    Returns:
        例如 "主池: 1500 | 边池: 1000, 400"；没有底池时为 "0"
    """
    if not pots:
        return "0"

    main_pot = next((p for p in pots if p.pot_type == PotType.MAIN), None)
    side_pots = [p for p in pots if p.pot_type == PotType.SIDE]

    display = f"主池: {main_pot.amount}" if main_pot else ""
    if side_pots:
        side_amounts = ", ".join(str(p.amount) for p in side_pots)
        display = f"{display} | 边池: {side_amounts}" if display else f"边池: {side_amounts}"

    return display


def merge_round_pots(
    accumulated: List[Pot],
    round_pots: List[Pot],
    in_hand_ids: Optional[Iterable[str]] = None,
) -> List[Pot]:
    """
    将本轮底池合并到累计底池

    资格集合完全相同（与顺序无关）的底池合并金额，否则追加为新底池。
    只有累计列表为空时追加的底池才标记为主池。

    传入in_hand_ids时，先从累计底池的资格列表中移除之后弃牌的玩家，
    移除后资格相同的底池合并为一个；资格变为空的底池金额并入前一个底池。

    Args:
        accumulated: 之前各轮累计的底池（不会被修改）
        round_pots: 本轮calculate_pots的结果
        in_hand_ids: 仍在牌局中的玩家ID

    Returns:
        合并后的新底池列表
    """
    merged: List[Pot] = []
    if in_hand_ids is not None:
        in_hand = set(in_hand_ids)
        pruned = [
            Pot(p.amount, [pid for pid in p.eligible_players if pid in in_hand], p.pot_type)
            for p in accumulated
        ]
    else:
        pruned = [Pot(p.amount, list(p.eligible_players), p.pot_type) for p in accumulated]

    orphaned = 0
    for pot in pruned:
        if not pot.eligible_players:
            if merged:
                merged[-1].amount += pot.amount
            else:
                orphaned += pot.amount
            continue
        _add_pot(merged, pot, orphaned)
        orphaned = 0

    for round_pot in round_pots:
        _add_pot(merged, round_pot, orphaned)
        orphaned = 0

    if orphaned and merged:
        merged[0].amount += orphaned

    return merged


def _add_pot(merged: List[Pot], pot: Pot, extra: int = 0) -> None:
    existing = next(
        (p for p in merged if p.has_same_eligibility(pot.eligible_players)),
        None,
    )
    if existing is not None:
        existing.amount += pot.amount + extra
    else:
        merged.append(Pot(
            amount=pot.amount + extra,
            eligible_players=list(pot.eligible_players),
            pot_type=PotType.MAIN if not merged else PotType.SIDE,
        ))
