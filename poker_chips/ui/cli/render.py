"""牌桌文本渲染.

把GameState渲染为命令行可读的文本，只读取状态，不做任何修改。
"""

from typing import List

from ...core import (
    GameState, GameStage,
    format_chips, format_pot_display, get_position_label,
    get_stage_text, get_status_text, get_available_actions, get_call_amount,
)


def render_state(state: GameState) -> str:
    """渲染完整牌桌."""
    lines: List[str] = []
    settings = state.settings
    lines.append(
        f"第{state.game_number}手 | {get_stage_text(state.stage)} | "
        f"公共牌 {state.community_cards} 张"
    )
    blinds = (
        f"{format_chips(settings.small_blind)}/{format_chips(settings.big_blind)}"
        if settings.blinds_enabled else "无"
    )
    lines.append(
        f"底池 {format_chips(state.total_pot)} ({format_pot_display(state.pots)}) | "
        f"当前下注 {format_chips(state.current_bet)} | 最小加注 {format_chips(state.min_raise)} | "
        f"盲注 {blinds}"
    )
    lines.append("")

    for index, player in enumerate(state.players):
        label = get_position_label(
            index, state.dealer_button_index, state.small_blind_index, state.big_blind_index
        )
        marker = ">" if index == state.current_player_index and state.is_betting_stage else " "
        lines.append(
            f"{marker} {label:<3} {player.id:<10} {player.name:<12} "
            f"{get_status_text(player.status):<4} 筹码 {format_chips(player.chips):>10} "
            f"下注 {format_chips(player.current_bet):>8}"
        )

    lines.append("")
    lines.extend(_render_prompt(state))
    return "\n".join(lines)


def render_pots(state: GameState) -> List[str]:
    """摊牌时列出每个底池及其有资格的玩家."""
    lines = []
    for index, pot in enumerate(state.pots):
        names = ", ".join(
            f"{pid}({state.get_player(pid).name})" if state.get_player(pid) else pid
            for pid in pot.eligible_players
        )
        lines.append(f"  [{index}] {pot.pot_type.value} {format_chips(pot.amount)}: {names}")
    return lines


def _render_prompt(state: GameState) -> List[str]:
    if state.is_betting_stage:
        player = state.get_current_player()
        if player is None:
            return []
        actions = ", ".join(a.value for a in get_available_actions(state))
        call = get_call_amount(state, player.id)
        return [f"轮到 {player.name} ({player.id}) 行动, 跟注需要 {format_chips(call)}: {actions}"]

    if state.stage == GameStage.SHOWDOWN:
        return ["摊牌: 请为每个底池选择赢家"] + render_pots(state)

    return ["本手结束, 使用 next 开始下一手"]
