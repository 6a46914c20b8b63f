"""
显示辅助函数.

供界面层使用的筹码格式化、位置标签以及状态和阶段的中文名称。
"""

from typing import Union

from .enums import GameStage, PlayerStatus

_STATUS_TEXT = {
    PlayerStatus.ACTIVE.value: "参与中",
    PlayerStatus.FOLDED.value: "弃牌",
    PlayerStatus.ALL_IN.value: "全押",
    PlayerStatus.OUT.value: "出局",
}

_STAGE_TEXT = {
    GameStage.PRE_FLOP.value: "翻牌前",
    GameStage.FLOP.value: "翻牌",
    GameStage.TURN.value: "转牌",
    GameStage.RIVER.value: "河牌",
    GameStage.SHOWDOWN.value: "摊牌",
    GameStage.GAME_OVER.value: "本手结束",
}


def format_chips(amount: int) -> str:
    """千位分隔的筹码数，例如 12,345"""
    return f"{amount:,}"


def get_position_label(index: int, dealer_index: int, sb_index: int, bb_index: int) -> str:
    """
    座位的位置标签.

    庄家优先于盲注位，其余座位返回空字符串。
    """
    if index == dealer_index:
        return "BTN"
    if index == sb_index:
        return "SB"
    if index == bb_index:
        return "BB"
    return ""


def get_status_text(status: Union[PlayerStatus, str]) -> str:
    key = status.value if isinstance(status, PlayerStatus) else status
    return _STATUS_TEXT.get(key, key)


def get_stage_text(stage: Union[GameStage, str]) -> str:
    key = stage.value if isinstance(stage, GameStage) else stage
    return _STAGE_TEXT.get(key, key)
