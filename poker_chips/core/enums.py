"""
筹码引擎相关枚举定义模块.

包含游戏阶段、玩家状态、行动类型、底池类型，以及在各层之间传递的小型值对象.
枚举值即为序列化时使用的字符串.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Optional, Tuple


class GameStage(Enum):
    """
    游戏阶段枚举.

    preFlop → flop → turn → river → showdown → gameOver.
    """

    PRE_FLOP = "preFlop"    # 翻牌前
    FLOP = "flop"           # 翻牌
    TURN = "turn"           # 转牌
    RIVER = "river"         # 河牌
    SHOWDOWN = "showdown"   # 摊牌
    GAME_OVER = "gameOver"  # 本手结束

    @property
    def is_betting_stage(self) -> bool:
        """是否为可以下注的阶段."""
        return self in BETTING_STAGES

    def next_stage(self) -> 'GameStage':
        """
        获取下一个阶段.

        Returns:
            GameStage: 下一个阶段，gameOver之后仍为gameOver
        """
        index = STAGE_ORDER.index(self)
        return STAGE_ORDER[min(index + 1, len(STAGE_ORDER) - 1)]


STAGE_ORDER: Tuple[GameStage, ...] = (
    GameStage.PRE_FLOP,
    GameStage.FLOP,
    GameStage.TURN,
    GameStage.RIVER,
    GameStage.SHOWDOWN,
    GameStage.GAME_OVER,
)

BETTING_STAGES = frozenset({
    GameStage.PRE_FLOP,
    GameStage.FLOP,
    GameStage.TURN,
    GameStage.RIVER,
})

# 各阶段公共牌数量（仅用于显示）
COMMUNITY_CARDS_BY_STAGE = {
    GameStage.FLOP: 3,
    GameStage.TURN: 4,
    GameStage.RIVER: 5,
}


class PlayerStatus(Enum):
    """
    玩家状态枚举.
    """

    ACTIVE = "active"    # 仍可行动
    FOLDED = "folded"    # 已弃牌
    ALL_IN = "allIn"     # 已全押
    OUT = "out"          # 已出局

    @property
    def in_hand(self) -> bool:
        """仍然争夺底池（未弃牌且未出局）."""
        return self in (PlayerStatus.ACTIVE, PlayerStatus.ALL_IN)


class ActionType(Enum):
    """
    玩家行动类型枚举.
    """

    FOLD = "fold"      # 弃牌
    CHECK = "check"    # 过牌
    CALL = "call"      # 跟注
    RAISE = "raise"    # 加注
    ALL_IN = "allIn"   # 全押


class PotType(Enum):
    """底池类型."""

    MAIN = "main"
    SIDE = "side"


@dataclass(frozen=True)
class Action:
    """
    玩家行动.

    amount只对raise有意义，表示在跟注之上额外加注的数量，而不是总下注额.
    """

    action_type: ActionType
    player_id: str
    amount: Optional[int] = None

    def to_dict(self) -> dict:
        data = {"type": self.action_type.value, "playerId": self.player_id}
        if self.amount is not None:
            data["amount"] = self.amount
        return data


@dataclass(frozen=True)
class PotWinner:
    """
    单个底池的赢家声明.

    winners中的第一个玩家获得均分后的余数筹码.
    """

    pot_index: int
    winners: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # 允许传入list，统一转换为tuple以保持不可变
        object.__setattr__(self, "winners", tuple(self.winners))


@dataclass(frozen=True)
class RaiseValidation:
    """加注校验结果."""

    valid: bool
    error: Optional[str] = None

    @classmethod
    def ok(cls) -> 'RaiseValidation':
        return cls(valid=True)

    @classmethod
    def fail(cls, error: str) -> 'RaiseValidation':
        return cls(valid=False, error=error)
