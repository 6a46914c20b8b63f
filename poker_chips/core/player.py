"""
玩家座位状态.

包含玩家的基本信息、筹码管理和状态控制功能.
"""

from dataclasses import dataclass
from typing import Any, Dict

from .enums import PlayerStatus


@dataclass
class Player:
    """
    桌上的一个座位.

    id在整局游戏中保持稳定，name可以随时修改.
    chips为尚未下注的筹码，current_bet只记录本轮下注.
    """

    id: str
    name: str
    chips: int
    current_bet: int = 0
    status: PlayerStatus = PlayerStatus.ACTIVE
    position: int = 0
    has_acted: bool = False

    def __post_init__(self) -> None:
        """
        验证玩家数据的有效性.

        Raises:
            ValueError: 当玩家数据无效时
        """
        if not self.id:
            raise ValueError("玩家ID不能为空")

        if self.chips < 0:
            raise ValueError(f"筹码数量不能为负数: {self.chips}")

        if self.current_bet < 0:
            raise ValueError(f"当前下注不能为负数: {self.current_bet}")

        if self.position < 0:
            raise ValueError(f"座位号不能为负数: {self.position}")

    @property
    def is_active(self) -> bool:
        return self.status == PlayerStatus.ACTIVE

    @property
    def in_hand(self) -> bool:
        """是否仍在争夺底池."""
        return self.status.in_hand

    def commit(self, amount: int) -> int:
        """
        将筹码投入本轮下注.

        投入量被限制在剩余筹码之内，筹码归零时状态变为全押.

        Args:
            amount: 希望投入的数量

        Returns:
            int: 实际投入的数量
        """
        paid = max(0, min(amount, self.chips))
        self.chips -= paid
        self.current_bet += paid
        if self.chips == 0:
            self.status = PlayerStatus.ALL_IN
        return paid

    def reset_for_new_round(self) -> None:
        self.current_bet = 0
        self.has_acted = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "chips": self.chips,
            "currentBet": self.current_bet,
            "status": self.status.value,
            "position": self.position,
            "hasActed": self.has_acted,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Player':
        return cls(
            id=data["id"],
            name=data["name"],
            chips=data["chips"],
            current_bet=data.get("currentBet", 0),
            status=PlayerStatus(data.get("status", PlayerStatus.ACTIVE.value)),
            position=data.get("position", 0),
            has_acted=data.get("hasActed", False),
        )
