"""数据传输对象定义.

这个模块定义了外部输入（命令行、网络、界面）进入会话之前的标准格式。
使用Pydantic dataclass确保数据验证的一致性；from_dict接受camelCase键。
"""

from typing import Any, Dict, List, Optional

from pydantic import Field, ValidationInfo, field_validator
from pydantic.dataclasses import dataclass as pydantic_dataclass

from ..core import Action, ActionType, GameSettings, PotWinner
from ..core.config import MIN_PLAYERS, MAX_PLAYERS


def _pick(data: Dict[str, Any], camel: str, snake: str, default: Any = None) -> Any:
    if camel in data:
        return data[camel]
    return data.get(snake, default)


@pydantic_dataclass
class ActionInput:
    """玩家行动输入.

    amount是跟注之上的加注增量，只有加注时需要。
    """
    action_type: ActionType = Field(..., description="行动类型")
    player_id: str = Field(..., min_length=1, description="玩家ID")
    amount: Optional[int] = Field(None, description="加注增量")

    @field_validator('amount')
    @classmethod
    def validate_amount(cls, v: Optional[int], info: ValidationInfo) -> Optional[int]:
        """加注必须提供正数增量."""
        action_type = info.data.get('action_type')
        if action_type == ActionType.RAISE:
            if v is None:
                raise ValueError("加注必须指定数量")
            if v < 1:
                raise ValueError(f"加注数量必须大于0: {v}")
        elif v is not None and v < 0:
            raise ValueError(f"数量不能为负数: {v}")
        return v

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ActionInput':
        return cls(
            action_type=_pick(data, 'type', 'action_type'),
            player_id=_pick(data, 'playerId', 'player_id'),
            amount=data.get('amount'),
        )

    def to_core(self) -> Action:
        amount = self.amount if self.action_type == ActionType.RAISE else None
        return Action(action_type=self.action_type, player_id=self.player_id, amount=amount)


@pydantic_dataclass
class PotWinnerInput:
    """单个底池的赢家输入，第一个赢家获得余数筹码."""
    pot_index: int = Field(..., ge=0, description="底池索引")
    winners: List[str] = Field(..., min_length=1, description="赢家ID列表")

    @field_validator('winners')
    @classmethod
    def validate_unique_winners(cls, v: List[str]) -> List[str]:
        if len(set(v)) != len(v):
            raise ValueError("同一底池的赢家不能重复")
        return v

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PotWinnerInput':
        return cls(
            pot_index=_pick(data, 'potIndex', 'pot_index'),
            winners=list(data.get('winners') or []),
        )

    def to_core(self) -> PotWinner:
        return PotWinner(pot_index=self.pot_index, winners=tuple(self.winners))


@pydantic_dataclass
class SettingsInput:
    """游戏设置输入."""
    player_count: int = Field(4, ge=MIN_PLAYERS, le=MAX_PLAYERS, description="玩家数量")
    player_names: List[str] = Field(default_factory=list, description="玩家名称")
    bet_unit: int = Field(100, gt=0, description="下注单位")
    starting_chips: int = Field(10000, gt=0, description="初始筹码")
    blinds_enabled: bool = Field(True, description="是否启用盲注")
    small_blind: int = Field(100, ge=0, description="小盲注")
    big_blind: int = Field(200, ge=0, description="大盲注")
    auto_increase_blind: bool = Field(False, description="是否自动涨盲")

    @field_validator('player_names')
    @classmethod
    def strip_names(cls, v: List[str]) -> List[str]:
        return [name.strip() for name in v]

    @field_validator('big_blind')
    @classmethod
    def validate_blind_relationship(cls, v: int, info: ValidationInfo) -> int:
        """大盲不能小于小盲."""
        small_blind = info.data.get('small_blind')
        if small_blind is not None and v < small_blind:
            raise ValueError("大盲不能小于小盲")
        return v

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SettingsInput':
        defaults = GameSettings()
        return cls(
            player_count=_pick(data, 'playerCount', 'player_count', defaults.player_count),
            player_names=list(_pick(data, 'playerNames', 'player_names', []) or []),
            bet_unit=_pick(data, 'betUnit', 'bet_unit', defaults.bet_unit),
            starting_chips=_pick(data, 'startingChips', 'starting_chips', defaults.starting_chips),
            blinds_enabled=_pick(data, 'blindsEnabled', 'blinds_enabled', defaults.blinds_enabled),
            small_blind=_pick(data, 'smallBlind', 'small_blind', defaults.small_blind),
            big_blind=_pick(data, 'bigBlind', 'big_blind', defaults.big_blind),
            auto_increase_blind=_pick(
                data, 'autoIncreaseBlind', 'auto_increase_blind', defaults.auto_increase_blind
            ),
        )

    def to_core(self) -> GameSettings:
        return GameSettings(
            player_count=self.player_count,
            player_names=list(self.player_names),
            bet_unit=self.bet_unit,
            starting_chips=self.starting_chips,
            blinds_enabled=self.blinds_enabled,
            small_blind=self.small_blind,
            big_blind=self.big_blind,
            auto_increase_blind=self.auto_increase_blind,
        )
