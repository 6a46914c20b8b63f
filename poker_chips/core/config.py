"""
游戏配置相关类的实现
包含桌面设置、预设配置和序列化
"""

from dataclasses import dataclass, field, replace
from typing import List, Dict, Any

MIN_PLAYERS = 2
MAX_PLAYERS = 10


@dataclass
class GameSettings:
    """
    游戏设置类
    一手牌之内保持不变，只在两手牌之间调整（盲注递增）
    """
    player_count: int = 4                # 玩家数量
    player_names: List[str] = field(default_factory=list)
    bet_unit: int = 100                  # 下注单位（界面步进）
    starting_chips: int = 10000          # 初始筹码
    blinds_enabled: bool = True          # 是否启用盲注
    small_blind: int = 100               # 小盲注
    big_blind: int = 200                 # 大盲注
    auto_increase_blind: bool = False    # 每手牌后盲注×1.5

    def __post_init__(self):
        """验证配置的有效性"""
        self._validate_basic_settings()
        self._fill_player_names()

    def _validate_basic_settings(self):
        """验证基础设置"""
        if not MIN_PLAYERS <= self.player_count <= MAX_PLAYERS:
            raise ValueError(
                f"玩家数量必须在{MIN_PLAYERS}-{MAX_PLAYERS}之间: {self.player_count}"
            )

        if self.starting_chips <= 0:
            raise ValueError(f"初始筹码必须大于0: {self.starting_chips}")

        if self.bet_unit <= 0:
            raise ValueError(f"下注单位必须大于0: {self.bet_unit}")

        if self.small_blind < 0 or self.big_blind < 0:
            raise ValueError(f"盲注不能为负数: {self.small_blind}/{self.big_blind}")

        if self.big_blind < self.small_blind:
            raise ValueError(f"大盲注({self.big_blind})不能小于小盲注({self.small_blind})")

        if len(self.player_names) > self.player_count:
            raise ValueError(
                f"玩家名称数量({len(self.player_names)})超过玩家数量({self.player_count})"
            )

    def _fill_player_names(self):
        """补全缺失或空白的玩家名称"""
        names = list(self.player_names)
        for i in range(self.player_count):
            if i >= len(names):
                names.append(f"Player {i + 1}")
            elif not names[i] or not names[i].strip():
                names[i] = f"Player {i + 1}"
        self.player_names = names

    def with_blinds(self, small_blind: int, big_blind: int) -> 'GameSettings':
        """返回修改盲注后的新设置"""
        return replace(self, small_blind=small_blind, big_blind=big_blind)

    def increased_blinds(self) -> 'GameSettings':
        """
        盲注×1.5（向下取整）.

        在当前值上复利递增，而不是基于初始盲注.
        """
        return self.with_blinds(self.small_blind * 3 // 2, self.big_blind * 3 // 2)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "playerCount": self.player_count,
            "playerNames": list(self.player_names),
            "betUnit": self.bet_unit,
            "startingChips": self.starting_chips,
            "blindsEnabled": self.blinds_enabled,
            "smallBlind": self.small_blind,
            "bigBlind": self.big_blind,
            "autoIncreaseBlind": self.auto_increase_blind,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GameSettings':
        return cls(
            player_count=data["playerCount"],
            player_names=list(data.get("playerNames", [])),
            bet_unit=data.get("betUnit", 100),
            starting_chips=data["startingChips"],
            blinds_enabled=data.get("blindsEnabled", True),
            small_blind=data.get("smallBlind", 100),
            big_blind=data.get("bigBlind", 200),
            auto_increase_blind=data.get("autoIncreaseBlind", False),
        )


_PRESETS: Dict[str, Dict[str, Any]] = {
    'default': {},
    'home': {
        'player_count': 6,
        'starting_chips': 2000,
        'small_blind': 10,
        'big_blind': 20,
        'bet_unit': 10,
    },
    'tournament': {
        'player_count': 9,
        'starting_chips': 10000,
        'small_blind': 50,
        'big_blind': 100,
        'bet_unit': 50,
        'auto_increase_blind': True,
    },
}


def get_preset_names() -> List[str]:
    """获取所有可用的预设名称"""
    return list(_PRESETS.keys())


def get_preset(name: str, **overrides: Any) -> GameSettings:
    """
    获取预设配置

    Args:
        name: 预设名称 ('default', 'home', 'tournament')
        **overrides: 覆盖预设中的字段

    Returns:
        GameSettings: 新的设置对象

    Raises:
        ValueError: 预设不存在时
    """
    if name not in _PRESETS:
        raise ValueError(f"未知的预设配置: {name}")
    values = dict(_PRESETS[name])
    values.update({k: v for k, v in overrides.items() if v is not None})
    return GameSettings(**values)
