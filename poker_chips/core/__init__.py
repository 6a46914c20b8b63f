"""
筹码引擎核心模块.

包含数据模型、底池计算、下注规则和状态机，均为不依赖外部资源的纯逻辑.
"""

from .enums import (
    GameStage, PlayerStatus, ActionType, PotType,
    Action, PotWinner, RaiseValidation, STAGE_ORDER,
)
from .config import GameSettings, get_preset, get_preset_names
from .player import Player
from .state import GameState, Pot
from .pot import calculate_pots, get_total_pot_amount, format_pot_display, merge_round_pots
from .betting import (
    get_call_amount, can_check, get_minimum_raise, get_maximum_raise,
    validate_raise_amount, get_available_actions,
)
from .engine import initialize_game, process_action, distribute_chips, start_next_game
from .health_checker import (
    GameStateHealthChecker, HealthCheckResult, HealthIssue,
    HealthIssueType, HealthIssueSeverity,
)
from .display import format_chips, get_position_label, get_status_text, get_stage_text
from .exceptions import (
    PokerChipsError, SerializationError, DeserializationError,
    RoomNotFoundError, SessionError,
)

__all__ = [
    # 枚举和值对象
    'GameStage', 'PlayerStatus', 'ActionType', 'PotType',
    'Action', 'PotWinner', 'RaiseValidation', 'STAGE_ORDER',
    # 数据模型
    'GameSettings', 'get_preset', 'get_preset_names',
    'Player', 'GameState', 'Pot',
    # 底池计算
    'calculate_pots', 'get_total_pot_amount', 'format_pot_display', 'merge_round_pots',
    # 下注规则
    'get_call_amount', 'can_check', 'get_minimum_raise', 'get_maximum_raise',
    'validate_raise_amount', 'get_available_actions',
    # 状态机
    'initialize_game', 'process_action', 'distribute_chips', 'start_next_game',
    # 健康检查
    'GameStateHealthChecker', 'HealthCheckResult', 'HealthIssue',
    'HealthIssueType', 'HealthIssueSeverity',
    # 显示
    'format_chips', 'get_position_label', 'get_status_text', 'get_stage_text',
    # 异常
    'PokerChipsError', 'SerializationError', 'DeserializationError',
    'RoomNotFoundError', 'SessionError',
]
