"""
会话控制层.

在纯引擎之上提供权威状态、撤销历史、持久化和广播同步.
"""

from .session import GameSession, ActionRecord, BroadcastChannel, MAX_UNDO_HISTORY
from .decorators import atomic, logged_action
from .dto import ActionInput, PotWinnerInput, SettingsInput

__all__ = [
    'GameSession',
    'ActionRecord',
    'BroadcastChannel',
    'MAX_UNDO_HISTORY',
    'atomic',
    'logged_action',
    'ActionInput',
    'PotWinnerInput',
    'SettingsInput',
]
