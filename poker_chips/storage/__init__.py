"""
持久化层.

提供状态序列化、键值存储和会话仓库.
"""

from .serializer import StateSerializer
from .store import KeyValueStore, MemoryStore, JsonFileStore
from .repository import SessionSnapshot, SessionRepository, DEFAULT_STORAGE_KEY

__all__ = [
    'StateSerializer',
    'KeyValueStore',
    'MemoryStore',
    'JsonFileStore',
    'SessionSnapshot',
    'SessionRepository',
    'DEFAULT_STORAGE_KEY',
]
