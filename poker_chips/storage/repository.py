"""
会话持久化

把会话的设置、当前状态和撤销历史作为一个JSON文档保存到键值存储中。
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..core.config import GameSettings
from ..core.exceptions import DeserializationError, SerializationError
from ..core.state import GameState
from .serializer import StateSerializer
from .store import KeyValueStore

__all__ = ['SessionSnapshot', 'SessionRepository', 'DEFAULT_STORAGE_KEY']

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "poker-game-storage"


@dataclass
class SessionSnapshot:
    """会话的可持久化部分"""

    settings: Optional[GameSettings] = None
    state: Optional[GameState] = None
    undo_history: List[GameState] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "settings": self.settings.to_dict() if self.settings else None,
            "state": self.state.to_dict() if self.state else None,
            "undoHistory": [s.to_dict() for s in self.undo_history],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SessionSnapshot':
        """
        Raises:
            DeserializationError: 数据损坏时抛出
        """
        if not isinstance(data, dict):
            raise DeserializationError("会话数据必须是对象")
        try:
            settings = GameSettings.from_dict(data["settings"]) if data.get("settings") else None
        except (KeyError, TypeError, ValueError) as e:
            raise DeserializationError(f"会话设置损坏: {str(e)}") from e

        state = StateSerializer.from_dict(data["state"]) if data.get("state") else None
        history = [StateSerializer.from_dict(s) for s in data.get("undoHistory") or []]
        return cls(settings=settings, state=state, undo_history=history)


class SessionRepository:
    """
    会话仓库

    Args:
        store: 键值存储
        key: 存储键名
    """

    def __init__(self, store: KeyValueStore, key: str = DEFAULT_STORAGE_KEY):
        self.store = store
        self.key = key

    def save(self, snapshot: SessionSnapshot) -> None:
        try:
            payload = json.dumps(snapshot.to_dict(), ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"会话序列化失败: {str(e)}") from e
        self.store.set(self.key, payload)

    def load(self) -> Optional[SessionSnapshot]:
        """
        读取会话

        Returns:
            保存的会话，从未保存过时为None

        Raises:
            DeserializationError: 保存的数据损坏时抛出
        """
        payload = self.store.get(self.key)
        if payload is None:
            return None
        try:
            data = json.loads(payload)
        except json.JSONDecodeError as e:
            raise DeserializationError(f"会话数据不是有效的JSON: {str(e)}") from e
        return SessionSnapshot.from_dict(data)

    def clear(self) -> None:
        self.store.delete(self.key)
        logger.debug("已清除会话 %s", self.key)
