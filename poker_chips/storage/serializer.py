"""
状态序列化器

将GameState序列化为JSON文本并无损还原，供持久化和观战广播使用。
"""

import json
from typing import Any, Dict

from ..core.exceptions import SerializationError, DeserializationError
from ..core.state import GameState

__all__ = ['StateSerializer']

_DECODE_ERRORS = (json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError)


class StateSerializer:
    """
    状态序列化器

    负责GameState与JSON文本之间的转换。
    """

    @staticmethod
    def serialize(state: GameState) -> str:
        """
        将状态序列化为JSON字符串

        Raises:
            SerializationError: 序列化失败时抛出
        """
        try:
            return json.dumps(state.to_dict(), ensure_ascii=False)
        except (TypeError, ValueError, AttributeError) as e:
            raise SerializationError(f"状态序列化失败: {str(e)}") from e

    @staticmethod
    def deserialize(json_str: str) -> GameState:
        """
        从JSON字符串还原状态

        Raises:
            DeserializationError: 数据损坏或格式不兼容时抛出
        """
        try:
            data = json.loads(json_str)
        except _DECODE_ERRORS as e:
            raise DeserializationError(f"状态反序列化失败: {str(e)}") from e
        return StateSerializer.from_dict(data)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> GameState:
        """
        从纯dict还原状态

        Raises:
            DeserializationError: 字段缺失或取值非法时抛出
        """
        if not isinstance(data, dict):
            raise DeserializationError(f"状态数据必须是对象，实际为 {type(data).__name__}")
        try:
            return GameState.from_dict(data)
        except _DECODE_ERRORS as e:
            raise DeserializationError(f"状态反序列化失败: {str(e)}") from e
