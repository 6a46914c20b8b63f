"""Spectator rooms for read-only viewers.

The host is the single writer of a room. Viewers receive whole-state
snapshots as plain dicts, each listener getting its own copy.
"""

import copy
import logging
import random
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from ..core.exceptions import RoomNotFoundError

ROOM_CODE_CHARS = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
ROOM_CODE_LENGTH = 6

StateListener = Callable[[Dict[str, Any]], None]


def generate_room_code(rng: Optional[random.Random] = None) -> str:
    """Generate a 6 character room code without ambiguous characters."""
    rng = rng or random.Random()
    return "".join(rng.choice(ROOM_CODE_CHARS) for _ in range(ROOM_CODE_LENGTH))


def normalize_room_code(code: str) -> str:
    return code.strip().upper()


@dataclass
class Room:
    """A published game state and the viewers following it."""
    code: str
    state: Dict[str, Any]
    updated_at: datetime = field(default_factory=datetime.now)
    listeners: List[StateListener] = field(default_factory=list)


class RoomRegistry:
    """In-memory registry of spectator rooms.

    Attributes:
        rooms: Rooms keyed by upper-case code.
    """

    def __init__(self, rng: Optional[random.Random] = None,
                 logger: Optional[logging.Logger] = None):
        self._rng = rng or random.Random()
        self._logger = logger or logging.getLogger(__name__)
        self.rooms: Dict[str, Room] = {}

    def create_room(self, state: Dict[str, Any]) -> str:
        """Publish an initial state and return the new room code."""
        code = generate_room_code(self._rng)
        while code in self.rooms:
            code = generate_room_code(self._rng)
        self.rooms[code] = Room(code=code, state=copy.deepcopy(state))
        self._logger.info(f"Created room {code}")
        return code

    def update_room(self, code: str, state: Dict[str, Any]) -> None:
        """Replace the room's state and notify every viewer.

        Raises:
            RoomNotFoundError: If the room does not exist.
        """
        room = self._get(code)
        room.state = copy.deepcopy(state)
        room.updated_at = datetime.now()

        self._logger.debug(f"Pushing room {room.code} to {len(room.listeners)} listeners")
        for listener in list(room.listeners):
            try:
                listener(copy.deepcopy(room.state))
            except Exception as e:
                self._logger.error(f"Error in room listener: {e}")

    def fetch_room(self, code: str) -> Optional[Dict[str, Any]]:
        room = self.rooms.get(normalize_room_code(code))
        if room is None:
            return None
        return copy.deepcopy(room.state)

    def subscribe(self, code: str, listener: StateListener) -> Callable[[], None]:
        """Follow a room.

        Returns:
            A callable that removes the listener again.

        Raises:
            RoomNotFoundError: If the room does not exist.
        """
        room = self._get(code)
        room.listeners.append(listener)

        def unsubscribe() -> None:
            if listener in room.listeners:
                room.listeners.remove(listener)

        return unsubscribe

    def delete_room(self, code: str) -> None:
        if self.rooms.pop(normalize_room_code(code), None) is not None:
            self._logger.info(f"Deleted room {normalize_room_code(code)}")

    def _get(self, code: str) -> Room:
        room = self.rooms.get(normalize_room_code(code))
        if room is None:
            raise RoomNotFoundError(code)
        return room


class RoomChannel:
    """Adapts one room to the session's broadcast hook."""

    def __init__(self, registry: RoomRegistry, code: str):
        self.registry = registry
        self.code = normalize_room_code(code)

    def publish(self, state: Dict[str, Any]) -> None:
        self.registry.update_room(self.code, state)
