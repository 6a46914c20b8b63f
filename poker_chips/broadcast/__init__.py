"""Read-only spectator broadcast."""

from .room import (
    Room, RoomRegistry, RoomChannel,
    generate_room_code, normalize_room_code,
    ROOM_CODE_CHARS, ROOM_CODE_LENGTH,
)

__all__ = [
    'Room',
    'RoomRegistry',
    'RoomChannel',
    'generate_room_code',
    'normalize_room_code',
    'ROOM_CODE_CHARS',
    'ROOM_CODE_LENGTH',
]
