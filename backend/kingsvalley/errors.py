"""Tagged results returned by the room manager.

Every game action answers with either ``Ok(value)`` or ``Err(kind)``; the
socket layer decides from the tag whether to broadcast or reply to the
sender only.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorKind(Enum):
    INVALID_ROOM_CODE = 'Invalid room code'
    ROOM_FULL = 'Room is full'
    NO_ACTIVE_ROOM = 'Invalid room'
    NOT_YOUR_TURN = 'Not your turn'
    ILLEGAL_MOVE = 'Invalid move'
    INTERNAL_ERROR = 'Internal server error'

    @property
    def message(self) -> str:
        return self.value

    @property
    def code(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class Ok:
    value: Any = None


@dataclass(frozen=True)
class Err:
    kind: ErrorKind

    def to_dict(self):
        return {'message': self.kind.message, 'code': self.kind.code}
