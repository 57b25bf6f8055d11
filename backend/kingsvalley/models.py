import time
from dataclasses import dataclass, field
from enum import IntEnum, StrEnum
from typing import List, Optional, Tuple


BOARD_SIZE = 5
CENTER = (2, 2)  # King's Valley
SEAT_COUNT = 2

Position = Tuple[int, int]
Board = List[List['Cell']]


class Side(StrEnum):
    RED = 'red'
    BLUE = 'blue'

    @property
    def opponent(self) -> 'Side':
        return Side.BLUE if self is Side.RED else Side.RED

    @classmethod
    def for_seat(cls, seat: int) -> 'Side':
        return cls.RED if seat == 0 else cls.BLUE


class Cell(IntEnum):
    EMPTY = 0
    RED_PIECE = 1
    BLUE_PIECE = 2
    RED_KING = 3
    BLUE_KING = 4


@dataclass
class Session:
    """Authoritative state of one room.

    ``seats`` always has two slots; slot 0 plays Red and slot 1 plays Blue.
    A ``None`` slot is free.
    """
    room_id: str
    board: Board
    seats: List[Optional[str]] = field(default_factory=lambda: [None] * SEAT_COUNT)
    turn: Side = Side.RED
    winner: Optional[Side] = None
    created_at: float = field(default_factory=time.time)

    @property
    def occupants(self) -> List[str]:
        return [sid for sid in self.seats if sid is not None]

    @property
    def status(self) -> str:
        if self.winner is not None:
            return 'finished'
        count = len(self.occupants)
        if count == 0:
            return 'empty'
        if count == 1:
            return 'waiting_for_opponent'
        return 'in_progress'

    def snapshot(self):
        """Copy of the game state safe to hand to clients."""
        return {
            'board': [[int(cell) for cell in row] for row in self.board],
            'turn': str(self.turn),
            'winner': str(self.winner) if self.winner else None,
        }

    def to_dict(self):
        data = self.snapshot()
        data.update({
            'roomCode': self.room_id,
            'status': self.status,
            'seats': [sid is not None for sid in self.seats],
            'createdAt': self.created_at,
        })
        return data
