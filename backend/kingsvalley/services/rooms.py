"""Room manager: the only code that mutates game sessions.

Maps room codes to sessions, seats anonymous connections (socket ids), and
applies moves through the board engine. All state lives on the manager
instance so independent managers can coexist.
"""

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from kingsvalley.errors import Err, ErrorKind, Ok
from kingsvalley.models import Cell, Position, Session, Side
from kingsvalley.services import board as engine

logger = logging.getLogger(__name__)

MIN_ROOM_CODE_LENGTH = 4


@dataclass
class Departure:
    room_id: str
    seat: int
    remaining: List[str]
    room_deleted: bool


@dataclass
class Joined:
    room_id: str
    seat: int
    snapshot: dict
    others: List[str]
    departures: List[Departure] = field(default_factory=list)

    @property
    def side(self) -> Side:
        return Side.for_seat(self.seat)


@dataclass
class Moved:
    room_id: str
    snapshot: dict
    last_move: Dict[str, List[int]]
    occupants: List[str]


def normalize_room_code(raw) -> Optional[str]:
    if not isinstance(raw, str):
        return None
    code = raw.strip().upper()
    if len(code) < MIN_ROOM_CODE_LENGTH:
        return None
    return code


class RoomManager:
    def __init__(self, slide_to_end: bool = False):
        self.slide_to_end = slide_to_end
        self.sessions: Dict[str, Session] = {}
        self._seated: Dict[str, Tuple[str, int]] = {}
        self._lock = threading.Lock()

    # -- reads --
    def get(self, room_id: str) -> Optional[Session]:
        code = normalize_room_code(room_id)
        return self.sessions.get(code) if code else None

    def room_count(self) -> int:
        return len(self.sessions)

    def locate(self, sid: str) -> Optional[Tuple[str, int]]:
        return self._seated.get(sid)

    # -- game actions --
    def join(self, room_id, sid: str):
        code = normalize_room_code(room_id)
        if code is None:
            return Err(ErrorKind.INVALID_ROOM_CODE)

        with self._lock:
            session = self.sessions.get(code)
            if session is not None and sid in session.seats:
                # Already seated here; nothing changes and nobody is told
                seat = session.seats.index(sid)
                return Ok(Joined(code, seat, session.snapshot(), []))
            if session is not None and None not in session.seats:
                return Err(ErrorKind.ROOM_FULL)

            # A connection plays in one room at a time
            departures = self._leave_locked(sid)

            if session is None:
                session = Session(room_id=code, board=engine.new_board())
                self.sessions[code] = session
                logger.info(f"[room-create] room={code}")

            seat = session.seats.index(None)
            others = list(session.occupants)
            session.seats[seat] = sid
            self._seated[sid] = (code, seat)
            logger.info(f"[room-join] room={code} seat={seat} sid={sid}")
            return Ok(Joined(code, seat, session.snapshot(), others, departures))

    def move(self, sid: str, start: Position, target: Position):
        with self._lock:
            located = self._seated.get(sid)
            session = self.sessions.get(located[0]) if located else None
            if session is None:
                return Err(ErrorKind.NO_ACTIVE_ROOM)

            side = Side.for_seat(located[1])
            if session.winner is not None or side is not session.turn:
                return Err(ErrorKind.NOT_YOUR_TURN)

            destination = engine.resolve_move(
                session.board, start, target, side, slide_to_end=self.slide_to_end
            )
            if destination is None:
                return Err(ErrorKind.ILLEGAL_MOVE)

            board = session.board
            board[destination[0]][destination[1]] = board[start[0]][start[1]]
            board[start[0]][start[1]] = Cell.EMPTY

            winner = engine.check_win(board, destination)
            if winner is not None:
                session.winner = winner
                logger.info(f"[game-won] room={session.room_id} winner={winner}")
            else:
                session.turn = session.turn.opponent

            last_move = {'from': [start[0], start[1]], 'to': [destination[0], destination[1]]}
            return Ok(Moved(session.room_id, session.snapshot(), last_move, session.occupants))

    def leave(self, sid: str) -> List[Departure]:
        with self._lock:
            return self._leave_locked(sid)

    def sweep(self, now: float = None, retention: float = 3600) -> List[str]:
        """Delete rooms with no occupants created more than ``retention`` seconds ago."""
        now = time.time() if now is None else now
        with self._lock:
            stale = [
                code for code, session in self.sessions.items()
                if not session.occupants and now - session.created_at > retention
            ]
            for code in stale:
                del self.sessions[code]
                logger.info(f"[sweep] room={code} reaped")
            return stale

    # -- internals --
    def _leave_locked(self, sid: str) -> List[Departure]:
        self._seated.pop(sid, None)
        departures = []
        # Scan every room; a misbehaving client may be referenced more than once
        for code, session in list(self.sessions.items()):
            for seat, occupant in enumerate(session.seats):
                if occupant != sid:
                    continue
                session.seats[seat] = None
                remaining = session.occupants
                deleted = not remaining
                if deleted:
                    del self.sessions[code]
                    logger.info(f"[room-delete] room={code}")
                departures.append(Departure(code, seat, remaining, deleted))
        return departures
