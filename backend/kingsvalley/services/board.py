"""Board engine: sliding-move rules and win detection.

Pure functions over a 5x5 grid of ``Cell`` values. Nothing here mutates the
board it is given or raises on bad input; illegal requests come back as
``None`` and the caller decides what to do.
"""

from typing import Optional, Sequence

from kingsvalley.models import BOARD_SIZE, CENTER, Board, Cell, Position, Side

# The eight unit steps a piece may slide along
DIRECTIONS = (
    (-1, 0), (1, 0), (0, -1), (0, 1),
    (-1, -1), (-1, 1), (1, -1), (1, 1),
)

_OWNERS = {
    Cell.RED_PIECE: Side.RED,
    Cell.RED_KING: Side.RED,
    Cell.BLUE_PIECE: Side.BLUE,
    Cell.BLUE_KING: Side.BLUE,
}


def new_board() -> Board:
    """Starting layout: each side's king flanked by its four pieces on its home row."""
    r, rk = Cell.RED_PIECE, Cell.RED_KING
    b, bk = Cell.BLUE_PIECE, Cell.BLUE_KING
    empty_row = [Cell.EMPTY] * BOARD_SIZE
    return [
        [r, r, rk, r, r],
        list(empty_row),
        list(empty_row),
        list(empty_row),
        [b, b, bk, b, b],
    ]


def owner_of(cell: Cell) -> Optional[Side]:
    return _OWNERS.get(cell)


def is_king(cell: Cell) -> bool:
    return cell in (Cell.RED_KING, Cell.BLUE_KING)


def in_bounds(pos: Sequence[int]) -> bool:
    return 0 <= pos[0] < BOARD_SIZE and 0 <= pos[1] < BOARD_SIZE


def _sign(n: int) -> int:
    return (n > 0) - (n < 0)


def slide_destination(board: Board, start: Position, direction: Position) -> Position:
    """Walk from ``start`` along ``direction`` to the last empty in-bounds square.

    Returns ``start`` itself when the very first step is off the board or
    occupied, or when ``direction`` is not one of the eight unit steps.
    """
    if tuple(direction) not in DIRECTIONS:
        return (start[0], start[1])
    dr, dc = direction
    row, col = start
    while True:
        nxt = (row + dr, col + dc)
        if not in_bounds(nxt) or board[nxt[0]][nxt[1]] != Cell.EMPTY:
            return (row, col)
        row, col = nxt


def resolve_move(board: Board, start: Position, target: Position, side: Side,
                 slide_to_end: bool = False) -> Optional[Position]:
    """Return the square a piece at ``start`` lands on when moved towards ``target``.

    By default ``target`` is the landing square and must lie on the open
    stretch the piece can reach. With ``slide_to_end`` the target only picks
    the direction and the piece slides as far as it can.
    """
    if not (in_bounds(start) and in_bounds(target)):
        return None
    if owner_of(board[start[0]][start[1]]) is not side:
        return None

    row_diff = target[0] - start[0]
    col_diff = target[1] - start[1]
    straight = row_diff == 0 or col_diff == 0
    diagonal = abs(row_diff) == abs(col_diff)
    if not (straight or diagonal):
        return None

    direction = (_sign(row_diff), _sign(col_diff))
    if direction == (0, 0):
        return None
    start = (start[0], start[1])
    farthest = slide_destination(board, start, direction)
    if farthest == start:
        return None
    if slide_to_end:
        return farthest

    # reach along the ray, in steps
    reach = max(abs(farthest[0] - start[0]), abs(farthest[1] - start[1]))
    if max(abs(row_diff), abs(col_diff)) > reach:
        return None
    return (target[0], target[1])


def check_win(board: Board, last_moved_to: Position) -> Optional[Side]:
    """The side whose king stands on the center after landing there, if any."""
    if tuple(last_moved_to) != CENTER:
        return None
    cell = board[CENTER[0]][CENTER[1]]
    if not is_king(cell):
        return None
    return owner_of(cell)
