"""
Board helpers for NxN tic-tac-toe.

A board is a flat, row-major sequence of N*N cells, each one of EMPTY,
PLAYER_X or PLAYER_O (``index = row * size + col``). Boards handed around
by this package are tuples, so a snapshot can be shared without anyone
mutating it; every "change" produces a new tuple.
"""
from __future__ import annotations
from typing import List, Sequence, Tuple
import math

from tictactoe_ai.core.constants import (
    EMPTY, PLAYER_X, PLAYER_O, CELL_VALUES, CELL_CHARS
)
from tictactoe_ai.core.exceptions import InvalidBoardError, InvalidMoveError


Board = Tuple[str, ...]

_CHAR_TO_CELL = {char: cell for cell, char in CELL_CHARS.items()}
_CHAR_TO_CELL.update({"x": PLAYER_X, "o": PLAYER_O, "-": EMPTY, "_": EMPTY})


def create_board(size: int) -> Board:
    """
    Create an empty board.

    Args:
        size: Length of one side of the board

    Returns:
        Tuple of size*size empty cells
    """
    if size <= 0:
        raise InvalidBoardError(f"Board size must be positive, got {size}")
    return (EMPTY,) * (size * size)


def board_size(board: Sequence[str]) -> int:
    """
    Get the side length of a board.

    Raises:
        InvalidBoardError: If the number of cells is not a positive perfect square
    """
    cells = len(board)
    size = math.isqrt(cells)
    if cells == 0 or size * size != cells:
        raise InvalidBoardError(f"Board has {cells} cells, which is not a perfect square")
    return size


def validate_board(board: Sequence[str]) -> int:
    """
    Check that a board is square and only holds known symbols.

    Returns:
        The board's side length
    """
    size = board_size(board)
    for index, cell in enumerate(board):
        if cell not in CELL_VALUES:
            raise InvalidBoardError(f"Unknown symbol {cell!r} at index {index}")
    return size


def legal_moves(board: Sequence[str]) -> List[int]:
    """Get the indices of all empty cells, in ascending order."""
    return [index for index, cell in enumerate(board) if cell == EMPTY]


def is_full(board: Sequence[str]) -> bool:
    """Check whether every cell is occupied."""
    return all(cell != EMPTY for cell in board)


def apply_move(board: Sequence[str], index: int, symbol: str) -> Board:
    """
    Place a symbol on a copy of the board.

    Args:
        board: Board to copy (left untouched)
        index: Cell to fill
        symbol: PLAYER_X or PLAYER_O

    Returns:
        New board with the move applied

    Raises:
        InvalidMoveError: If the index is out of range or the cell is occupied
    """
    if symbol not in (PLAYER_X, PLAYER_O):
        raise InvalidMoveError(f"Not a player symbol: {symbol!r}")
    if not 0 <= index < len(board):
        raise InvalidMoveError(f"Cell {index} is outside the board")
    if board[index] != EMPTY:
        raise InvalidMoveError(f"Cell {index} is already taken by {board[index]}")

    new_board = list(board)
    new_board[index] = symbol
    return tuple(new_board)


def index_to_coords(index: int, size: int) -> Tuple[int, int]:
    """Convert a cell index to (row, col)."""
    return divmod(index, size)


def coords_to_index(row: int, col: int, size: int) -> int:
    """Convert (row, col) to a cell index."""
    if not (0 <= row < size and 0 <= col < size):
        raise InvalidMoveError(f"({row}, {col}) is outside a {size}x{size} board")
    return row * size + col


def board_from_string(text: str) -> Board:
    """
    Parse a compact board string.

    One character per cell: ``X``, ``O`` and ``.`` (``-`` and ``_`` also
    mean empty). Rows may be separated with ``/`` or whitespace, e.g.
    ``"XX./OO./..."``.
    """
    cells = []
    for char in text:
        if char in "/ \t\r\n":
            continue
        if char not in _CHAR_TO_CELL:
            raise InvalidBoardError(f"Unknown board character {char!r}")
        cells.append(_CHAR_TO_CELL[char])

    board = tuple(cells)
    board_size(board)
    return board


def board_to_string(board: Sequence[str]) -> str:
    """Format a board in the compact form read by board_from_string."""
    size = board_size(board)
    rows = []
    for row in range(size):
        cells = board[row * size:(row + 1) * size]
        rows.append("".join(CELL_CHARS[cell] for cell in cells))
    return "/".join(rows)
