"""
Win detection for NxN tic-tac-toe.

A player wins by owning a complete row, column or one of the two full
diagonals. These functions are pure: they read the board and never
modify it, so the search engine can call them on its private snapshots.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Sequence, Tuple

from tictactoe_ai.core.constants import PLAYER_X, PLAYER_O, EMPTY


class GameResult(Enum):
    """Enum representing possible game results."""
    IN_PROGRESS = auto()
    WINNER = auto()
    DRAW = auto()


@dataclass(frozen=True)
class WinInfo:
    """A completed line: the cell indices, in scan order."""
    winning_line: Tuple[int, ...]


def _scan_line(board: Sequence[str], player: str, indices: Sequence[int], size: int) -> Optional[WinInfo]:
    # Track the current run of `player`; a run of `size` is a complete line.
    run = []
    for index in indices:
        if board[index] == player:
            run.append(index)
        else:
            run = []
        if len(run) == size:
            return WinInfo(winning_line=tuple(run))
    return None


def detect_win(board: Sequence[str], player: str, size: int) -> Optional[WinInfo]:
    """
    Look for a complete line owned by ``player``.

    Rows are scanned first (top to bottom), then columns (left to right),
    then the main diagonal and finally the anti-diagonal. The first
    complete line found is returned.

    Args:
        board: Row-major board of size*size cells
        player: Symbol to look for
        size: Side length of the board

    Returns:
        WinInfo for the first winning line, or None
    """
    for row in range(size):
        found = _scan_line(board, player, [row * size + col for col in range(size)], size)
        if found:
            return found

    for col in range(size):
        found = _scan_line(board, player, [row * size + col for row in range(size)], size)
        if found:
            return found

    main_diagonal = [i * size + i for i in range(size)]
    found = _scan_line(board, player, main_diagonal, size)
    if found:
        return found

    anti_diagonal = [i * size + (size - 1 - i) for i in range(size)]
    return _scan_line(board, player, anti_diagonal, size)


def find_winner(board: Sequence[str], size: int) -> Optional[str]:
    """Get the symbol that owns a complete line (X checked first), or None."""
    for player in (PLAYER_X, PLAYER_O):
        if detect_win(board, player, size):
            return player
    return None


def game_outcome(board: Sequence[str], size: int) -> GameResult:
    """Classify a board as won, drawn (full, no line) or still in progress."""
    if find_winner(board, size) is not None:
        return GameResult.WINNER
    if all(cell != EMPTY for cell in board):
        return GameResult.DRAW
    return GameResult.IN_PROGRESS
