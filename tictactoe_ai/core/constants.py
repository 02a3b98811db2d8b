"""
Constants for the tic-tac-toe game.

This module defines the cell symbols, the engine's "no move" sentinel,
board size limits and the difficulty defaults used by the offline game.
"""
from typing import Final, Tuple


# Cell symbols
PLAYER_X: Final[str] = "X"
PLAYER_O: Final[str] = "O"
EMPTY: Final[str] = ""

PLAYERS: Final[Tuple[str, str]] = (PLAYER_X, PLAYER_O)
CELL_VALUES: Final[Tuple[str, str, str]] = (EMPTY, PLAYER_X, PLAYER_O)

# Compact text form of each cell (for board_to_string / board_from_string)
CELL_CHARS: Final[dict] = {
    EMPTY: ".",
    PLAYER_X: "X",
    PLAYER_O: "O",
}

# Returned by the search engine when no legal move exists
NO_MOVE: Final[int] = -1

# Board size limits for sessions and the command line
MIN_BOARD_SIZE: Final[int] = 3
MAX_BOARD_SIZE: Final[int] = 7
DEFAULT_BOARD_SIZE: Final[int] = 3

# Rollout budgets
DEFAULT_DIFFICULTY: Final[int] = 2000
HINT_FRACTION: Final[float] = 0.5
HINT_ROLLOUT_CAP: Final[int] = 500

# UCB1 exploration constant (~sqrt(2))
EXPLORATION_CONSTANT: Final[float] = 1.414

# Reward values produced by a rollout
WIN_REWARD: Final[float] = 1.0
LOSS_REWARD: Final[float] = 0.0
DRAW_REWARD: Final[float] = 0.5


def other_player(symbol: str) -> str:
    """Return the symbol that moves after ``symbol``."""
    if symbol == PLAYER_X:
        return PLAYER_O
    if symbol == PLAYER_O:
        return PLAYER_X
    raise ValueError(f"Not a player symbol: {symbol!r}")
