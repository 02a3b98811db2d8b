"""
TicTacToe AI Core Package

This package contains the game logic, including:
- Board representation and move helpers
- Win detection for NxN boards
- The offline game session against the computer
- Constants and exceptions

All core components can be imported directly from this package.
"""

# Constants
from tictactoe_ai.core.constants import (
    PLAYER_X, PLAYER_O, EMPTY, NO_MOVE,
    DEFAULT_BOARD_SIZE, DEFAULT_DIFFICULTY, other_player
)

# Exceptions
from tictactoe_ai.core.exceptions import (
    TicTacToeError, InvalidBoardError, InvalidMoveError,
    GameOverError, NotYourTurnError
)

# Board
from tictactoe_ai.core.board import (
    Board, create_board, board_size, validate_board, legal_moves, is_full,
    apply_move, index_to_coords, coords_to_index,
    board_from_string, board_to_string
)

# Win detection
from tictactoe_ai.core.win import (
    GameResult, WinInfo, detect_win, find_winner, game_outcome
)

# Game session
from tictactoe_ai.core.game import GameSession

__all__ = [
    # Constants
    'PLAYER_X', 'PLAYER_O', 'EMPTY', 'NO_MOVE',
    'DEFAULT_BOARD_SIZE', 'DEFAULT_DIFFICULTY', 'other_player',

    # Exceptions
    'TicTacToeError', 'InvalidBoardError', 'InvalidMoveError',
    'GameOverError', 'NotYourTurnError',

    # Board
    'Board', 'create_board', 'board_size', 'validate_board', 'legal_moves',
    'is_full', 'apply_move', 'index_to_coords', 'coords_to_index',
    'board_from_string', 'board_to_string',

    # Win detection
    'GameResult', 'WinInfo', 'detect_win', 'find_winner', 'game_outcome',

    # Game
    'GameSession',
]
