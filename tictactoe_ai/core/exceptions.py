"""
Exceptions raised by the tic-tac-toe game layer.

Everything subclasses ValueError so callers that already guard game input
with ``except ValueError`` keep working. The search engine never raises for
"no legal move"; it returns NO_MOVE instead.
"""


class TicTacToeError(ValueError):
    """Base class for all game errors."""


class InvalidBoardError(TicTacToeError):
    """The board is not a square grid of valid cell symbols."""


class InvalidMoveError(TicTacToeError):
    """The move is out of range or targets an occupied cell."""


class GameOverError(TicTacToeError):
    """A move was attempted after the game finished."""


class NotYourTurnError(TicTacToeError):
    """A player tried to move out of turn."""
