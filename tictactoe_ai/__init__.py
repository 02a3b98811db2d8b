"""
TicTacToe AI - an NxN tic-tac-toe engine with a Monte Carlo Tree Search opponent.

This package provides the board model and win detection, an MCTS engine
that picks moves for the computer and hints for the human, and a
single-player game session that ties them together.
"""

__version__ = "0.1.0"
__author__ = "TicTacToe AI Team"

# Make key components available at package level
from tictactoe_ai.core.game import GameSession
from tictactoe_ai.core.win import GameResult, detect_win
from tictactoe_ai.mcts.search import SearchTree, construct_search, find_best_move

# Version info as a tuple for programmatic access
VERSION_INFO = tuple(map(int, __version__.split('.')))
