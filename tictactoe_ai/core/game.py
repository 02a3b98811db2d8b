"""
Offline game flow: a human (X) against the computer (O).

GameSession keeps the real board, the move history and the result. The
computer's moves and the human's hints are delegated to an MCTSAgent,
which only ever sees a snapshot of the board.
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional, Tuple

from tictactoe_ai.core.board import Board, apply_move, create_board, is_full
from tictactoe_ai.core.constants import (
    EMPTY, PLAYER_X, PLAYER_O, NO_MOVE, DEFAULT_BOARD_SIZE, DEFAULT_DIFFICULTY,
    MIN_BOARD_SIZE, MAX_BOARD_SIZE, other_player
)
from tictactoe_ai.core.exceptions import GameOverError, NotYourTurnError
from tictactoe_ai.core.win import GameResult, detect_win
from tictactoe_ai.mcts.agent import MCTSAgent
from tictactoe_ai.mcts.config import MCTSConfig


HUMAN = PLAYER_X
COMPUTER = PLAYER_O


class GameSession:
    """
    A single-player game against the MCTS opponent.

    The human always plays X and moves first.
    """

    def __init__(
        self,
        size: int = DEFAULT_BOARD_SIZE,
        difficulty: int = DEFAULT_DIFFICULTY,
        config: Optional[MCTSConfig] = None,
        seed: Optional[int] = None,
        verbose: bool = False,
    ):
        """
        Start a new game.

        Args:
            size: Side length of the board
            difficulty: Rollout budget for the computer's moves
            config: MCTS configuration (overrides difficulty and seed when given)
            seed: Seed for the computer's rollouts
            verbose: Whether the computer prints its search summary
        """
        if not MIN_BOARD_SIZE <= size <= MAX_BOARD_SIZE:
            raise ValueError(f"size must be between {MIN_BOARD_SIZE} and {MAX_BOARD_SIZE}")

        self.size = size
        self.config = config or MCTSConfig.from_difficulty(difficulty, seed=seed)
        self.agent = MCTSAgent(config=self.config, name="Computer", verbose=verbose)

        self._board: Board = create_board(size)
        self._history: List[int] = []
        self._current_player = HUMAN
        self._result = GameResult.IN_PROGRESS
        self._winner: Optional[str] = None
        self._winning_line: Tuple[int, ...] = ()

    @property
    def board(self) -> Board:
        return self._board

    @property
    def current_player(self) -> str:
        return self._current_player

    @property
    def move_history(self) -> Tuple[int, ...]:
        return tuple(self._history)

    @property
    def result(self) -> GameResult:
        return self._result

    @property
    def winner(self) -> Optional[str]:
        return self._winner

    @property
    def winning_line(self) -> Tuple[int, ...]:
        return self._winning_line

    @property
    def is_over(self) -> bool:
        return self._result != GameResult.IN_PROGRESS

    def _play(self, index: int, player: str) -> None:
        if self.is_over:
            raise GameOverError("The game is already over")
        if player != self._current_player:
            raise NotYourTurnError(f"It is {self._current_player}'s turn")

        self._board = apply_move(self._board, index, player)
        self._history.append(index)

        win_info = detect_win(self._board, player, self.size)
        if win_info:
            self._result = GameResult.WINNER
            self._winner = player
            self._winning_line = win_info.winning_line
        elif is_full(self._board):
            self._result = GameResult.DRAW
        else:
            self._current_player = other_player(player)

    def play_human_move(self, index: int) -> None:
        """
        Place the human's X.

        Raises:
            InvalidMoveError: If the cell is out of range or taken
            GameOverError: If the game has finished
            NotYourTurnError: If the computer is to move
        """
        self._play(index, HUMAN)

    def play_computer_move(self) -> int:
        """
        Let the computer search for and play its move.

        Returns:
            The cell played, or NO_MOVE if the engine found none (the game
            is then recorded as a draw)
        """
        if self.is_over:
            raise GameOverError("The game is already over")
        if self._current_player != COMPUTER:
            raise NotYourTurnError(f"It is {self._current_player}'s turn")

        move = self.agent.select_move(self._board, COMPUTER)
        if move == NO_MOVE:
            self._result = GameResult.DRAW
            return NO_MOVE

        self._play(move, COMPUTER)
        return move

    def hint(self) -> int:
        """
        Suggest a move for the human with the reduced hint budget.

        Returns:
            Suggested cell, or NO_MOVE when the game is over, it is not the
            human's turn, or no move exists
        """
        if self.is_over or self._current_player != HUMAN:
            return NO_MOVE
        return self.agent.suggest_hint(self._board, HUMAN)

    def undo(self) -> bool:
        """
        Take back the computer's last move and the human's move before it.

        Returns:
            True if two moves were removed
        """
        if len(self._history) < 2 or self.is_over:
            return False

        board = list(self._board)
        for _ in range(2):
            board[self._history.pop()] = EMPTY
        self._board = tuple(board)
        self._current_player = HUMAN
        return True

    def to_dict(self) -> Dict[str, Any]:
        """Summarize the game as a plain dictionary."""
        return {
            "size": self.size,
            "board": list(self._board),
            "history": list(self._history),
            "current_player": self._current_player,
            "result": self._result.name,
            "winner": self._winner,
            "winning_line": list(self._winning_line),
            "difficulty": self.config.rollouts,
        }
