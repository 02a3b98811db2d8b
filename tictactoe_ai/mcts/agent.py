"""
Monte Carlo Tree Search agent for tic-tac-toe.

This module provides the MCTSAgent class, a ready-to-use computer player
that picks moves and hints with Monte Carlo Tree Search, plus a uniformly
random baseline player. Each call builds a fresh SearchTree from a
snapshot of the board it is given.
"""
from typing import Any, Dict, List, Optional, Sequence, Tuple
import json
import random
import time

from tictactoe_ai.core.board import board_size, legal_moves
from tictactoe_ai.core.constants import NO_MOVE, other_player
from tictactoe_ai.mcts.config import MCTSConfig
from tictactoe_ai.mcts.search import SearchTree


class MCTSAgent:
    """
    Monte Carlo Tree Search agent for playing tic-tac-toe.

    The agent runs a full-budget search for its own moves and a reduced
    budget for hints, and keeps statistics about its last search.
    """

    def __init__(
        self,
        config: Optional[MCTSConfig] = None,
        name: str = "MCTS Agent",
        verbose: bool = False
    ):
        """
        Initialize an MCTS agent.

        Args:
            config: MCTS configuration parameters
            name: Name of the agent
            verbose: Whether to print a summary after each search
        """
        self.config = config or MCTSConfig()
        self.name = name
        self.verbose = verbose

        # One generator for the agent's lifetime so a seeded agent replays exactly
        self.rng = random.Random(self.config.seed)

        # Statistics from the most recent search
        self.last_stats: Dict[str, Any] = {}

        # History of all moves and their statistics
        self.move_history: List[Tuple[int, Dict[str, Any]]] = []

    def _search(self, board: Sequence[str], player: str, rollouts: int) -> Tuple[int, SearchTree]:
        size = board_size(board)
        tree = SearchTree(
            board, player, other_player(player), size,
            config=self.config, rng=self.rng
        )
        move = tree.find_best_move(rollouts)
        return move, tree

    def select_move(self, board: Sequence[str], player: str) -> int:
        """
        Select a move using Monte Carlo Tree Search.

        Args:
            board: Current board
            player: Symbol the agent plays

        Returns:
            Index of the chosen cell, or NO_MOVE if the board is full
        """
        start_time = time.time()
        move, tree = self._search(board, player, self.config.rollouts)

        stats = tree.statistics()
        stats["total_time"] = time.time() - start_time
        stats["hint"] = False
        self.last_stats = stats
        self.move_history.append((move, stats))

        if self.verbose:
            self._print_search_info(move, stats)

        return move

    def suggest_hint(self, board: Sequence[str], player: str) -> int:
        """
        Suggest a move for ``player`` with the reduced hint budget.

        Returns:
            Index of the suggested cell, or NO_MOVE
        """
        move, tree = self._search(board, player, self.config.hint_rollouts())

        stats = tree.statistics()
        stats["hint"] = True
        self.last_stats = stats

        if self.verbose:
            self._print_search_info(move, stats)

        return move

    def _print_search_info(self, move: int, stats: Dict[str, Any]) -> None:
        """
        Print information about the search.

        Args:
            move: Selected cell
            stats: Search statistics
        """
        label = "suggests" if stats.get("hint") else "selected"
        print(f"\n{self.name} {label}: {move}")
        print(f"Iterations: {stats['iterations']}")
        print(f"Time: {stats['time_elapsed']:.3f}s ({stats['iterations_per_second']:.1f} it/s)")
        print(f"Nodes: {stats['node_count']}")

        if stats["moves"]:
            print("\nTop moves:")
            by_visits = sorted(
                stats["moves"].items(),
                key=lambda x: x[1]["visits"],
                reverse=True
            )
            for i, (cell, move_stats) in enumerate(by_visits[:5]):
                print(f"{i+1}. cell {cell} - {move_stats['visits']} visits, "
                      f"{move_stats['value']:.3f} value")

    def get_last_statistics(self) -> Dict[str, Any]:
        """Get statistics from the most recent search."""
        return self.last_stats

    def reset_statistics(self) -> None:
        """Reset all statistics."""
        self.last_stats = {}
        self.move_history = []

    def save_statistics(self, filename: str) -> None:
        """
        Save statistics to a JSON file.

        Args:
            filename: Name of the file to save to
        """
        history = []
        for move, stats in self.move_history:
            history.append({
                "move": move,
                "stats": {k: v for k, v in stats.items() if not isinstance(v, dict)}
            })

        data = {
            "agent_name": self.name,
            "config": self.config.to_dict(),
            "history": history,
            "total_moves": len(self.move_history)
        }

        with open(filename, 'w') as f:
            json.dump(data, f, indent=2)

    def __str__(self) -> str:
        return f"{self.name} (MCTS, {self.config.rollouts} rollouts)"


class RandomAgent:
    """Baseline player that picks a uniformly random empty cell."""

    def __init__(self, name: str = "Random Agent", seed: Optional[int] = None):
        self.name = name
        self.rng = random.Random(seed)

    def select_move(self, board: Sequence[str], player: str) -> int:
        moves = legal_moves(board)
        if not moves:
            return NO_MOVE
        return self.rng.choice(moves)

    def __str__(self) -> str:
        return self.name


class MCTSAgentFactory:
    """
    Factory for creating MCTS agents with different strengths.
    """

    @staticmethod
    def create_fast() -> MCTSAgent:
        """Create a fast MCTS agent with fewer rollouts."""
        return MCTSAgent(config=MCTSConfig.fast(), name="Fast MCTS")

    @staticmethod
    def create_standard() -> MCTSAgent:
        """Create a standard MCTS agent with the default budget."""
        return MCTSAgent(config=MCTSConfig.default(), name="Standard MCTS")

    @staticmethod
    def create_strong() -> MCTSAgent:
        """Create a strong MCTS agent with more rollouts."""
        return MCTSAgent(config=MCTSConfig.strong(), name="Strong MCTS")

    @staticmethod
    def create_custom(
        rollouts: int = 2000,
        exploration_weight: float = 1.414,
        seed: Optional[int] = None,
        name: str = "Custom MCTS"
    ) -> MCTSAgent:
        """
        Create a custom MCTS agent.

        Args:
            rollouts: Rollout budget per move
            exploration_weight: UCB1 exploration parameter
            seed: Optional random seed
            name: Name of the agent

        Returns:
            MCTSAgent
        """
        config = MCTSConfig(
            rollouts=rollouts,
            exploration_weight=exploration_weight,
            seed=seed
        )
        return MCTSAgent(config=config, name=name)
