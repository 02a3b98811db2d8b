"""
Monte Carlo Tree Search (MCTS) algorithm for tic-tac-toe.

This module implements the search with the four standard phases:
1. Selection: Descend with UCB1 while nodes are fully expanded
2. Expansion: Create a child for one untried move
3. Simulation: Play a random rollout from the new child
4. Backpropagation: Update statistics up to the root, flipping perspective

Every search builds a fresh tree from a snapshot of the caller's board and
discards it afterwards; nothing is shared between searches.
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional, Sequence, Tuple
import random
import time

from tictactoe_ai.core.constants import NO_MOVE
from tictactoe_ai.mcts.config import MCTSConfig
from tictactoe_ai.mcts.node import TreeNode


class SearchTree:
    """
    One search invocation: the root position, the arena of nodes and the
    fixed player/opponent/size perspective.
    """

    def __init__(
        self,
        board: Sequence[str],
        player: str,
        opponent: str,
        size: int,
        config: Optional[MCTSConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize a search tree.

        Args:
            board: Current board (snapshotted; the caller's object is never touched)
            player: Symbol to search a move for
            opponent: The other symbol
            size: Side length of the board
            config: MCTS configuration parameters
            rng: Random generator for rollouts (seeded from config.seed if None)
        """
        self.config = config or MCTSConfig()
        self.player = player
        self.opponent = opponent
        self.size = size
        self.rng = rng if rng is not None else random.Random(self.config.seed)

        self.nodes: List[TreeNode] = []
        self.root = TreeNode(
            state=board,
            size=size,
            arena=self.nodes,
            player_to_move=player,
        )

        self.iterations = 0
        self.time_elapsed = 0.0

    def select_node(self, node: TreeNode) -> TreeNode:
        """
        Descend from ``node`` and return the node to simulate from.

        Fully expanded nodes are descended with UCB1. The first node with
        untried moves is expanded and the new child returned. A node with
        neither untried moves nor children (a full board) is
        returned as is.
        """
        while node.is_fully_expanded() and node.child_indices:
            node = node.select_child(self.config.exploration_weight)

        if node.untried_moves:
            return node.expand()
        return node

    def run_iteration(self) -> float:
        """Run one select/expand/simulate/backpropagate cycle."""
        node = self.select_node(self.root)
        result = node.simulate(self.rng)
        node.backpropagate(result)
        self.iterations += 1
        return result

    def best_child(self) -> Optional[TreeNode]:
        """
        Get the root child with the highest win rate.

        Unvisited children count as 0; ties go to the earlier child.
        """
        children = self.root.children
        if not children:
            return None

        best = children[0]
        for child in children[1:]:
            if child.win_rate() > best.win_rate():
                best = child
        return best

    def find_best_move(self, rollout_budget: Optional[int] = None) -> int:
        """
        Run the search and return the chosen cell.

        Args:
            rollout_budget: Number of iterations (config.rollouts if None)

        Returns:
            Index of the chosen cell, or NO_MOVE if the root has no children
            (zero budget or no empty cell)
        """
        if rollout_budget is None:
            rollout_budget = self.config.rollouts
        if rollout_budget < 0:
            raise ValueError("rollout_budget must be non-negative")

        start_time = time.time()
        for _ in range(rollout_budget):
            self.run_iteration()
        self.time_elapsed += time.time() - start_time

        best = self.best_child()
        if best is None:
            return NO_MOVE
        return best.move

    def statistics(self) -> Dict[str, Any]:
        """
        Get statistics about the search so far.

        Returns:
            Dictionary with iteration counts, timing, node count and per-move stats
        """
        return {
            "iterations": self.iterations,
            "time_elapsed": self.time_elapsed,
            "iterations_per_second": self.iterations / max(0.001, self.time_elapsed),
            "node_count": len(self.nodes),
            "root_visits": self.root.visits,
            "moves": get_move_statistics(self.root),
        }

    def principal_variation(self, max_depth: int = 10) -> List[Tuple[int, float]]:
        """Most visited path from the root."""
        return get_principal_variation(self.root, max_depth)


def construct_search(
    board: Sequence[str],
    player: str,
    opponent: str,
    size: int,
    config: Optional[MCTSConfig] = None,
    rng: Optional[random.Random] = None,
) -> SearchTree:
    """
    Build a search handle for the given position.

    Args:
        board: Current board
        player: Symbol to search a move for
        opponent: The other symbol
        size: Side length of the board
        config: MCTS configuration parameters
        rng: Random generator for rollouts

    Returns:
        SearchTree ready for find_best_move
    """
    return SearchTree(board, player, opponent, size, config=config, rng=rng)


def find_best_move(handle: SearchTree, rollout_budget: int) -> int:
    """Run ``rollout_budget`` iterations on ``handle``; returns a cell or NO_MOVE."""
    return handle.find_best_move(rollout_budget)


def count_nodes(node: TreeNode) -> int:
    """
    Count the nodes in the subtree rooted at ``node``.

    Args:
        node: Root of the subtree

    Returns:
        Total number of nodes
    """
    count = 1
    for child in node.children:
        count += count_nodes(child)
    return count


def get_principal_variation(root: TreeNode, max_depth: int = 10) -> List[Tuple[int, float]]:
    """
    Get the principal variation (most visited path) from the root.

    Args:
        root: Root node of the search tree
        max_depth: Maximum depth to follow

    Returns:
        List of (move, win rate) pairs
    """
    result = []
    current = root
    depth = 0

    while current.child_indices and depth < max_depth:
        best_child = max(current.children, key=lambda c: c.visits)
        result.append((best_child.move, best_child.win_rate()))
        current = best_child
        depth += 1

    return result


def get_move_statistics(root: TreeNode) -> Dict[int, Dict[str, float]]:
    """
    Get statistics for every move expanded at the root.

    Returns:
        Dictionary mapping cell index to visits, wins and win rate
    """
    return {
        child.move: {
            "visits": child.visits,
            "wins": child.wins,
            "value": child.win_rate(),
        }
        for child in root.children
    }
