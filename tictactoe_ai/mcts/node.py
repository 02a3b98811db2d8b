"""
Monte Carlo Tree Search node for tic-tac-toe.

This module defines the TreeNode class which represents one board position
in the search tree. Each node owns its own board snapshot, its statistics
(visits, wins) and the frontier of moves that have not been expanded yet.

Nodes do not hold references to each other. They live in an arena (a list
owned by the SearchTree) and refer to their parent and children by index,
so walking down for selection and up for backpropagation are both O(1)
per step without any reference cycles.
"""
from __future__ import annotations
from typing import List, Optional, Sequence
import math
import random

from tictactoe_ai.core.board import Board, legal_moves
from tictactoe_ai.core.constants import (
    PLAYER_O, EXPLORATION_CONSTANT, WIN_REWARD, LOSS_REWARD, DRAW_REWARD,
    other_player
)
from tictactoe_ai.core.win import detect_win


class TreeNode:
    """
    A node in the Monte Carlo Tree Search.

    ``wins`` accumulates rewards from the point of view of the player who
    moved into this node (the complement of ``player_to_move``). The root
    has no such mover; its statistics are only used as the parent visit
    count in UCB1.
    """

    def __init__(
        self,
        state: Sequence[str],
        size: int,
        arena: List['TreeNode'],
        parent: Optional[int] = None,
        move: Optional[int] = None,
        player_to_move: str = PLAYER_O,
    ):
        """
        Initialize a node and register it in the arena.

        Args:
            state: Board at this node (copied into a private tuple)
            size: Side length of the board
            arena: Node list shared by the whole tree
            parent: Arena index of the parent (None for root)
            move: Cell that was filled to reach this state (None for root)
            player_to_move: Symbol that moves next from this state
        """
        self.state: Board = tuple(state)
        self.size = size
        self.move = move
        self.player_to_move = player_to_move

        self._arena = arena
        self.index = len(arena)
        self.parent_index = parent
        self.child_indices: List[int] = []

        # Node statistics
        self.visits = 0
        self.wins = 0.0

        # Every empty cell, highest first so pop() expands in ascending order
        self.untried_moves: List[int] = legal_moves(self.state)[::-1]

        arena.append(self)

    @property
    def parent(self) -> Optional['TreeNode']:
        """The node this one was expanded from, or None for the root."""
        if self.parent_index is None:
            return None
        return self._arena[self.parent_index]

    @property
    def children(self) -> List['TreeNode']:
        """Child nodes in expansion order."""
        return [self._arena[i] for i in self.child_indices]

    def is_fully_expanded(self) -> bool:
        """Check if every legal move from this node has been tried."""
        return not self.untried_moves

    def is_leaf(self) -> bool:
        """A node with no untried moves and no children (a full board)."""
        return not self.untried_moves and not self.child_indices

    def win_rate(self) -> float:
        """Average reward, treating an unvisited node as 0."""
        if self.visits == 0:
            return 0.0
        return self.wins / self.visits

    def ucb_score(self, child: 'TreeNode', exploration_weight: float = EXPLORATION_CONSTANT) -> float:
        """
        Calculate the UCB1 score for a child node.

        UCB1 = wins / visits + C * sqrt(ln(parent_visits) / visits)
        """
        if child.visits == 0:
            return math.inf

        exploitation = child.wins / child.visits
        exploration = math.sqrt(math.log(self.visits) / child.visits)
        return exploitation + exploration_weight * exploration

    def select_child(self, exploration_weight: float = EXPLORATION_CONSTANT) -> 'TreeNode':
        """
        Select a child node using the UCB1 formula.

        A child that has never been visited is taken immediately (the first
        one in expansion order). Otherwise the child with the highest score
        wins, ties going to the earlier child.

        Returns:
            Selected child node
        """
        if not self.child_indices:
            raise ValueError("Cannot select child from node with no children")

        best = None
        best_score = -math.inf
        for child in self.children:
            if child.visits == 0:
                return child
            score = self.ucb_score(child, exploration_weight)
            if score > best_score:
                best, best_score = child, score
        return best

    def expand(self) -> Optional['TreeNode']:
        """
        Add one child for an untried move.

        The move is played by ``player_to_move``; the child has the other
        player to move.

        Returns:
            The new child node, or None if no expansion is possible
        """
        if not self.untried_moves:
            return None

        move = self.untried_moves.pop()

        new_state = list(self.state)
        new_state[move] = self.player_to_move

        child = TreeNode(
            state=new_state,
            size=self.size,
            arena=self._arena,
            parent=self.index,
            move=move,
            player_to_move=other_player(self.player_to_move),
        )
        self.child_indices.append(child.index)
        return child

    def simulate(self, rng: Optional[random.Random] = None) -> float:
        """
        Play uniformly random moves from this position until it is decided.

        Each step first checks for a full board (0.5), then whether the
        player who just moved owns a line. A line completed on the last
        empty cell therefore scores as a draw.

        The reward is frozen to the player who moved into this node when the
        rollout starts: 1 if that player wins, 0 if the other player wins.
        This is the O-side reward whenever O is the searching player, and it
        is what lets a search for X pick X's own winning cell.

        Args:
            rng: Random generator for move choice (a fresh unseeded one if None)

        Returns:
            Rollout reward in [0, 1]
        """
        if rng is None:
            rng = random.Random()
        board = list(self.state)
        rolling = self.player_to_move
        rewarded = other_player(self.player_to_move)

        while True:
            moves = legal_moves(board)
            if not moves:
                return DRAW_REWARD

            last_mover = other_player(rolling)
            if detect_win(board, last_mover, self.size):
                return WIN_REWARD if last_mover == rewarded else LOSS_REWARD

            board[rng.choice(moves)] = rolling
            rolling = other_player(rolling)

    def update(self, result: float) -> None:
        """Record one simulation result at this node."""
        self.visits += 1
        self.wins += result

    def backpropagate(self, result: float) -> None:
        """
        Update statistics from this node up to the root.

        Each step up flips the result (``1 - result``), since a win for the
        player who moved into a node is a loss for the player before them.
        """
        node: Optional[TreeNode] = self
        while node is not None:
            node.update(result)
            result = 1.0 - result
            node = node.parent

    def __str__(self) -> str:
        return (f"TreeNode(move={self.move}, "
                f"to_move={self.player_to_move}, "
                f"visits={self.visits}, "
                f"wins={self.wins:.2f}, "
                f"children={len(self.child_indices)}, "
                f"untried={len(self.untried_moves)})")
