"""
Monte Carlo Tree Search (MCTS) implementation for tic-tac-toe.

The computer opponent and the hint feature share this engine. A search:

1. Selection: Starting from the root, select children with UCB1 while the
   current node is fully expanded.
2. Expansion: Create a child for one untried move.
3. Simulation: Play uniformly random moves from the child until a line is
   completed or the board is full.
4. Backpropagation: Update visits and wins up to the root, flipping the
   reward at each level.

After the budget is spent, the root child with the best win rate is played.
"""

from tictactoe_ai.mcts.config import MCTSConfig
from tictactoe_ai.mcts.node import TreeNode
from tictactoe_ai.mcts.search import (
    SearchTree,
    construct_search,
    find_best_move,
    count_nodes,
    get_principal_variation,
    get_move_statistics
)
from tictactoe_ai.mcts.agent import MCTSAgent, MCTSAgentFactory, RandomAgent

# Default configuration
DEFAULT_CONFIG = MCTSConfig(
    rollouts=2000,              # Rollouts per computer move
    exploration_weight=1.414,   # UCB1 exploration parameter (sqrt(2))
    hint_fraction=0.5,          # Hints use half the budget...
    hint_rollout_cap=500,       # ...but never more than this
)

__all__ = [
    'MCTSAgent',
    'MCTSAgentFactory',
    'RandomAgent',
    'TreeNode',
    'SearchTree',
    'MCTSConfig',
    'construct_search',
    'find_best_move',
    'count_nodes',
    'get_principal_variation',
    'get_move_statistics',
    'DEFAULT_CONFIG'
]
