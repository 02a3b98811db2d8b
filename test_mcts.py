#!/usr/bin/env python
"""
Tests for the Monte Carlo Tree Search engine.

These cover the node operations (expand, select, simulate, backpropagate),
the search loop and its "no move" cases, and the agent wrapper. Searches
use seeded generators so every run is reproducible.
"""
import json
import os
import random
import tempfile
import unittest

from tictactoe_ai.core.board import board_from_string, create_board, legal_moves
from tictactoe_ai.core.constants import EMPTY, NO_MOVE, PLAYER_X, PLAYER_O
from tictactoe_ai.mcts.agent import MCTSAgent, MCTSAgentFactory, RandomAgent
from tictactoe_ai.mcts.config import MCTSConfig
from tictactoe_ai.mcts.node import TreeNode
from tictactoe_ai.mcts.search import (
    SearchTree, construct_search, find_best_move, count_nodes
)


DRAWN_BOARD = "XOX/XOO/OXX"


def make_root(board, player_to_move=PLAYER_O):
    """Create a root node in a fresh arena."""
    arena = []
    size = int(len(board) ** 0.5)
    return TreeNode(board, size, arena, player_to_move=player_to_move), arena


class TestTreeNode(unittest.TestCase):
    """Test case for TreeNode."""

    def test_construction(self):
        """Untried moves are the empty cells; statistics start at zero."""
        board = board_from_string("X../.O./...")
        root, arena = make_root(board)

        self.assertEqual(sorted(root.untried_moves), [1, 2, 3, 5, 6, 7, 8])
        self.assertEqual(root.visits, 0)
        self.assertEqual(root.wins, 0.0)
        self.assertIsNone(root.parent)
        self.assertIsNone(root.move)
        self.assertEqual(root.children, [])
        self.assertIs(arena[root.index], root)

    def test_state_is_a_private_copy(self):
        board = list(create_board(3))
        root, _ = make_root(board)
        board[0] = PLAYER_X
        self.assertEqual(root.state[0], EMPTY)

    def test_expand(self):
        """Expanding places player_to_move and hands the turn over."""
        root, arena = make_root(create_board(3), PLAYER_O)
        child = root.expand()

        self.assertEqual(child.move, 0)
        self.assertEqual(child.state[0], PLAYER_O)
        self.assertEqual(root.state[0], EMPTY)
        self.assertEqual(child.player_to_move, PLAYER_X)
        self.assertIs(child.parent, root)
        self.assertEqual(root.children, [child])
        self.assertEqual(len(root.untried_moves), 8)
        self.assertNotIn(0, root.untried_moves)
        self.assertEqual(len(arena), 2)

    def test_expand_exhausts_moves(self):
        root, _ = make_root(board_from_string("XOX/XOO/OX."), PLAYER_X)
        child = root.expand()
        self.assertEqual(child.move, 8)
        self.assertTrue(root.is_fully_expanded())
        self.assertIsNone(root.expand())

    def test_winning_move_keeps_empty_cells(self):
        """A child whose move completes a line still lists every empty cell."""
        root, _ = make_root(board_from_string("XX./OO./..."), PLAYER_X)
        child = root.expand()

        self.assertEqual(child.move, 2)
        self.assertEqual(sorted(child.untried_moves), [5, 6, 7, 8])
        self.assertFalse(child.is_leaf())
        self.assertEqual(child.expand().move, 5)

    def test_select_child_prefers_unvisited(self):
        """The first unvisited child is taken before any UCB1 comparison."""
        root, _ = make_root(create_board(3))
        first, second, third = root.expand(), root.expand(), root.expand()
        root.visits = 10
        first.visits, first.wins = 9, 9.0
        self.assertIs(root.select_child(), second)

        second.visits, second.wins = 1, 0.0
        self.assertIs(root.select_child(), third)

    def test_select_child_ucb1(self):
        """Among visited children the highest UCB1 score wins."""
        root, _ = make_root(create_board(3))
        a, b, c = root.expand(), root.expand(), root.expand()
        root.visits = 30
        a.visits, a.wins = 10, 2.0
        b.visits, b.wins = 10, 8.0
        c.visits, c.wins = 10, 5.0
        self.assertIs(root.select_child(), b)

        # A rarely visited child gets a large exploration bonus
        c.visits, c.wins = 1, 0.5
        self.assertIs(root.select_child(), c)

    def test_select_child_ties_go_first(self):
        root, _ = make_root(create_board(3))
        a, b = root.expand(), root.expand()
        root.visits = 8
        a.visits, a.wins = 4, 2.0
        b.visits, b.wins = 4, 2.0
        self.assertIs(root.select_child(), a)

    def test_select_child_without_children(self):
        root, _ = make_root(create_board(3))
        with self.assertRaises(ValueError):
            root.select_child()

    def test_simulate_full_board_is_draw(self):
        """No legal moves and no line: exactly 0.5."""
        root, _ = make_root(board_from_string(DRAWN_BOARD), PLAYER_O)
        self.assertEqual(root.simulate(random.Random(0)), 0.5)

    def test_simulate_reward_perspective(self):
        """The reward is 1 when the player who moved into the node wins."""
        # X just moved and owns the top row
        x_moved, _ = make_root(board_from_string("XXX/OO./..."), PLAYER_O)
        self.assertEqual(x_moved.simulate(random.Random(1)), 1.0)

        # Same board, but O moved last: X's line is a loss for O
        o_moved, _ = make_root(board_from_string("XXX/OO./..."), PLAYER_X)
        self.assertEqual(o_moved.simulate(random.Random(1)), 0.0)

    def test_simulate_full_board_checked_before_line(self):
        """A line completed on the last empty cell scores as a draw."""
        last_cell, _ = make_root(board_from_string("XOX/OXO/OXX"), PLAYER_O)
        self.assertEqual(last_cell.simulate(random.Random(0)), 0.5)

        o_moved, _ = make_root(board_from_string("XOX/OXO/OXX"), PLAYER_X)
        self.assertEqual(o_moved.simulate(random.Random(0)), 0.5)

    def test_simulate_range(self):
        rng = random.Random(7)
        root, _ = make_root(create_board(3), PLAYER_X)
        for _ in range(50):
            self.assertIn(root.simulate(rng), (0.0, 0.5, 1.0))

    def test_simulate_does_not_touch_state(self):
        board = board_from_string("X../.O./...")
        root, _ = make_root(board, PLAYER_X)
        root.simulate(random.Random(3))
        self.assertEqual(root.state, board)

    def test_backpropagate_alternates(self):
        """Each level up receives 1 - result."""
        root, _ = make_root(create_board(3))
        child = root.expand()
        grandchild = child.expand()

        grandchild.backpropagate(1.0)
        self.assertEqual((grandchild.visits, grandchild.wins), (1, 1.0))
        self.assertEqual((child.visits, child.wins), (1, 0.0))
        self.assertEqual((root.visits, root.wins), (1, 1.0))

        grandchild.backpropagate(0.25)
        self.assertEqual(grandchild.wins, 1.25)
        self.assertEqual(child.wins, 0.75)
        self.assertEqual(root.wins, 1.25)
        self.assertEqual(root.visits, 2)

        child.backpropagate(0.5)
        self.assertEqual(child.wins, 1.25)
        self.assertEqual(root.wins, 1.75)
        self.assertEqual(grandchild.visits, 2)


class TestSearchTree(unittest.TestCase):
    """Test case for SearchTree and the functional interface."""

    def search(self, board_text, player, budget, seed=0):
        board = board_from_string(board_text)
        opponent = PLAYER_X if player == PLAYER_O else PLAYER_O
        size = int(len(board) ** 0.5)
        tree = construct_search(board, player, opponent, size, rng=random.Random(seed))
        return tree, find_best_move(tree, budget)

    def test_full_board_has_no_move(self):
        for budget in (0, 1, 25):
            _, move = self.search(DRAWN_BOARD, PLAYER_O, budget)
            self.assertEqual(move, NO_MOVE)

    def test_zero_budget_has_no_move(self):
        tree, move = self.search(".../.../...", PLAYER_O, 0)
        self.assertEqual(move, NO_MOVE)
        self.assertEqual(tree.root.visits, 0)
        self.assertEqual(tree.root.children, [])

    def test_negative_budget_rejected(self):
        tree = SearchTree(create_board(3), PLAYER_O, PLAYER_X, 3)
        with self.assertRaises(ValueError):
            tree.find_best_move(-1)

    def test_move_is_always_empty_cell(self):
        """Random positions: the chosen cell is always empty on the input board."""
        rng = random.Random(42)
        for trial in range(40):
            size = rng.choice([3, 4])
            board = list(create_board(size))
            filled = rng.randint(0, size * size - 1)
            for index in rng.sample(range(size * size), filled):
                board[index] = rng.choice([PLAYER_X, PLAYER_O])

            player = rng.choice([PLAYER_X, PLAYER_O])
            opponent = PLAYER_X if player == PLAYER_O else PLAYER_O
            tree = SearchTree(board, player, opponent, size, rng=random.Random(trial))
            move = tree.find_best_move(rng.randint(1, 60))

            self.assertIn(move, legal_moves(board))

    def test_root_visits_equal_budget(self):
        tree, _ = self.search(".../.../...", PLAYER_O, 300)
        self.assertEqual(tree.root.visits, 300)
        self.assertEqual(tree.iterations, 300)

        full, _ = self.search(DRAWN_BOARD, PLAYER_O, 12)
        self.assertEqual(full.root.visits, 12)

    def test_wins_never_exceed_visits(self):
        tree, _ = self.search("X../.../...", PLAYER_O, 400)
        for node in tree.nodes:
            self.assertLessEqual(node.wins, node.visits)
            self.assertGreaterEqual(node.wins, 0.0)

    def test_caller_board_untouched(self):
        board = list(board_from_string("X../.O./..."))
        before = list(board)
        tree = SearchTree(board, PLAYER_X, PLAYER_O, 3, rng=random.Random(5))
        tree.find_best_move(200)
        self.assertEqual(board, before)

    def test_completes_winning_row(self):
        """X to move with two in a row takes the third cell."""
        for budget in range(1, 6):
            _, move = self.search("XX./OO./...", PLAYER_X, budget, seed=budget)
            self.assertEqual(move, 2)

    def test_winning_child_dominates(self):
        """The rollout from the winning cell scores 1 at once; ties go to it."""
        tree, _ = self.search("XX./OO./...", PLAYER_X, 5, seed=3)
        stats = tree.statistics()["moves"]

        self.assertEqual(sorted(stats), [2, 5, 6, 7, 8])
        self.assertEqual(stats[2]["value"], 1.0)
        for move_stats in stats.values():
            self.assertEqual(move_stats["visits"], 1)
            self.assertLessEqual(move_stats["value"], stats[2]["value"])

    def test_blocks_opponent(self):
        """O must block X's open row."""
        _, move = self.search("XX./.O./...", PLAYER_O, 2000, seed=11)
        self.assertEqual(move, 2)

    def test_prefers_center_on_empty_board(self):
        """On an empty 3x3 board the center is chosen in most trials."""
        picks = []
        for seed in range(5):
            _, move = self.search(".../.../...", PLAYER_O, 5000, seed=seed)
            self.assertIn(move, range(9))
            picks.append(move)
        self.assertGreaterEqual(picks.count(4), 4)

    def test_seeded_search_is_reproducible(self):
        first, first_move = self.search("X../.../...", PLAYER_O, 400, seed=9)
        second, second_move = self.search("X../.../...", PLAYER_O, 400, seed=9)

        self.assertEqual(first_move, second_move)
        self.assertEqual(first.statistics()["moves"], second.statistics()["moves"])

    def test_independent_trees(self):
        """Two searches on the same board share nothing."""
        board = board_from_string("X../.../...")
        a = SearchTree(board, PLAYER_O, PLAYER_X, 3, rng=random.Random(1))
        b = SearchTree(board, PLAYER_O, PLAYER_X, 3, rng=random.Random(1))
        a.find_best_move(100)

        self.assertEqual(b.root.visits, 0)
        self.assertEqual(len(b.nodes), 1)
        self.assertIsNot(a.nodes, b.nodes)

    def test_statistics_and_variation(self):
        tree, move = self.search("X../.../...", PLAYER_O, 250)
        stats = tree.statistics()

        self.assertEqual(stats["iterations"], 250)
        self.assertEqual(stats["root_visits"], 250)
        self.assertEqual(stats["node_count"], len(tree.nodes))
        self.assertEqual(count_nodes(tree.root), len(tree.nodes))
        self.assertIn(move, stats["moves"])
        self.assertEqual(sum(s["visits"] for s in stats["moves"].values()), 250)

        variation = tree.principal_variation(max_depth=3)
        self.assertTrue(1 <= len(variation) <= 3)
        for cell, value in variation:
            self.assertTrue(0.0 <= value <= 1.0)

    def test_default_budget_from_config(self):
        tree = SearchTree(create_board(3), PLAYER_O, PLAYER_X, 3,
                          config=MCTSConfig(rollouts=40, seed=2))
        move = tree.find_best_move()
        self.assertNotEqual(move, NO_MOVE)
        self.assertEqual(tree.root.visits, 40)


class TestMCTSConfig(unittest.TestCase):
    """Test case for MCTSConfig."""

    def test_defaults(self):
        config = MCTSConfig()
        self.assertEqual(config.rollouts, 2000)
        self.assertAlmostEqual(config.exploration_weight, 1.414)
        self.assertIsNone(config.seed)

    def test_hint_rollouts(self):
        """Hints get half the budget, capped at 500."""
        self.assertEqual(MCTSConfig(rollouts=2000).hint_rollouts(), 500)
        self.assertEqual(MCTSConfig(rollouts=600).hint_rollouts(), 300)
        self.assertEqual(MCTSConfig(rollouts=601).hint_rollouts(), 301)
        self.assertEqual(MCTSConfig(rollouts=1).hint_rollouts(), 1)
        self.assertEqual(MCTSConfig(rollouts=0).hint_rollouts(), 0)

    def test_validation(self):
        with self.assertRaises(ValueError):
            MCTSConfig(rollouts=-1)
        with self.assertRaises(ValueError):
            MCTSConfig(exploration_weight=0)
        with self.assertRaises(ValueError):
            MCTSConfig(hint_fraction=0)
        with self.assertRaises(ValueError):
            MCTSConfig(hint_rollout_cap=-5)

    def test_presets(self):
        self.assertLess(MCTSConfig.fast().rollouts, MCTSConfig.default().rollouts)
        self.assertGreater(MCTSConfig.strong().rollouts, MCTSConfig.default().rollouts)
        self.assertEqual(MCTSConfig.from_difficulty(750, seed=3).rollouts, 750)

    def test_dict_conversion(self):
        config = MCTSConfig.from_dict({"rollouts": 123, "seed": 4, "unknown": True})
        self.assertEqual(config.rollouts, 123)
        self.assertEqual(config.seed, 4)
        self.assertEqual(MCTSConfig.from_dict(config.to_dict()), config)
        self.assertIn("rollouts=123", str(config))


class TestAgents(unittest.TestCase):
    """Test case for the MCTS and random agents."""

    def test_select_move(self):
        agent = MCTSAgent(config=MCTSConfig(rollouts=150, seed=1))
        board = board_from_string("X../.../...")
        move = agent.select_move(board, PLAYER_O)

        self.assertIn(move, legal_moves(board))
        stats = agent.get_last_statistics()
        self.assertEqual(stats["iterations"], 150)
        self.assertFalse(stats["hint"])
        self.assertEqual(len(agent.move_history), 1)

    def test_suggest_hint_uses_reduced_budget(self):
        agent = MCTSAgent(config=MCTSConfig(rollouts=400, seed=1))
        move = agent.suggest_hint(create_board(3), PLAYER_X)

        self.assertIn(move, range(9))
        self.assertEqual(agent.get_last_statistics()["iterations"], 200)
        self.assertTrue(agent.get_last_statistics()["hint"])
        self.assertEqual(agent.move_history, [])

    def test_full_board(self):
        agent = MCTSAgent(config=MCTSConfig(rollouts=10))
        self.assertEqual(agent.select_move(board_from_string(DRAWN_BOARD), PLAYER_O), NO_MOVE)
        self.assertEqual(RandomAgent(seed=0).select_move(board_from_string(DRAWN_BOARD), PLAYER_O), NO_MOVE)

    def test_random_agent(self):
        agent = RandomAgent(seed=3)
        board = board_from_string("XO./.X./O..")
        for _ in range(20):
            self.assertIn(agent.select_move(board, PLAYER_O), legal_moves(board))

    def test_statistics_io(self):
        agent = MCTSAgent(config=MCTSConfig(rollouts=30, seed=0), name="Saver")
        agent.select_move(create_board(3), PLAYER_O)

        with tempfile.TemporaryDirectory() as temp_dir:
            path = os.path.join(temp_dir, "stats.json")
            agent.save_statistics(path)
            with open(path) as f:
                data = json.load(f)

        self.assertEqual(data["agent_name"], "Saver")
        self.assertEqual(data["total_moves"], 1)
        self.assertEqual(data["config"]["rollouts"], 30)

        agent.reset_statistics()
        self.assertEqual(agent.get_last_statistics(), {})
        self.assertEqual(agent.move_history, [])

    def test_factory(self):
        self.assertEqual(MCTSAgentFactory.create_fast().config.rollouts, 200)
        self.assertEqual(MCTSAgentFactory.create_standard().config.rollouts, 2000)
        self.assertEqual(MCTSAgentFactory.create_strong().config.rollouts, 5000)

        custom = MCTSAgentFactory.create_custom(rollouts=42, seed=1, name="Mine")
        self.assertEqual(custom.config.rollouts, 42)
        self.assertEqual(str(custom), "Mine (MCTS, 42 rollouts)")


if __name__ == "__main__":
    unittest.main()
