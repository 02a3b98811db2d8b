#!/usr/bin/env python
"""
Run matches between tic-tac-toe agents.

This script plays a series of games between two agents (random or MCTS)
and reports how often each side won, to check that the MCTS opponent is
working and to compare rollout budgets.

Example usage:
    # MCTS (O) against a random X on a 3x3 board
    tictactoe-duel --games 50 --x-agent random --o-agent mcts

    # Two MCTS players with different budgets on 4x4
    tictactoe-duel --size 4 --x-agent mcts --x-rollouts 500 --o-rollouts 2000
"""
import argparse
import time
from typing import Any, Dict, List, Optional, Union

import numpy as np
from rich.console import Console
from rich.table import Table
from tqdm import tqdm

from tictactoe_ai.core.board import apply_move, create_board, is_full
from tictactoe_ai.core.constants import (
    PLAYER_X, PLAYER_O, NO_MOVE, DEFAULT_BOARD_SIZE, DEFAULT_DIFFICULTY,
    MIN_BOARD_SIZE, MAX_BOARD_SIZE, other_player
)
from tictactoe_ai.core.win import detect_win
from tictactoe_ai.mcts.agent import MCTSAgent, RandomAgent
from tictactoe_ai.mcts.config import MCTSConfig


Agent = Union[MCTSAgent, RandomAgent]


def create_agent(kind: str, rollouts: int, seed: Optional[int], name: str, verbose: bool = False) -> Agent:
    """
    Create an agent for one side.

    Args:
        kind: "random" or "mcts"
        rollouts: Rollout budget (MCTS only)
        seed: Optional random seed
        name: Display name
        verbose: Whether an MCTS agent prints its search summary

    Returns:
        Agent with a select_move(board, player) method
    """
    if kind == "random":
        return RandomAgent(name=name, seed=seed)
    if kind == "mcts":
        config = MCTSConfig(rollouts=rollouts, seed=seed)
        return MCTSAgent(config=config, name=name, verbose=verbose)
    raise ValueError(f"Unknown agent type: {kind}")


def play_game(x_agent: Agent, o_agent: Agent, size: int) -> Dict[str, Any]:
    """
    Play one game, X moving first.

    Returns:
        Dictionary with the winner (None for a draw), moves and winning line
    """
    board = create_board(size)
    agents = {PLAYER_X: x_agent, PLAYER_O: o_agent}
    player = PLAYER_X
    moves: List[int] = []

    while True:
        move = agents[player].select_move(board, player)
        if move == NO_MOVE:
            return {"winner": None, "moves": moves, "winning_line": []}

        board = apply_move(board, move, player)
        moves.append(move)

        win_info = detect_win(board, player, size)
        if win_info:
            return {"winner": player, "moves": moves, "winning_line": list(win_info.winning_line)}
        if is_full(board):
            return {"winner": None, "moves": moves, "winning_line": []}

        player = other_player(player)


def run_duel(
    games: int,
    size: int,
    x_agent: Agent,
    o_agent: Agent,
    show_progress: bool = True
) -> Dict[str, Any]:
    """
    Play a series of games and collect results.

    Returns:
        Summary with win counts, draws, average length and O's score rate
    """
    results = []
    start_time = time.time()

    for _ in tqdm(range(games), desc="Playing", disable=not show_progress):
        results.append(play_game(x_agent, o_agent, size))

    # O scores 1 for a win, 0.5 for a draw
    o_scores = np.array([
        1.0 if r["winner"] == PLAYER_O else 0.5 if r["winner"] is None else 0.0
        for r in results
    ])
    lengths = np.array([len(r["moves"]) for r in results])

    return {
        "games": games,
        "x_wins": sum(1 for r in results if r["winner"] == PLAYER_X),
        "o_wins": sum(1 for r in results if r["winner"] == PLAYER_O),
        "draws": sum(1 for r in results if r["winner"] is None),
        "average_length": float(lengths.mean()) if games else 0.0,
        "o_score": float(o_scores.mean()) if games else 0.0,
        "o_score_stderr": float(o_scores.std(ddof=1) / np.sqrt(games)) if games > 1 else 0.0,
        "elapsed_time": time.time() - start_time,
    }


def print_summary(summary: Dict[str, Any], x_agent: Agent, o_agent: Agent, console: Optional[Console] = None) -> None:
    """Print a results table."""
    console = console or Console()

    table = Table(title=f"{summary['games']} games")
    table.add_column("Result")
    table.add_column("Count", justify="right")
    table.add_row(f"X wins ({x_agent})", str(summary["x_wins"]))
    table.add_row(f"O wins ({o_agent})", str(summary["o_wins"]))
    table.add_row("Draws", str(summary["draws"]))
    console.print(table)

    console.print(f"Average game length: {summary['average_length']:.2f} moves")
    console.print(f"O score: {summary['o_score']:.3f} ± {summary['o_score_stderr']:.3f}")
    console.print(f"Total time: {summary['elapsed_time']:.2f} seconds")


def main(argv: Optional[List[str]] = None) -> Dict[str, Any]:
    """Run a duel with command-line arguments."""
    parser = argparse.ArgumentParser(description="Play tic-tac-toe agents against each other.")
    parser.add_argument("--games", type=int, default=20, help="Number of games to play")
    parser.add_argument("--size", type=int, default=DEFAULT_BOARD_SIZE,
                        help=f"Board size ({MIN_BOARD_SIZE}-{MAX_BOARD_SIZE})")
    parser.add_argument("--x-agent", choices=["random", "mcts"], default="random",
                        help="Agent playing X (moves first)")
    parser.add_argument("--o-agent", choices=["random", "mcts"], default="mcts",
                        help="Agent playing O")
    parser.add_argument("--x-rollouts", type=int, default=DEFAULT_DIFFICULTY,
                        help="MCTS rollouts per move for X")
    parser.add_argument("--o-rollouts", type=int, default=DEFAULT_DIFFICULTY,
                        help="MCTS rollouts per move for O")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--verbose", action="store_true", help="Print every MCTS search")

    args = parser.parse_args(argv)

    if not MIN_BOARD_SIZE <= args.size <= MAX_BOARD_SIZE:
        parser.error(f"--size must be between {MIN_BOARD_SIZE} and {MAX_BOARD_SIZE}")
    if args.games <= 0:
        parser.error("--games must be positive")

    # Give the two sides different seeds so they do not mirror each other
    x_seed = args.seed
    o_seed = None if args.seed is None else args.seed + 1

    x_agent = create_agent(args.x_agent, args.x_rollouts, x_seed, f"{args.x_agent} X", args.verbose)
    o_agent = create_agent(args.o_agent, args.o_rollouts, o_seed, f"{args.o_agent} O", args.verbose)

    summary = run_duel(args.games, args.size, x_agent, o_agent, show_progress=not args.verbose)
    print_summary(summary, x_agent, o_agent)
    return summary


if __name__ == "__main__":
    main()
