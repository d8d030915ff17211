#!/usr/bin/env python
"""
Command-line interface for playing tic-tac-toe matches between gamers.

Example usage:
    # Minimax as xplayer against a random oplayer, 20 matches
    minimax-play --x minimax --o random --matches 20

    # Two depth-limited minimax gamers, verbose decisions
    minimax-play --x minimax --o minimax --strategy depth_limited --max-depth 3 --verbose
"""
import argparse
import logging
from collections import Counter
from typing import Dict, List, Optional

from rich.console import Console
from rich.table import Table
from tqdm import tqdm

from minimax_gamer.core.match import MatchResult, play_match
from minimax_gamer.core.player import Gamer, RandomGamer
from minimax_gamer.core.statemachine import Role, StateMachine
from minimax_gamer.core.tictactoe import OPLAYER, XPLAYER, TicTacToeStateMachine
from minimax_gamer.minimax.agent import MinimaxGamer
from minimax_gamer.minimax.config import MinimaxConfig


def parse_args(argv: Optional[List[str]] = None):
    """Parse command-line arguments for match configuration."""
    parser = argparse.ArgumentParser(description="Play tic-tac-toe matches between gamers")

    # Gamers
    parser.add_argument("--x", type=str, default="minimax", choices=["minimax", "random"],
                        help="Gamer playing xplayer")
    parser.add_argument("--o", type=str, default="random", choices=["minimax", "random"],
                        help="Gamer playing oplayer")

    # Minimax configuration
    parser.add_argument("--strategy", type=str, default="breadth_first",
                        choices=list(MinimaxConfig.STRATEGIES),
                        help="Tree construction strategy")
    parser.add_argument("--max-depth", type=int, default=4,
                        help="Lookahead for the depth-limited strategy (negative = unbounded)")
    parser.add_argument("--buffer", type=float, default=0.5,
                        help="Seconds reserved for scoring before the deadline")

    # Match configuration
    parser.add_argument("--matches", type=int, default=10, help="Number of matches")
    parser.add_argument("--play-clock", type=float, default=2.0,
                        help="Seconds per move (0 = no deadline)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--verbose", action="store_true", help="Print every decision")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    return parser.parse_args(argv)


def create_gamer(kind: str, state_machine: StateMachine, role: Role, args,
                 seed: Optional[int] = None) -> Gamer:
    """Create a gamer based on command-line arguments."""
    if kind == "random":
        return RandomGamer(state_machine, role, name=f"Random {role}", seed=seed)

    config = MinimaxConfig(
        strategy=args.strategy,
        max_depth=args.max_depth,
        minimax_buffer=args.buffer,
    )
    return MinimaxGamer(state_machine, role, config, name=f"Minimax {role}", verbose=args.verbose)


def summarize(results: List[MatchResult], gamers: Dict[Role, Gamer]) -> Table:
    """Build a table with the outcome of every role over all matches."""
    table = Table(title=f"Results over {len(results)} matches")
    table.add_column("Role")
    table.add_column("Gamer")
    table.add_column("Wins", justify="right")
    table.add_column("Draws", justify="right")
    table.add_column("Losses", justify="right")
    table.add_column("Avg goal", justify="right")
    table.add_column("Late moves", justify="right")

    for role, gamer in gamers.items():
        outcomes = Counter()
        total_goal = 0
        late = 0
        for result in results:
            goal = result.goals.get(role, 0)
            total_goal += goal
            late += result.late_moves.get(role, 0)
            outcomes["win" if goal == 100 else "draw" if goal == 50 else "loss"] += 1
        average = total_goal / max(1, len(results))
        table.add_row(str(role), gamer.name, str(outcomes["win"]), str(outcomes["draw"]),
                      str(outcomes["loss"]), f"{average:.1f}", str(late))
    return table


def main(argv: Optional[List[str]] = None):
    """Run matches with command-line arguments."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )

    state_machine = TicTacToeStateMachine()
    gamers = {
        XPLAYER: create_gamer(args.x, state_machine, XPLAYER, args, seed=args.seed),
        OPLAYER: create_gamer(args.o, state_machine, OPLAYER, args,
                              seed=None if args.seed is None else args.seed + 1),
    }
    play_clock = args.play_clock if args.play_clock > 0 else None

    results = []
    for _ in tqdm(range(args.matches), desc="Matches", disable=args.verbose):
        results.append(play_match(state_machine, gamers, play_clock=play_clock))

    Console().print(summarize(results, gamers))


if __name__ == "__main__":
    main()
