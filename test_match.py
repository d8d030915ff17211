#!/usr/bin/env python
"""
Tests for the match host loop and the command-line interface.

Matches are played on tic-tac-toe with small time budgets so that the whole
suite stays fast.
"""
import io
import unittest
from contextlib import redirect_stdout

from minimax_gamer.core.match import MatchResult, play_match
from minimax_gamer.core.player import RandomGamer
from minimax_gamer.core.tictactoe import OPLAYER, XPLAYER, TicTacToeState, TicTacToeStateMachine
from minimax_gamer.minimax.agent import MinimaxGamer
from minimax_gamer.minimax.config import MinimaxConfig
from minimax_gamer.play import main, parse_args


class TestPlayMatch(unittest.TestCase):
    """Test case for play_match."""

    def setUp(self):
        """Set up test fixtures."""
        self.machine = TicTacToeStateMachine()

    def test_random_match_completes(self):
        gamers = {
            XPLAYER: RandomGamer(self.machine, XPLAYER, seed=1),
            OPLAYER: RandomGamer(self.machine, OPLAYER, seed=2),
        }
        result = play_match(self.machine, gamers, play_clock=1.0)
        self.assertTrue(result.completed)
        self.assertEqual(sum(result.goals.values()), 100)
        self.assertTrue(5 <= result.steps <= 9)
        self.assertTrue(self.machine.is_terminal(result.final_state))

    def test_minimax_takes_the_win(self):
        machine = TicTacToeStateMachine(TicTacToeState(tuple("xbobxobbb"), XPLAYER))
        gamers = {
            XPLAYER: MinimaxGamer(machine, XPLAYER),
            OPLAYER: RandomGamer(machine, OPLAYER, seed=0),
        }
        result = play_match(machine, gamers, play_clock=None)
        self.assertEqual(result.steps, 1)
        self.assertEqual(result.goals, {XPLAYER: 100, OPLAYER: 0})

    def test_minimax_never_loses_against_random(self):
        # One move in: the full tree is small enough to search completely
        machine = TicTacToeStateMachine(TicTacToeState(tuple("xbbbobbbb"), XPLAYER))
        for seed in range(3):
            gamers = {
                XPLAYER: MinimaxGamer(machine, XPLAYER),
                OPLAYER: RandomGamer(machine, OPLAYER, seed=seed),
            }
            result = play_match(machine, gamers, play_clock=None)
            self.assertTrue(result.completed)
            self.assertGreaterEqual(result.goals[XPLAYER], 50)

    def test_depth_limited_self_play(self):
        config = MinimaxConfig(strategy="depth_limited", max_depth=2)
        gamers = {
            XPLAYER: MinimaxGamer(self.machine, XPLAYER, config),
            OPLAYER: MinimaxGamer(self.machine, OPLAYER, config),
        }
        result = play_match(self.machine, gamers, play_clock=None)
        self.assertTrue(result.completed)
        self.assertEqual(len(result.history[0]), 2)

    def test_missing_gamer(self):
        with self.assertRaises(ValueError):
            play_match(self.machine, {XPLAYER: RandomGamer(self.machine, XPLAYER)})

    def test_step_limit(self):
        gamers = {
            XPLAYER: RandomGamer(self.machine, XPLAYER, seed=1),
            OPLAYER: RandomGamer(self.machine, OPLAYER, seed=2),
        }
        result = play_match(self.machine, gamers, max_steps=2)
        self.assertFalse(result.completed)
        self.assertEqual(result.goals, {})
        self.assertEqual(result.steps, 2)

    def test_result_to_dict(self):
        result = MatchResult(goals={XPLAYER: 100}, history=[["(mark 1 1)", "noop"]], completed=True)
        data = result.to_dict()
        self.assertEqual(data["goals"], {"xplayer": 100})
        self.assertEqual(data["steps"], 1)


class TestCommandLine(unittest.TestCase):
    """Test case for the minimax-play command."""

    def test_defaults(self):
        args = parse_args([])
        self.assertEqual(args.x, "minimax")
        self.assertEqual(args.o, "random")
        self.assertEqual(args.strategy, "breadth_first")

    def test_random_matches(self):
        output = io.StringIO()
        with redirect_stdout(output):
            main(["--x", "random", "--o", "random", "--matches", "2", "--seed", "3"])
        self.assertIn("Results over 2 matches", output.getvalue())


if __name__ == "__main__":
    unittest.main()
