"""
Minimax Gamer - time-bounded minimax move selection for rule-described games.

This package provides an abstract state machine interface for turn-based
games whose rules are only known through queries, and a gamer that builds a
game tree within a deadline and plays the move with the best minimax score.
"""

__version__ = "0.1.0"
__author__ = "Minimax Gamer Team"

# Make key components available at package level
from minimax_gamer.core.statemachine import StateMachine
from minimax_gamer.core.player import Gamer, RandomGamer
from minimax_gamer.minimax.agent import MinimaxGamer
from minimax_gamer.minimax.config import MinimaxConfig

# Version info as a tuple for programmatic access
VERSION_INFO = tuple(map(int, __version__.split('.')))
