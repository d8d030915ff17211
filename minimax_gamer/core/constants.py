"""
Constants for the minimax gamer.

This module defines the goal range assumed by the minimax scorer, the
deadline sentinel and the default time budgets used when selecting a move.
"""
from typing import Final, Optional


# Goal values reported by the state machine are assumed to lie in this range.
# The minimax accumulators start at these bounds, so goals outside of it
# produce wrong move choices without raising.
MIN_GOAL: Final[int] = 0
MAX_GOAL: Final[int] = 100

# Score given to non-terminal nodes that were never expanded
UNKNOWN_SCORE: Final[int] = MIN_GOAL

# Deadline meaning "no bound"; only safe for finite, acyclic games
NO_DEADLINE: Final[Optional[float]] = None

# Seconds reserved for scoring the tree after construction stops
DEFAULT_MINIMAX_BUFFER: Final[float] = 1.0

# Depth sentinel for the depth-limited builder
UNBOUNDED_DEPTH: Final[int] = -1
