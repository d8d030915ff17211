"""
Minimax search for rule-described games.

This package provides a gamer that needs no knowledge of the game beyond its
state machine. A move decision works by:

1. Tree construction: expand the game tree from the current state, either
   breadth-first until the deadline or depth-first to a fixed lookahead.
2. Evaluation: score every node bottom-up, alternating maximizing and
   minimizing plies, starting from the goals of terminal states.
3. Selection: play the move of the root child with the highest score.

The tree is not kept between decisions.
"""

from minimax_gamer.minimax.node import Node, count_nodes, tree_statistics
from minimax_gamer.minimax.agent import MinimaxGamer, MinimaxGamerFactory
from minimax_gamer.minimax.builder import (
    build_tree_breadth_first,
    build_tree_depth_limited,
    expand_node
)
from minimax_gamer.minimax.evaluator import max_value, min_value
from minimax_gamer.minimax.selector import (
    get_best_move,
    select_best_child,
    score_children
)
from minimax_gamer.minimax.config import MinimaxConfig

# Default configuration
DEFAULT_CONFIG = MinimaxConfig(
    strategy="breadth_first",  # Expand until the deadline
    max_depth=4,               # Only used by the depth-limited strategy
    minimax_buffer=1.0,        # Seconds reserved for scoring
    empty_root_policy="fallback"  # Play the first legal move if no tree was built
)

__all__ = [
    'MinimaxGamer',
    'MinimaxGamerFactory',
    'Node',
    'MinimaxConfig',
    'build_tree_breadth_first',
    'build_tree_depth_limited',
    'expand_node',
    'max_value',
    'min_value',
    'get_best_move',
    'select_best_child',
    'score_children',
    'count_nodes',
    'tree_statistics',
    'DEFAULT_CONFIG'
]
