"""
Game tree construction.

Two strategies are provided:
1. Breadth-first expansion until a deadline (the default). Because every
   layer is completed before the next one is started, stopping at any time
   still leaves a balanced tree that is useful for scoring.
2. Depth-limited expansion to a fixed lookahead, independent of the clock.

Terminal successors become leaves holding their goal value and are never
expanded. States are not deduplicated: a state reachable through different
move sequences appears once per path.
"""
from __future__ import annotations
from collections import deque
import logging
import time
from typing import Callable, Deque, List, Optional, Tuple

from minimax_gamer.core.constants import NO_DEADLINE
from minimax_gamer.core.statemachine import MachineState, Role, StateMachine
from minimax_gamer.minimax.node import Node

logger = logging.getLogger(__name__)


def expand_node(state_machine: StateMachine, node: Node, role: Role) -> List[Node]:
    """
    Create the children of a node.

    Asks the state machine for the successors of every legal move of `role`
    and appends one child per (move, successor) pair, in enumeration order.

    Args:
        state_machine: Source of the game rules
        node: Node to expand
        role: Acting role whose goals score terminal children

    Returns:
        The new non-terminal children, which still need expanding
    """
    pending = []
    for move, successors in state_machine.get_next_states(node.state, role).items():
        for successor in successors:
            # Terminal states become fixed-score leaves
            if state_machine.is_terminal(successor):
                child = Node(successor, move, state_machine.get_goal(successor, role))
            else:
                child = Node(successor, move)
                pending.append(child)
            node.add_child(child)
    return pending


def build_tree_breadth_first(
    state_machine: StateMachine,
    initial_state: MachineState,
    role: Role,
    deadline: Optional[float] = NO_DEADLINE,
    clock: Callable[[], float] = time.time,
) -> Node:
    """
    Build a tree breadth-first until the deadline or until nothing is left to expand.

    The deadline is only checked between two node expansions, so a node with a
    large branching factor can overshoot it by the cost of its own expansion.

    Args:
        state_machine: Source of the game rules
        initial_state: State at the root of the tree
        role: Role the tree is built for
        deadline: Absolute time (as returned by `clock`) after which no
            further expansion starts, or None for no bound
        clock: Time source, `time.time` by default

    Returns:
        Root node of the tree
    """
    root = Node(initial_state)
    frontier: Deque[Node] = deque([root])
    expanded = 0

    while frontier and (deadline is None or clock() < deadline):
        node = frontier.popleft()
        frontier.extend(expand_node(state_machine, node, role))
        expanded += 1

    logger.debug("Breadth-first build expanded %d nodes, %d left in frontier",
                 expanded, len(frontier))
    return root


def build_tree_depth_limited(
    state_machine: StateMachine,
    initial_state: MachineState,
    role: Role,
    max_depth: int,
) -> Node:
    """
    Build a tree depth-first, limited by a maximum depth.

    Nodes at the depth limit are left childless even when they are not
    terminal. A negative `max_depth` expands the whole game, which only
    terminates for finite, acyclic games.

    Args:
        state_machine: Source of the game rules
        initial_state: State at the root of the tree
        role: Role the tree is built for
        max_depth: Number of plies to expand below the root

    Returns:
        Root node of the tree
    """
    root = Node(initial_state)
    stack: List[Tuple[Node, int]] = [(root, max_depth)]
    expanded = 0

    while stack:
        node, depth = stack.pop()
        if depth == 0:
            continue
        pending = expand_node(state_machine, node, role)
        expanded += 1
        # Reversed so that the first child is expanded first
        for child in reversed(pending):
            stack.append((child, depth - 1))

    logger.debug("Depth-limited build (max_depth=%d) expanded %d nodes", max_depth, expanded)
    return root
