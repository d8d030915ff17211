"""
Minimax scoring of a built tree.

Every ply below the acting role's own choice is treated as an opponent
minimizing the acting role's goal, whatever the number of roles in the game.
That is exact for two-role zero-sum games and an approximation otherwise.

Scores are assumed to lie in [MIN_GOAL, MAX_GOAL]: the max and min
accumulators start at those bounds, so a max node whose children all score
below MIN_GOAL still reports MIN_GOAL.

The traversal uses an explicit stack, so deep trees do not hit the
interpreter's recursion limit.
"""
from __future__ import annotations
from typing import List

from minimax_gamer.core.constants import MAX_GOAL, MIN_GOAL
from minimax_gamer.minimax.node import Node


class _Frame:
    __slots__ = ("node", "maximizing", "index", "best")

    def __init__(self, node: Node, maximizing: bool):
        self.node = node
        self.maximizing = maximizing
        self.index = 0
        self.best = MIN_GOAL if maximizing else MAX_GOAL

    def offer(self, value: int) -> None:
        if self.maximizing:
            if value > self.best:
                self.best = value
        elif value < self.best:
            self.best = value


def _evaluate(node: Node, maximizing: bool) -> int:
    """
    Score the subtree below `node` in post-order.

    Each descendant gets the value of its own (opposite parity) ply assigned
    to its score; the value of `node` itself is returned, not assigned.
    """
    if not node.children:
        return node.score

    stack: List[_Frame] = [_Frame(node, maximizing)]
    while True:
        frame = stack[-1]
        if frame.index < len(frame.node.children):
            child = frame.node.children[frame.index]
            frame.index += 1
            if child.children:
                stack.append(_Frame(child, not frame.maximizing))
            else:
                frame.offer(child.score)
            continue

        # All children scored
        stack.pop()
        if not stack:
            return frame.best
        frame.node.score = frame.best
        stack[-1].offer(frame.best)


def max_value(node: Node) -> int:
    """
    Value of `node` on a maximizing ply.

    Children are scored as minimizing plies and get their scores assigned.
    A childless node returns its current score unchanged.
    """
    return _evaluate(node, maximizing=True)


def min_value(node: Node) -> int:
    """
    Value of `node` on a minimizing ply.

    Children are scored as maximizing plies and get their scores assigned.
    A childless node returns its current score unchanged.
    """
    return _evaluate(node, maximizing=False)
