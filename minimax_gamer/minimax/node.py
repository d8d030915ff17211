"""
Minimax tree node.

This module defines the Node class which represents one point in the
unrolled game tree: a state, the move that produced it and a score. There is
no separate tree class; the root node is the tree.
"""
from __future__ import annotations
from typing import Dict, List, Optional

from minimax_gamer.core.constants import UNKNOWN_SCORE
from minimax_gamer.core.statemachine import MachineState, Move


class Node:
    """
    A node in the minimax tree.

    Terminal nodes are created with their goal value as score and never get
    children. Other nodes start with a placeholder score which is overwritten
    when the evaluator visits them; if they are never expanded the placeholder
    is what the evaluator sees.
    """

    __slots__ = ("state", "move", "score", "terminal", "children")

    def __init__(
        self,
        state: MachineState,
        move: Optional[Move] = None,
        score: Optional[int] = None,
    ):
        """
        Initialize a node.

        Args:
            state: The game state this node represents
            move: The move that led to this state (None for the root)
            score: Fixed goal value for terminal states, None otherwise
        """
        self.state = state
        self.move = move
        self.terminal = score is not None
        self.score = score if score is not None else UNKNOWN_SCORE
        self.children: List[Node] = []

    @property
    def child_count(self) -> int:
        return len(self.children)

    def get_child(self, index: int) -> Node:
        return self.children[index]

    def add_child(self, node: Node) -> None:
        if self.terminal:
            raise ValueError("Terminal nodes cannot have children")
        self.children.append(node)

    def is_leaf(self) -> bool:
        return not self.children

    def render(self, indent: int = 0) -> str:
        """
        Render the subtree rooted at this node, one node per line.

        Args:
            indent: Indentation level of this node

        Returns:
            Multi-line string with children indented by tabs
        """
        lines = []
        stack = [(self, indent)]
        while stack:
            node, level = stack.pop()
            lines.append("\t" * level + node.describe())
            for child in reversed(node.children):
                stack.append((child, level + 1))
        return "\n".join(lines)

    def describe(self) -> str:
        return f"Node [move={self.move}, state={self.state}, score={self.score}]"

    def __repr__(self) -> str:
        return (f"Node(move={self.move!r}, score={self.score}, "
                f"terminal={self.terminal}, children={len(self.children)})")


def count_nodes(root: Node) -> int:
    """
    Count the total number of nodes in the tree.

    Args:
        root: Root node of the tree

    Returns:
        Total number of nodes
    """
    count = 0
    stack = [root]
    while stack:
        node = stack.pop()
        count += 1
        stack.extend(node.children)
    return count


def tree_statistics(root: Node) -> Dict[str, int]:
    """
    Collect size statistics of a tree.

    Args:
        root: Root node of the tree

    Returns:
        Dictionary with the node count, the depth in plies, the number of
        terminal leaves and the number of non-terminal leaves
    """
    stats = {"nodes": 0, "depth": 0, "terminal_leaves": 0, "unexpanded_leaves": 0}
    stack = [(root, 0)]
    while stack:
        node, level = stack.pop()
        stats["nodes"] += 1
        stats["depth"] = max(stats["depth"], level)
        if node.terminal:
            stats["terminal_leaves"] += 1
        elif not node.children:
            stats["unexpanded_leaves"] += 1
        stack.extend((child, level + 1) for child in node.children)
    return stats
