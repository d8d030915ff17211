"""
Move selection on a built tree.

The root is the acting role's own choice, so each of its children starts a
minimizing ply. The selected child is the first one whose score is strictly
greater than everything before it, starting from a best score of MIN_GOAL;
ties therefore keep the earliest child.
"""
from __future__ import annotations
from typing import Dict, List, Optional, Tuple

from minimax_gamer.core.constants import MIN_GOAL
from minimax_gamer.core.statemachine import Move
from minimax_gamer.minimax.evaluator import min_value
from minimax_gamer.minimax.node import Node


def score_children(root: Node) -> List[int]:
    """
    Assign minimax scores to the root's children and everything below them.

    Args:
        root: Root node of a built tree

    Returns:
        The children's scores, in child order
    """
    scores = []
    for child in root.children:
        child.score = min_value(child)
        scores.append(child.score)
    return scores


def select_best_child(root: Node) -> Optional[int]:
    """
    Get the index of the best child of the root.

    Args:
        root: Root node of a built tree

    Returns:
        Index of the best child, or None if the root has no children
    """
    if not root.children:
        return None

    best_score = MIN_GOAL
    best_index = 0
    for index, score in enumerate(score_children(root)):
        if score > best_score:
            best_score = score
            best_index = index
    return best_index


def get_best_move(root: Node) -> Optional[Move]:
    """
    Get the move leading to the best child of the root.

    Args:
        root: Root node of a built tree

    Returns:
        The best move, or None if the root has no children
    """
    index = select_best_child(root)
    if index is None:
        return None
    return root.children[index].move


def get_move_scores(root: Node) -> Dict[Move, int]:
    """
    Get the worst-case score of every move from an evaluated root.

    A move can lead to several children (one per combination of the other
    roles' moves); its score is the lowest of them.

    Args:
        root: Root node whose children have been scored

    Returns:
        Dictionary mapping moves to scores, in enumeration order
    """
    result: Dict[Move, int] = {}
    for child in root.children:
        result[child.move] = min(result.get(child.move, child.score), child.score)
    return result


def get_principal_variation(root: Node, max_depth: int = 10) -> List[Tuple[Move, int]]:
    """
    Follow the best-scoring children from an evaluated root.

    Plies alternate between the acting role's choice (highest score) and the
    opponents' replies (lowest score).

    Args:
        root: Root node of an evaluated tree
        max_depth: Maximum number of plies to follow

    Returns:
        List of (move, score) pairs
    """
    result = []
    current = root
    maximizing = True
    while current.children and len(result) < max_depth:
        if maximizing:
            best = max(current.children, key=lambda c: c.score)
        else:
            best = min(current.children, key=lambda c: c.score)
        result.append((best.move, best.score))
        current = best
        maximizing = not maximizing
    return result
