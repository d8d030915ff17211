#!/usr/bin/env python
"""
Tests for minimax tree construction, scoring and move selection.

These tests build small trees by hand or from table-driven state machines
and check the scores and moves against values worked out on paper.
"""
import sys
import unittest
from collections import Counter
from unittest import mock

from minimax_gamer.core.exceptions import GoalDefinitionError, MoveDefinitionError
from minimax_gamer.core.graph import GraphStateMachine
from minimax_gamer.core.tictactoe import (
    OPLAYER, XPLAYER, Mark, TicTacToeState, TicTacToeStateMachine
)
from minimax_gamer.minimax.builder import (
    build_tree_breadth_first, build_tree_depth_limited
)
from minimax_gamer.minimax.config import MinimaxConfig
from minimax_gamer.minimax.evaluator import max_value, min_value
from minimax_gamer.minimax.node import Node, count_nodes, tree_statistics
from minimax_gamer.minimax.selector import (
    get_best_move, get_move_scores, get_principal_variation, select_best_child
)


def make_state(rows, control=XPLAYER):
    """Build a tic-tac-toe state from three strings like 'xob'."""
    return TicTacToeState(tuple("".join(rows)), control)


def collect_scores(root):
    """Scores of all nodes in pre-order."""
    scores = []
    stack = [root]
    while stack:
        node = stack.pop()
        scores.append(node.score)
        stack.extend(reversed(node.children))
    return scores


def terminal_leaves(root):
    """Counter of (state, score) pairs over terminal leaves."""
    leaves = Counter()
    stack = [root]
    while stack:
        node = stack.pop()
        if node.terminal:
            leaves[(node.state, node.score)] += 1
        stack.extend(node.children)
    return leaves


def same_shape(a, b):
    """Check that two trees have the same moves, states and scores in the same order."""
    stack = [(a, b)]
    while stack:
        x, y = stack.pop()
        if (x.move, x.state, x.score, x.terminal) != (y.move, y.state, y.score, y.terminal):
            return False
        if len(x.children) != len(y.children):
            return False
        stack.extend(zip(x.children, y.children))
    return True


class FakeClock:
    """Clock advancing by one every time it is read."""

    def __init__(self, start=0):
        self.now = start

    def __call__(self):
        value = self.now
        self.now += 1
        return value


# Root with two moves, each leading to a terminal state
TWO_PLY = GraphStateMachine(
    transitions={"root": {"A": ["a"], "B": ["b"]}},
    goals={"a": 80, "b": 20},
    initial_state="root",
)

# A state with a self loop and an exit
CYCLE = GraphStateMachine(
    transitions={"s": {"loop": ["s"], "end": ["t"]}},
    goals={"t": 10},
    initial_state="s",
)


class TestNode(unittest.TestCase):
    """Test case for the tree node."""

    def test_root_node(self):
        root = Node("s0")
        self.assertIsNone(root.move)
        self.assertEqual(root.score, 0)
        self.assertFalse(root.terminal)
        self.assertTrue(root.is_leaf())

    def test_terminal_node_has_fixed_score(self):
        node = Node("t", "m", 75)
        self.assertTrue(node.terminal)
        self.assertEqual(node.score, 75)
        with self.assertRaises(ValueError):
            node.add_child(Node("u"))

    def test_children_keep_insertion_order(self):
        root = Node("s")
        for name in ["c", "a", "b"]:
            root.add_child(Node(name, name))
        self.assertEqual([root.get_child(i).move for i in range(root.child_count)], ["c", "a", "b"])

    def test_render(self):
        root = Node("s")
        child = Node("t", "m", 50)
        root.add_child(child)
        lines = root.render().split("\n")
        self.assertEqual(len(lines), 2)
        self.assertTrue(lines[1].startswith("\tNode [move=m"))

    def test_statistics(self):
        root = build_tree_breadth_first(TWO_PLY, "root", "player")
        self.assertEqual(count_nodes(root), 3)
        stats = tree_statistics(root)
        self.assertEqual(stats["depth"], 1)
        self.assertEqual(stats["terminal_leaves"], 2)
        self.assertEqual(stats["unexpanded_leaves"], 0)


class TestBreadthFirstBuilder(unittest.TestCase):
    """Test case for breadth-first tree construction."""

    def test_terminal_children_hold_goal(self):
        root = build_tree_breadth_first(TWO_PLY, "root", "player")
        self.assertEqual([c.move for c in root.children], ["A", "B"])
        self.assertEqual([c.score for c in root.children], [80, 20])
        self.assertTrue(all(c.terminal and c.is_leaf() for c in root.children))

    def test_terminal_children_are_not_expanded(self):
        with mock.patch.object(TWO_PLY, "get_next_states", wraps=TWO_PLY.get_next_states) as spy:
            build_tree_breadth_first(TWO_PLY, "root", "player")
        self.assertEqual(spy.call_count, 1)

    def test_one_child_per_successor(self):
        machine = GraphStateMachine(
            transitions={"s": {"m": ["a", "b", "c"]}},
            goals={"a": 1, "b": 2, "c": 3},
            initial_state="s",
        )
        root = build_tree_breadth_first(machine, "s", "player")
        self.assertEqual([c.move for c in root.children], ["m", "m", "m"])
        self.assertEqual([c.state for c in root.children], ["a", "b", "c"])

    def test_deadline_in_the_past_builds_nothing(self):
        with mock.patch.object(TWO_PLY, "get_next_states", wraps=TWO_PLY.get_next_states) as spy:
            root = build_tree_breadth_first(TWO_PLY, "root", "player", deadline=0.0)
        self.assertEqual(root.child_count, 0)
        spy.assert_not_called()

    def test_deadline_checked_between_expansions(self):
        # The clock reads 0, 1, 2 before the deadline of 3: three expansions
        root = build_tree_breadth_first(CYCLE, "s", "player", deadline=3, clock=FakeClock())
        stats = tree_statistics(root)
        self.assertEqual(stats["nodes"], 7)
        self.assertEqual(stats["depth"], 3)
        self.assertEqual(stats["unexpanded_leaves"], 1)

    def test_layers_complete_before_going_deeper(self):
        machine = GraphStateMachine(
            transitions={
                "r": {"x": ["a"], "y": ["b"]},
                "a": {"x": ["a1"], "y": ["a2"]},
                "b": {"x": ["b1"]},
            },
            goals={"a1": 1, "a2": 2, "b1": 3},
            initial_state="r",
        )
        # Clock reads 0 and 1: only the root and its first child are expanded
        root = build_tree_breadth_first(machine, "r", "player", deadline=2, clock=FakeClock())
        a, b = root.children
        self.assertEqual(a.child_count, 2)
        self.assertEqual(b.child_count, 0)

    def test_repeated_states_are_not_merged(self):
        root = build_tree_breadth_first(CYCLE, "s", "player", deadline=3, clock=FakeClock())
        loop_child = root.children[0]
        self.assertEqual(loop_child.state, root.state)
        self.assertIsNot(loop_child, root)

    def test_collaborator_errors_propagate(self):
        machine = GraphStateMachine(
            transitions={"s": {"m": ["unknown"]}},
            goals={},
            initial_state="s",
        )
        with self.assertRaises(MoveDefinitionError):
            build_tree_breadth_first(machine, "s", "player")

    def test_goal_errors_propagate(self):
        class BrokenGoals(GraphStateMachine):
            def get_goal(self, state, role):
                raise GoalDefinitionError(state, role)

        machine = BrokenGoals({"s": {"m": ["t"]}}, {"t": 0}, "s")
        with self.assertRaises(GoalDefinitionError):
            build_tree_breadth_first(machine, "s", "player")


class TestDepthLimitedBuilder(unittest.TestCase):
    """Test case for depth-limited tree construction."""

    def test_depth_zero_leaves_root_childless(self):
        root = build_tree_depth_limited(TWO_PLY, "root", "player", 0)
        self.assertTrue(root.is_leaf())

    def test_depth_limit_leaves_unknown_leaves(self):
        root = build_tree_depth_limited(CYCLE, "s", "player", 2)
        stats = tree_statistics(root)
        self.assertEqual(stats["depth"], 2)
        self.assertEqual(stats["unexpanded_leaves"], 1)
        self.assertEqual(stats["terminal_leaves"], 2)

    def test_matches_breadth_first_on_acyclic_games(self):
        state = make_state(["xob", "bxb", "obb"], control=OPLAYER)
        machine = TicTacToeStateMachine()
        for role in (XPLAYER, OPLAYER):
            bfs = build_tree_breadth_first(machine, state, role)
            dfs = build_tree_depth_limited(machine, state, role, -1)
            self.assertEqual(terminal_leaves(bfs), terminal_leaves(dfs))
            self.assertTrue(same_shape(bfs, dfs))


class TestEvaluator(unittest.TestCase):
    """Test case for minimax scoring."""

    def build_example(self):
        # root(max) -> a(min) -> [a1(max) -> [30, 60], 40]
        #           -> b(min) -> [50, 90]
        root = Node("root")
        a = Node("a", "A")
        a1 = Node("a1", "A1")
        a1.add_child(Node("t1", "x", 30))
        a1.add_child(Node("t2", "y", 60))
        a.add_child(a1)
        a.add_child(Node("t3", "A2", 40))
        b = Node("b", "B")
        b.add_child(Node("t4", "x", 50))
        b.add_child(Node("t5", "y", 90))
        root.add_child(a)
        root.add_child(b)
        return root, a, a1, b

    def test_leaf_returns_its_score(self):
        for node in (Node("t", "m", 42), Node("s")):
            self.assertEqual(max_value(node), node.score)
            self.assertEqual(min_value(node), node.score)
        unexpanded = Node("s")
        unexpanded.score = 7
        self.assertEqual(max_value(unexpanded), 7)
        self.assertEqual(min_value(unexpanded), 7)

    def test_alternating_plies(self):
        root, a, a1, b = self.build_example()
        self.assertEqual(max_value(root), 50)
        self.assertEqual(a.score, 40)
        self.assertEqual(a1.score, 60)
        self.assertEqual(b.score, 50)
        # The evaluated node itself is left to the caller
        self.assertEqual(root.score, 0)

    def test_min_value_starts_from_minimizing_ply(self):
        root, a, a1, b = self.build_example()
        # a as max: max(min(30, 60), 40) = 40; b as max: 90
        self.assertEqual(min_value(root), 40)

    def test_idempotent(self):
        root, _, _, _ = self.build_example()
        first = max_value(root)
        scores = collect_scores(root)
        self.assertEqual(max_value(root), first)
        self.assertEqual(collect_scores(root), scores)

    def test_terminal_scores_are_not_recomputed(self):
        root, _, _, _ = self.build_example()
        max_value(root)
        leaves = [n for n in (root.children[1].children) if n.terminal]
        self.assertEqual([n.score for n in leaves], [50, 90])

    def test_scores_below_range_are_clamped(self):
        # Goals outside [0, 100] are a precondition violation: max starts at 0
        root = Node("r")
        root.add_child(Node("a", "A", -5))
        root.add_child(Node("b", "B", -10))
        self.assertEqual(max_value(root), 0)

    def test_deep_tree_does_not_recurse(self):
        depth = sys.getrecursionlimit() * 3
        root = Node(0)
        node = root
        for i in range(1, depth):
            child = Node(i, i)
            node.add_child(child)
            node = child
        node.add_child(Node(depth, depth, 70))
        self.assertEqual(max_value(root), 70)
        self.assertEqual(count_nodes(root), depth + 1)


class TestSelector(unittest.TestCase):
    """Test case for move selection."""

    def test_two_ply(self):
        root = build_tree_breadth_first(TWO_PLY, "root", "player")
        self.assertEqual(get_best_move(root), "A")
        self.assertEqual(get_move_scores(root), {"A": 80, "B": 20})

    def test_later_child_wins_with_strictly_greater_score(self):
        machine = GraphStateMachine({"r": {"A": ["a"], "B": ["b"]}}, {"a": 20, "b": 80}, "r")
        root = build_tree_breadth_first(machine, "r", "player")
        self.assertEqual(select_best_child(root), 1)
        self.assertEqual(get_best_move(root), "B")

    def test_ties_keep_first_child(self):
        machine = GraphStateMachine({"r": {"A": ["a"], "B": ["b"]}}, {"a": 0, "b": 0}, "r")
        root = build_tree_breadth_first(machine, "r", "player")
        self.assertEqual(get_best_move(root), "A")

        machine = GraphStateMachine({"r": {"A": ["a"], "B": ["b"]}}, {"a": 60, "b": 60}, "r")
        root = build_tree_breadth_first(machine, "r", "player")
        self.assertEqual(get_best_move(root), "A")

    def test_empty_root(self):
        root = Node("r")
        self.assertIsNone(select_best_child(root))
        self.assertIsNone(get_best_move(root))

    def test_move_score_is_worst_successor(self):
        machine = GraphStateMachine(
            {"r": {"A": ["a1", "a2"], "B": ["b"]}},
            {"a1": 90, "a2": 10, "b": 50},
            "r",
        )
        root = build_tree_breadth_first(machine, "r", "player")
        # Each (move, successor) child is scored on its own; A's first child wins
        self.assertEqual(get_best_move(root), "A")
        self.assertEqual(get_move_scores(root), {"A": 10, "B": 50})

    def test_distinct_moves_with_equal_strings_are_kept_apart(self):
        class Move:
            def __init__(self, name):
                self.name = name

            def __str__(self):
                return "move"

        first, second = Move("first"), Move("second")
        machine = GraphStateMachine(
            {"r": {first: ["a"], second: ["b"]}},
            {"a": 30, "b": 70},
            "r",
        )
        root = build_tree_breadth_first(machine, "r", "player")
        self.assertIs(get_best_move(root), second)
        self.assertEqual(get_move_scores(root), {first: 30, second: 70})

    def test_takes_immediate_win(self):
        # x to move: (3, 3) wins, and o wins there on any other move
        state = make_state(["xbo", "bxo", "bbb"])
        root = build_tree_breadth_first(TicTacToeStateMachine(), state, XPLAYER)
        move = get_best_move(root)
        self.assertEqual((move.row, move.col), (3, 3))

    def test_blocks_immediate_loss(self):
        # x to move, cannot win at once, must block (1, 3)
        state = make_state(["oob", "xbb", "bbx"])
        root = build_tree_breadth_first(TicTacToeStateMachine(), state, XPLAYER)
        move = get_best_move(root)
        self.assertEqual((move.row, move.col), (1, 3))
        scores = get_move_scores(root)
        # Blocking also sets up a double threat
        self.assertEqual(scores[Mark(1, 3)], 100)
        self.assertTrue(all(score == 0 for key, score in scores.items() if key != Mark(1, 3)))

    def test_principal_variation(self):
        state = make_state(["xbo", "bxo", "bbb"])
        root = build_tree_breadth_first(TicTacToeStateMachine(), state, XPLAYER)
        get_best_move(root)
        line = get_principal_variation(root)
        self.assertEqual(len(line), 1)
        self.assertEqual(line[0][1], 100)

    def test_result_is_a_legal_move(self):
        machine = TicTacToeStateMachine()
        state = make_state(["xbb", "bob", "bbb"])
        root = build_tree_depth_limited(machine, state, XPLAYER, 3)
        self.assertIn(get_best_move(root), machine.get_legal_moves(state, XPLAYER))


class TestMinimaxConfig(unittest.TestCase):
    """Test case for configuration validation."""

    def test_defaults(self):
        config = MinimaxConfig()
        self.assertEqual(config.strategy, "breadth_first")
        self.assertEqual(config.minimax_buffer, 1.0)
        self.assertEqual(config.empty_root_policy, "fallback")

    def test_invalid_values(self):
        with self.assertRaises(ValueError):
            MinimaxConfig(strategy="alpha_beta")
        with self.assertRaises(ValueError):
            MinimaxConfig(minimax_buffer=-1)
        with self.assertRaises(ValueError):
            MinimaxConfig(empty_root_policy="guess")

    def test_presets(self):
        self.assertEqual(MinimaxConfig.fast().strategy, "depth_limited")
        self.assertEqual(MinimaxConfig.deep().max_depth, -1)

    def test_dict_conversion(self):
        config = MinimaxConfig.from_dict({"strategy": "depth_limited", "max_depth": 2, "unknown": 1})
        self.assertEqual(config.max_depth, 2)
        data = config.to_dict()
        self.assertEqual(set(data), {"strategy", "max_depth", "minimax_buffer", "empty_root_policy"})
        self.assertEqual(MinimaxConfig.from_dict(data), config)


if __name__ == "__main__":
    unittest.main()
