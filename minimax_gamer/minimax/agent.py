"""
Minimax gamer.

This module provides the MinimaxGamer class, a ready-to-use gamer that
builds a game tree as far as the clock allows, scores it with minimax and
plays the move with the highest score. The tree is rebuilt from scratch for
every decision and discarded afterwards.
"""
import logging
import time
from typing import Any, Callable, Dict, List, Optional, Tuple

from rich.console import Console
from rich.table import Table

from minimax_gamer.core.events import GamerSelectedMoveEvent
from minimax_gamer.core.exceptions import NoMoveAvailableError
from minimax_gamer.core.player import Gamer
from minimax_gamer.core.statemachine import MachineState, Move, Role, StateMachine
from minimax_gamer.minimax.builder import build_tree_breadth_first, build_tree_depth_limited
from minimax_gamer.minimax.config import MinimaxConfig
from minimax_gamer.minimax.node import Node, tree_statistics
from minimax_gamer.minimax.selector import get_best_move, get_move_scores, get_principal_variation

logger = logging.getLogger(__name__)


class MinimaxGamer(Gamer):
    """
    Gamer selecting moves with a full-width minimax search.

    The deadline passed to `select_move` is advisory: tree construction stops
    `config.minimax_buffer` seconds before it, but a single node expansion is
    never interrupted. Enforcing a hard timeout is up to the host.
    """

    def __init__(
        self,
        state_machine: StateMachine,
        role: Role,
        config: Optional[MinimaxConfig] = None,
        name: str = "Minimax Gamer",
        verbose: bool = False,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize a minimax gamer.

        Args:
            state_machine: Source of the game rules
            role: Role this gamer plays
            config: Minimax configuration parameters
            name: Name of the gamer
            verbose: Whether to print a summary of each decision
            clock: Time source used for deadlines and timings
        """
        super().__init__(state_machine, role, name)
        self.config = config or MinimaxConfig()
        self.verbose = verbose
        self.clock = clock

        # Statistics from the most recent decision
        self.last_stats: Dict[str, Any] = {}

        # Root of the most recent tree, kept for inspection only
        self.last_root: Optional[Node] = None

        self._console: Optional[Console] = None

    def build_tree(self, state: MachineState, timeout: Optional[float]) -> Node:
        """
        Build the tree for one decision using the configured strategy.

        Args:
            state: State at the root
            timeout: Absolute deadline of the decision, or None

        Returns:
            Root node of the tree
        """
        if self.config.strategy == "depth_limited":
            return build_tree_depth_limited(
                self.state_machine, state, self.role, self.config.max_depth
            )

        deadline = None if timeout is None else timeout - self.config.minimax_buffer
        return build_tree_breadth_first(
            self.state_machine, state, self.role, deadline, clock=self.clock
        )

    def select_move(self, state: MachineState, timeout: Optional[float] = None) -> Move:
        """
        Select a move using minimax.

        Args:
            state: Current state
            timeout: Absolute deadline (same time base as `clock`), or None
                to build the whole tree

        Returns:
            Selected move

        Raises:
            NoMoveAvailableError: If the tree is empty and the configuration
                forbids falling back, or if the role has no legal moves
            StateMachineError: Whatever the state machine raises
        """
        start_time = self.clock()

        root = self.build_tree(state, timeout)
        build_done = self.clock()

        move = get_best_move(root)
        evaluation_done = self.clock()

        moves = self.state_machine.get_legal_moves(state, self.role)

        used_fallback = False
        if move is None:
            move = self._handle_empty_root(moves)
            used_fallback = True

        stats = tree_statistics(root)
        stop_time = self.clock()

        stats.update({
            "strategy": self.config.strategy,
            "root_children": root.child_count,
            "build_time": build_done - start_time,
            "evaluation_time": evaluation_done - build_done,
            "total_time": stop_time - start_time,
            "used_fallback": used_fallback,
        })
        self.last_stats = stats
        self.last_root = root

        logger.info("%s selected %s (%d nodes, depth %d, %.3fs)",
                    self.name, move, stats["nodes"], stats["depth"], stats["total_time"])

        if self.verbose:
            self._print_search_info(move, stats)

        self.notify_observers(GamerSelectedMoveEvent(
            legal_moves=moves,
            selected_move=move,
            elapsed_ms=max(0, int((stop_time - start_time) * 1000)),
        ))
        return move

    def _handle_empty_root(self, moves: List[Move]) -> Move:
        """Apply the configured policy when the tree has no children."""
        if self.config.empty_root_policy == "raise":
            raise NoMoveAvailableError(self.role, "tree construction produced no children")
        if not moves:
            raise NoMoveAvailableError(self.role, "no legal moves")

        logger.warning("%s: no tree was built before the deadline, playing first legal move %s",
                       self.name, moves[0])
        return moves[0]

    def _print_search_info(self, move: Move, stats: Dict[str, Any]) -> None:
        """
        Print information about the decision.

        Args:
            move: Selected move
            stats: Decision statistics
        """
        if self._console is None:
            self._console = Console()
        console = self._console
        console.print(f"\n[bold]{self.name}[/bold] ({self.role}) selected: [cyan]{move}[/cyan]")
        console.print(f"Nodes: {stats['nodes']}  Depth: {stats['depth']}  "
                      f"Unexpanded leaves: {stats['unexpanded_leaves']}")
        console.print(f"Time: build {stats['build_time']:.3f}s, "
                      f"evaluation {stats['evaluation_time']:.3f}s")
        if stats["used_fallback"]:
            console.print("[yellow]No tree was built, used fallback move[/yellow]")

        scores = self.get_move_scores()
        if scores:
            table = Table(title="Move scores")
            table.add_column("Move")
            table.add_column("Score", justify="right")
            for scored_move, score in sorted(scores.items(), key=lambda x: x[1], reverse=True):
                table.add_row(str(scored_move), str(score))
            console.print(table)

    def get_last_statistics(self) -> Dict[str, Any]:
        """
        Get statistics from the most recent decision.

        Returns:
            Dictionary of decision statistics
        """
        return self.last_stats

    def get_move_scores(self) -> Dict[Move, int]:
        """
        Get the score of every move from the last decision.

        Returns:
            Dictionary mapping moves to scores
        """
        if self.last_root is None:
            return {}
        return get_move_scores(self.last_root)

    def get_principal_variation(self) -> List[Tuple[Move, int]]:
        """
        Get the expected line of play from the last decision.

        Returns:
            List of (move, score) pairs
        """
        if self.last_root is None:
            return []
        return get_principal_variation(self.last_root)

    def __str__(self) -> str:
        return f"{self.name} (minimax, {self.config.strategy})"


class MinimaxGamerFactory:
    """
    Factory for creating minimax gamers with different configurations.
    """

    @staticmethod
    def create_standard(state_machine: StateMachine, role: Role) -> MinimaxGamer:
        """Create a gamer expanding breadth-first until the deadline."""
        return MinimaxGamer(state_machine, role, MinimaxConfig.default(), name="Minimax")

    @staticmethod
    def create_fast(state_machine: StateMachine, role: Role) -> MinimaxGamer:
        """Create a gamer with a shallow fixed lookahead."""
        return MinimaxGamer(state_machine, role, MinimaxConfig.fast(), name="Fast Minimax")

    @staticmethod
    def create_custom(
        state_machine: StateMachine,
        role: Role,
        strategy: str = "breadth_first",
        max_depth: int = 4,
        minimax_buffer: float = 1.0,
        name: str = "Custom Minimax",
        verbose: bool = False,
    ) -> MinimaxGamer:
        """
        Create a custom minimax gamer.

        Args:
            state_machine: Source of the game rules
            role: Role the gamer plays
            strategy: 'breadth_first' or 'depth_limited'
            max_depth: Lookahead for the depth-limited strategy
            minimax_buffer: Seconds reserved for scoring before the deadline
            name: Name of the gamer
            verbose: Whether to print decision summaries

        Returns:
            MinimaxGamer
        """
        config = MinimaxConfig(
            strategy=strategy,
            max_depth=max_depth,
            minimax_buffer=minimax_buffer,
        )
        return MinimaxGamer(state_machine, role, config, name=name, verbose=verbose)
