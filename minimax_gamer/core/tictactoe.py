"""
Tic-tac-toe as a two-role state machine.

Both roles move in every step; the role not in control can only play `noop`.
This mirrors how simultaneous-move game descriptions encode alternating
games, and exercises the successor folding in `StateMachine.get_next_states`.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Sequence, Tuple

from minimax_gamer.core.exceptions import (
    GoalDefinitionError, MoveDefinitionError, TransitionDefinitionError
)
from minimax_gamer.core.statemachine import Move, Role, StateMachine


XPLAYER = "xplayer"
OPLAYER = "oplayer"
NOOP = "noop"
BLANK = "b"

MARKS = {XPLAYER: "x", OPLAYER: "o"}

LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)


class Mark(NamedTuple):
    """Place the role's mark on a cell (1-indexed like the usual descriptions)."""
    row: int
    col: int

    def __str__(self) -> str:
        return f"(mark {self.row} {self.col})"


@dataclass(frozen=True)
class TicTacToeState:
    """Board cells in row-major order plus the role in control."""
    cells: Tuple[str, ...] = (BLANK,) * 9
    control: str = XPLAYER

    def cell(self, row: int, col: int) -> str:
        return self.cells[(row - 1) * 3 + (col - 1)]

    def winner(self) -> Optional[str]:
        """Return the role owning a complete line, if any."""
        for a, b, c in LINES:
            mark = self.cells[a]
            if mark != BLANK and mark == self.cells[b] == self.cells[c]:
                return XPLAYER if mark == MARKS[XPLAYER] else OPLAYER
        return None

    def is_full(self) -> bool:
        return BLANK not in self.cells

    def __str__(self) -> str:
        rows = ["".join(self.cells[i:i + 3]) for i in range(0, 9, 3)]
        return f"{'/'.join(rows)} ({self.control})"


class TicTacToeStateMachine(StateMachine):
    """Standard 3x3 tic-tac-toe; goals are 100 for a win, 50 for a draw and 0 for a loss."""

    def __init__(self, initial_state: Optional[TicTacToeState] = None):
        self.initial_state = initial_state or TicTacToeState()

    def get_initial_state(self) -> TicTacToeState:
        return self.initial_state

    def get_roles(self) -> List[Role]:
        return [XPLAYER, OPLAYER]

    def get_legal_moves(self, state: TicTacToeState, role: Role) -> List[Move]:
        if role not in MARKS:
            raise MoveDefinitionError(state, role)
        if self.is_terminal(state):
            raise MoveDefinitionError(state, role)
        if role != state.control:
            return [NOOP]
        return [
            Mark(row, col)
            for row in range(1, 4)
            for col in range(1, 4)
            if state.cell(row, col) == BLANK
        ]

    def get_next_state(self, state: TicTacToeState, moves: Sequence[Move]) -> TicTacToeState:
        roles = self.get_roles()
        if len(moves) != len(roles) or self.is_terminal(state):
            raise TransitionDefinitionError(state, list(moves))

        cells = list(state.cells)
        for role, move in zip(roles, moves):
            if role != state.control:
                if move != NOOP:
                    raise TransitionDefinitionError(state, list(moves))
                continue
            if not isinstance(move, Mark) or state.cell(move.row, move.col) != BLANK:
                raise TransitionDefinitionError(state, list(moves))
            cells[(move.row - 1) * 3 + (move.col - 1)] = MARKS[role]

        control = OPLAYER if state.control == XPLAYER else XPLAYER
        return TicTacToeState(tuple(cells), control)

    def is_terminal(self, state: TicTacToeState) -> bool:
        return state.winner() is not None or state.is_full()

    def get_goal(self, state: TicTacToeState, role: Role) -> int:
        if role not in MARKS or not self.is_terminal(state):
            raise GoalDefinitionError(state, role)
        winner = state.winner()
        if winner is None:
            return 50
        return 100 if winner == role else 0
