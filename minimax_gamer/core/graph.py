"""
Table-driven state machine.

GraphStateMachine describes a game from the point of view of a single acting
role as an explicit graph: each non-terminal state maps the role's moves to
the successor states they may lead to, and each terminal state carries a goal
value. Cycles are allowed. It is mostly useful for small hand-written games
and for testing search code against known trees.
"""
from __future__ import annotations
from typing import Dict, List, Mapping, Optional, Sequence

from minimax_gamer.core.exceptions import (
    GoalDefinitionError, MoveDefinitionError, TransitionDefinitionError
)
from minimax_gamer.core.statemachine import MachineState, Move, Role, StateMachine


class GraphStateMachine(StateMachine):
    """
    State machine backed by explicit transition and goal tables.

    Args:
        transitions: Mapping from state to an ordered mapping of move to
            successor states
        goals: Mapping from terminal state to the goal value of the role
        initial_state: State a match starts in
        role: Name of the single acting role
    """

    def __init__(
        self,
        transitions: Mapping[MachineState, Mapping[Move, Sequence[MachineState]]],
        goals: Mapping[MachineState, int],
        initial_state: MachineState,
        role: Role = "player",
    ):
        overlap = set(transitions) & set(goals)
        if overlap:
            raise ValueError(f"Terminal states cannot have transitions: {sorted(map(repr, overlap))}")

        self.transitions: Dict[MachineState, Dict[Move, List[MachineState]]] = {
            state: {move: list(successors) for move, successors in moves.items()}
            for state, moves in transitions.items()
        }
        self.goals: Dict[MachineState, int] = dict(goals)
        self.initial_state = initial_state
        self.role = role

    def get_initial_state(self) -> MachineState:
        return self.initial_state

    def get_roles(self) -> List[Role]:
        return [self.role]

    def get_legal_moves(self, state: MachineState, role: Role) -> List[Move]:
        if role != self.role or state not in self.transitions:
            raise MoveDefinitionError(state, role)
        return list(self.transitions[state])

    def get_next_states(self, state: MachineState, role: Role) -> Dict[Move, List[MachineState]]:
        if role != self.role or state not in self.transitions:
            raise MoveDefinitionError(state, role)
        return {move: list(successors) for move, successors in self.transitions[state].items()}

    def get_next_state(self, state: MachineState, moves: Sequence[Move]) -> MachineState:
        """Follow the first successor listed for the role's move."""
        successors: Optional[List[MachineState]] = None
        if len(moves) == 1:
            successors = self.transitions.get(state, {}).get(moves[0])
        if not successors:
            raise TransitionDefinitionError(state, list(moves))
        return successors[0]

    def is_terminal(self, state: MachineState) -> bool:
        return state in self.goals

    def get_goal(self, state: MachineState, role: Role) -> int:
        if role != self.role or state not in self.goals:
            raise GoalDefinitionError(state, role)
        return self.goals[state]

    def __str__(self) -> str:
        return (f"GraphStateMachine(states={len(self.transitions) + len(self.goals)}, "
                f"terminals={len(self.goals)}, role={self.role!r})")
