"""
Abstract state machine for rule-described games.

A state machine is the only source of game-rule knowledge available to a
gamer. States, roles and moves are opaque hashable values; the state machine
decides what they look like and when two of them are equal.

Each concrete game implements a handful of primitive queries (initial state,
roles, legal moves, joint transitions, terminal test and goals). The search
code mostly relies on `get_next_states`, which folds the simultaneous choices
of all other roles into a list of successor states per move of the acting role.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from itertools import product
from typing import Dict, Hashable, List, Sequence

from minimax_gamer.core.exceptions import MoveDefinitionError


# Opaque game values, defined by the concrete state machine
MachineState = Hashable
Role = Hashable
Move = Hashable


class StateMachine(ABC):
    """
    Abstract base class for all state machines.

    Subclasses implement the primitive queries; the composite queries used by
    the search (`get_next_states`, `get_goals`) are built on top of them.
    """

    @abstractmethod
    def get_initial_state(self) -> MachineState:
        """Return the state a match starts in."""
        pass

    @abstractmethod
    def get_roles(self) -> List[Role]:
        """Return the roles of the game in their canonical order."""
        pass

    @abstractmethod
    def get_legal_moves(self, state: MachineState, role: Role) -> List[Move]:
        """
        Get the legal moves of a role in a state.

        Args:
            state: Current state
            role: Role whose moves are requested

        Returns:
            Ordered list of legal moves

        Raises:
            MoveDefinitionError: If the role has no legal moves defined
        """
        pass

    @abstractmethod
    def get_next_state(self, state: MachineState, moves: Sequence[Move]) -> MachineState:
        """
        Apply a joint move to a state.

        Args:
            state: Current state
            moves: One move per role, in the order of `get_roles()`

        Returns:
            The successor state

        Raises:
            TransitionDefinitionError: If the transition is not defined
        """
        pass

    @abstractmethod
    def is_terminal(self, state: MachineState) -> bool:
        """Check whether a state ends the match."""
        pass

    @abstractmethod
    def get_goal(self, state: MachineState, role: Role) -> int:
        """
        Get the goal value of a role in a terminal state.

        Goal values are expected in the closed range [0, 100].

        Raises:
            GoalDefinitionError: If no goal is defined for the role
        """
        pass

    def get_goals(self, state: MachineState) -> Dict[Role, int]:
        """Get the goal value of every role in a terminal state."""
        return {role: self.get_goal(state, role) for role in self.get_roles()}

    def get_legal_joint_moves(self, state: MachineState, role: Role, move: Move) -> List[List[Move]]:
        """
        Enumerate the joint moves in which `role` plays `move`.

        The other roles range over all of their legal moves; joint moves are
        produced in role order with the last role varying fastest.
        """
        choices = []
        for other in self.get_roles():
            if other == role:
                choices.append([move])
            else:
                choices.append(self.get_legal_moves(state, other))
        return [list(joint) for joint in product(*choices)]

    def get_next_states(self, state: MachineState, role: Role) -> Dict[Move, List[MachineState]]:
        """
        Map every legal move of `role` to the states it can lead to.

        A move can lead to several states because the simultaneous choices of
        the other roles are folded into the successor list.

        Args:
            state: Current state
            role: Acting role

        Returns:
            Insertion-ordered mapping from move to successor states
        """
        roles = self.get_roles()
        if role not in roles:
            raise MoveDefinitionError(state, role)

        next_states: Dict[Move, List[MachineState]] = {}
        for move in self.get_legal_moves(state, role):
            next_states[move] = [
                self.get_next_state(state, joint)
                for joint in self.get_legal_joint_moves(state, role, move)
            ]
        return next_states
