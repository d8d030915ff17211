"""
Exceptions raised by state machines and gamers.

State machine errors are never caught by the search code; they propagate
to whoever asked for a move.
"""
from typing import Any, Optional


class StateMachineError(Exception):
    """Base class for errors raised by a state machine."""


class TransitionDefinitionError(StateMachineError):
    """Raised when the successor of a state cannot be computed."""

    def __init__(self, state: Any, moves: Any = None):
        self.state = state
        self.moves = moves
        super().__init__(f"Transition is poorly defined for {moves!r} in {state!r}")


class MoveDefinitionError(StateMachineError):
    """Raised when the legal moves of a role cannot be computed."""

    def __init__(self, state: Any, role: Any):
        self.state = state
        self.role = role
        super().__init__(f"There are no legal moves defined for {role!r} in {state!r}")


class GoalDefinitionError(StateMachineError):
    """Raised when the goal value of a role cannot be computed."""

    def __init__(self, state: Any, role: Any):
        self.state = state
        self.role = role
        super().__init__(f"Goal value not defined for {role!r} in {state!r}")


class NoMoveAvailableError(Exception):
    """Raised when a gamer cannot produce any move for the current state."""

    def __init__(self, role: Any, reason: Optional[str] = None):
        self.role = role
        message = f"No move available for {role!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
