"""
Gamers: the objects that answer "what move now?" for one role.

This module defines the Gamer base class shared by all players and a
RandomGamer baseline. A gamer is bound to a state machine and a role, and is
asked for a move with an absolute deadline.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
import random
import time
from typing import Optional

from minimax_gamer.core.events import GamerSelectedMoveEvent, Subject
from minimax_gamer.core.statemachine import MachineState, Move, Role, StateMachine


class Gamer(Subject, ABC):
    """
    Base class for all gamers.

    Subclasses implement `select_move`; they are expected to publish a
    GamerSelectedMoveEvent for each decision.
    """

    def __init__(self, state_machine: StateMachine, role: Role, name: str = "Gamer"):
        super().__init__()
        self.state_machine = state_machine
        self.role = role
        self.name = name

    @abstractmethod
    def select_move(self, state: MachineState, timeout: Optional[float] = None) -> Move:
        """
        Select a move for the gamer's role.

        Args:
            state: Current state
            timeout: Absolute `time.time()` instant by which the move is due,
                or None for no bound

        Returns:
            A legal move of the gamer's role
        """
        pass

    def __str__(self) -> str:
        return f"{self.name} ({self.role})"


class RandomGamer(Gamer):
    """Gamer that plays a uniformly random legal move."""

    def __init__(
        self,
        state_machine: StateMachine,
        role: Role,
        name: str = "Random Gamer",
        seed: Optional[int] = None,
    ):
        super().__init__(state_machine, role, name)
        self.rng = random.Random(seed)

    def select_move(self, state: MachineState, timeout: Optional[float] = None) -> Move:
        start = time.time()
        moves = self.state_machine.get_legal_moves(state, self.role)
        move = self.rng.choice(moves)
        elapsed_ms = int((time.time() - start) * 1000)
        self.notify_observers(GamerSelectedMoveEvent(
            legal_moves=moves, selected_move=move, elapsed_ms=elapsed_ms
        ))
        return move
