"""
Host loop for playing a match between gamers.

The host owns the clock and the current state: every step it asks each
gamer for a move with an absolute deadline, applies the joint move and stops
when the state machine reports a terminal state. Deadlines are not
enforced; a gamer that runs late is only recorded as such.
"""
from __future__ import annotations
from dataclasses import dataclass, field
import logging
import time
from typing import Any, Dict, List, Mapping, Optional

from minimax_gamer.core.player import Gamer
from minimax_gamer.core.statemachine import MachineState, Move, Role, StateMachine

logger = logging.getLogger(__name__)


@dataclass
class MatchResult:
    """Outcome of a match."""
    goals: Dict[Role, int] = field(default_factory=dict)
    history: List[List[Move]] = field(default_factory=list)
    final_state: Optional[MachineState] = None
    completed: bool = False
    late_moves: Dict[Role, int] = field(default_factory=dict)
    elapsed_time: float = 0.0

    @property
    def steps(self) -> int:
        return len(self.history)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "goals": {str(role): goal for role, goal in self.goals.items()},
            "history": [[str(move) for move in joint] for joint in self.history],
            "completed": self.completed,
            "steps": self.steps,
            "late_moves": {str(role): count for role, count in self.late_moves.items()},
            "elapsed_time": self.elapsed_time,
        }


def play_match(
    state_machine: StateMachine,
    gamers: Mapping[Role, Gamer],
    play_clock: Optional[float] = 10.0,
    max_steps: int = 1000,
) -> MatchResult:
    """
    Play a match from the initial state.

    Args:
        state_machine: Rules of the game
        gamers: One gamer per role
        play_clock: Seconds each step may take, or None for no deadline
        max_steps: Maximum number of steps before the match is abandoned

    Returns:
        MatchResult with the goals of every role if the match completed
    """
    roles = state_machine.get_roles()
    missing = [role for role in roles if role not in gamers]
    if missing:
        raise ValueError(f"No gamer for roles {missing}")

    result = MatchResult(late_moves={role: 0 for role in roles})
    state = state_machine.get_initial_state()
    start_time = time.time()

    while not state_machine.is_terminal(state) and result.steps < max_steps:
        joint = []
        for role in roles:
            # Gamers are asked one after another, each with a full play clock
            deadline = None if play_clock is None else time.time() + play_clock
            move = gamers[role].select_move(state, deadline)
            if deadline is not None and time.time() > deadline:
                result.late_moves[role] += 1
                logger.warning("%s answered after the deadline", gamers[role])
            joint.append(move)

        logger.debug("Step %d: %s", result.steps, [str(move) for move in joint])
        state = state_machine.get_next_state(state, joint)
        result.history.append(joint)

    result.final_state = state
    result.elapsed_time = time.time() - start_time
    if state_machine.is_terminal(state):
        result.completed = True
        result.goals = state_machine.get_goals(state)
    return result
