"""
Minimax Gamer Core Package

This package contains everything a gamer needs to know about a game, including:
- The abstract state machine interface and its errors
- Table-driven and tic-tac-toe state machines
- The gamer base class, a random baseline and move events
- A host loop for playing matches

All core components can be imported directly from this package.
"""

# State machines
from minimax_gamer.core.statemachine import StateMachine, MachineState, Move, Role
from minimax_gamer.core.graph import GraphStateMachine
from minimax_gamer.core.tictactoe import (
    TicTacToeStateMachine, TicTacToeState, Mark, XPLAYER, OPLAYER, NOOP
)

# Errors
from minimax_gamer.core.exceptions import (
    StateMachineError, TransitionDefinitionError, MoveDefinitionError,
    GoalDefinitionError, NoMoveAvailableError
)

# Gamers and events
from minimax_gamer.core.events import GamerSelectedMoveEvent
from minimax_gamer.core.player import Gamer, RandomGamer
from minimax_gamer.core.match import MatchResult, play_match

# Constants
from minimax_gamer.core.constants import MIN_GOAL, MAX_GOAL, NO_DEADLINE, UNBOUNDED_DEPTH

__all__ = [
    # State machines
    'StateMachine', 'MachineState', 'Move', 'Role',
    'GraphStateMachine',
    'TicTacToeStateMachine', 'TicTacToeState', 'Mark', 'XPLAYER', 'OPLAYER', 'NOOP',

    # Errors
    'StateMachineError', 'TransitionDefinitionError', 'MoveDefinitionError',
    'GoalDefinitionError', 'NoMoveAvailableError',

    # Gamers
    'GamerSelectedMoveEvent', 'Gamer', 'RandomGamer',
    'MatchResult', 'play_match',

    # Constants
    'MIN_GOAL', 'MAX_GOAL', 'NO_DEADLINE', 'UNBOUNDED_DEPTH',
]
