"""
Events published by gamers.

Gamers publish an event after every move decision so that the host can log
or collect telemetry. Events carry plain data and are not interpreted by the
search code.
"""
from __future__ import annotations
from typing import Any, Callable, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class GamerSelectedMoveEvent(BaseModel):
    """Published once per move decision."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    legal_moves: List[Any] = Field(default_factory=list)
    """All legal moves of the gamer's role in the decision state"""

    selected_move: Any = None
    """The move that was returned to the host"""

    elapsed_ms: int = Field(ge=0)
    """Wall-clock time spent on the decision, in milliseconds"""

    def to_dict(self) -> Dict[str, Any]:
        """Convert the event to a JSON-friendly dictionary."""
        return {
            "legal_moves": [str(move) for move in self.legal_moves],
            "selected_move": str(self.selected_move),
            "elapsed_ms": self.elapsed_ms,
        }


Observer = Callable[[GamerSelectedMoveEvent], None]


class Subject:
    """Keeps a list of observers and notifies them of events."""

    def __init__(self):
        self._observers: List[Observer] = []

    def add_observer(self, observer: Observer) -> None:
        self._observers.append(observer)

    def remove_observer(self, observer: Observer) -> None:
        self._observers.remove(observer)

    def notify_observers(self, event: GamerSelectedMoveEvent) -> None:
        for observer in self._observers:
            observer(event)
