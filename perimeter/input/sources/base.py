"""
Base Input Source - Abstract interface for input backends.
"""
import time
from abc import ABC, abstractmethod
from typing import List

from models import Vector2D
from perimeter.input.input_event import InputEvent


class InputSource(ABC):
    """Abstract base class for input sources.

    All input backends must implement this interface.
    """

    @abstractmethod
    def poll_events(self) -> List[InputEvent]:
        """Poll for new input events.

        Returns:
            List of InputEvent objects since last poll.
        """

    @abstractmethod
    def update(self, dt: float) -> None:
        """Update the input source, collecting events.

        Args:
            dt: Delta time in seconds since last update.
        """


class ScriptedInputSource(InputSource):
    """Input source fed programmatically (replays, tests, demos)."""

    def __init__(self):
        self._event_queue: List[InputEvent] = []

    def press(self, x: float, y: float) -> InputEvent:
        """Queue a primary-button press at (x, y)."""
        event = InputEvent(position=Vector2D(x=float(x), y=float(y)), timestamp=time.monotonic())
        self._event_queue.append(event)
        return event

    def poll_events(self) -> List[InputEvent]:
        events = self._event_queue.copy()
        self._event_queue.clear()
        return events

    def update(self, dt: float) -> None:
        pass
