"""
Mouse Input Source - Mouse clicks (and SDL-synthesized touch clicks) as fire commands.
"""
import time
from typing import List

import pygame

from models import Vector2D
from perimeter.input.input_event import InputEvent
from perimeter.input.sources.base import InputSource


class MouseInputSource(InputSource):
    """Converts pygame left-button presses into InputEvent models.

    Only MOUSEBUTTONDOWN events are taken off the pygame queue; everything
    else stays there for the main loop.
    """

    def __init__(self):
        """Initialize the mouse input source."""
        self._event_queue: List[InputEvent] = []

    def poll_events(self) -> List[InputEvent]:
        """Get new input events since last poll."""
        events = self._event_queue.copy()
        self._event_queue.clear()
        return events

    def update(self, dt: float) -> None:
        """Collect pending presses from the pygame queue."""
        for event in pygame.event.get(pygame.MOUSEBUTTONDOWN):
            self.handle_event(event)

    def handle_event(self, event: pygame.event.Event) -> None:
        """Queue an InputEvent for a primary-button press."""
        if event.type != pygame.MOUSEBUTTONDOWN or event.button != 1:
            return
        pos_x, pos_y = event.pos
        self._event_queue.append(InputEvent(
            position=Vector2D(x=float(pos_x), y=float(pos_y)),
            timestamp=time.monotonic(),
        ))

    def clear(self) -> None:
        """Clear the event queue."""
        self._event_queue.clear()
