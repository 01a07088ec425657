"""
Perimeter Event Bus

The simulation talks to its collaborators (audio, leaderboard, HUD) only
by emitting named events. Collaborators subscribe per event type and
receive an immutable ``GameEvent`` payload.

A subscriber that raises is logged and skipped: a broken speaker or an
unwritable leaderboard file must never leave the session half-updated.
"""
from collections import defaultdict
from typing import Callable, DefaultDict, List

from models import GameEvent, GameEventType
from perimeter.logging import get_logger

log = get_logger('events')

EventHandler = Callable[[GameEvent], None]


class EventBus:
    """Synchronous publish/subscribe dispatcher.

    Handlers run in subscription order, inside the emit() call.

    Examples:
        >>> bus = EventBus()
        >>> seen = []
        >>> bus.subscribe(GameEventType.SCORE_CHANGED, seen.append)
        >>> bus.emit(GameEvent(type=GameEventType.SCORE_CHANGED, score=1))
        1
        >>> seen[0].score
        1
    """

    def __init__(self):
        self._handlers: DefaultDict[GameEventType, List[EventHandler]] = defaultdict(list)

    def subscribe(self, event_type: GameEventType, handler: EventHandler) -> None:
        """Register handler for event_type."""
        self._handlers[event_type].append(handler)

    def unsubscribe(self, event_type: GameEventType, handler: EventHandler) -> None:
        """Remove a previously registered handler (no-op if absent)."""
        handlers = self._handlers.get(event_type)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def handler_count(self, event_type: GameEventType) -> int:
        return len(self._handlers.get(event_type, ()))

    def emit(self, event: GameEvent) -> int:
        """Deliver event to every subscriber of its type.

        Returns:
            Number of handlers that completed without raising
        """
        log.trace("emit %s", event)
        delivered = 0
        for handler in list(self._handlers.get(event.type, ())):
            try:
                handler(event)
            except Exception:
                log.exception("Handler %r failed for %s", handler, event.type.value)
                continue
            delivered += 1
        return delivered

    def clear(self) -> None:
        """Drop every subscription."""
        self._handlers.clear()
