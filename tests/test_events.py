"""
Unit tests for the EventBus.
"""

from models import GameEvent, GameEventType
from perimeter.events import EventBus


def score_event(score=1):
    return GameEvent(type=GameEventType.SCORE_CHANGED, score=score, points=score * 100)


class TestEventBus:
    """Tests for subscribe/emit/unsubscribe."""

    def test_delivers_to_subscribers_of_type(self):
        bus = EventBus()
        scores, overs = [], []
        bus.subscribe(GameEventType.SCORE_CHANGED, scores.append)
        bus.subscribe(GameEventType.GAME_OVER, overs.append)

        delivered = bus.emit(score_event(2))

        assert delivered == 1
        assert [e.score for e in scores] == [2]
        assert overs == []

    def test_handlers_run_in_subscription_order(self):
        bus = EventBus()
        order = []
        bus.subscribe(GameEventType.SCORE_CHANGED, lambda e: order.append('first'))
        bus.subscribe(GameEventType.SCORE_CHANGED, lambda e: order.append('second'))

        bus.emit(score_event())

        assert order == ['first', 'second']

    def test_failing_handler_does_not_stop_others(self):
        bus = EventBus()
        received = []

        def broken(event):
            raise OSError("disk full")

        bus.subscribe(GameEventType.SCORE_CHANGED, broken)
        bus.subscribe(GameEventType.SCORE_CHANGED, received.append)

        delivered = bus.emit(score_event())

        assert delivered == 1
        assert len(received) == 1

    def test_emit_without_subscribers(self):
        assert EventBus().emit(score_event()) == 0

    def test_unsubscribe(self):
        bus = EventBus()
        received = []
        bus.subscribe(GameEventType.SCORE_CHANGED, received.append)
        bus.unsubscribe(GameEventType.SCORE_CHANGED, received.append)
        # Removing twice is harmless
        bus.unsubscribe(GameEventType.SCORE_CHANGED, received.append)

        bus.emit(score_event())

        assert received == []
        assert bus.handler_count(GameEventType.SCORE_CHANGED) == 0

    def test_clear(self):
        bus = EventBus()
        bus.subscribe(GameEventType.GAME_OVER, lambda e: None)
        bus.clear()
        assert bus.handler_count(GameEventType.GAME_OVER) == 0
