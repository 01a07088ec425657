"""
Unit tests for the GameSession controller.

Tests cover:
- start/stop/reset lifecycle and state transitions
- fire() aiming and the not-running no-op
- Spawner cadence on the shared scheduler
- Game over: single event, halted tasks, leaderboard payload
- Restart idempotence
"""

from unittest.mock import patch

import pytest

from models import Color, GameEventType, Point2D, SessionState, Vector2D
from perimeter import config
from perimeter.entities import Enemy

GREEN = Color.from_hex('#00FF9C')


def events_of(recorder, event_type):
    return [event for event in recorder if event.type == event_type]


def killer_enemy():
    """An enemy that reaches the player on the next tick."""
    return Enemy(x=421, y=300, radius=10, color=GREEN, velocity=Vector2D(x=-1.0, y=0.0))


class TestLifecycle:
    """Tests for start(), stop() and reset()."""

    def test_initially_idle(self, session):
        assert session.state == SessionState.IDLE
        assert session.player is None
        assert session.score == 0

    def test_start_places_player_and_runs(self, session, recorder):
        session.start()

        assert session.state == SessionState.RUNNING
        assert session.is_running
        assert (session.player.x, session.player.y) == (400, 300)
        assert [e.type for e in recorder] == [
            GameEventType.SESSION_STARTED,
            GameEventType.SCORE_CHANGED,
        ]
        assert recorder[1].score == 0

    def test_start_schedules_engine_and_spawner(self, session, scheduler):
        session.start()

        assert sorted(task.name for task in scheduler.tasks) == ['engine', 'spawner']

    def test_each_frame_ticks_engine(self, session, scheduler):
        session.start()
        for _ in range(5):
            scheduler.run_frame()
        assert session.frame == 5

    def test_stop_cancels_tasks(self, session, scheduler, fake_clock):
        session.start()
        session.stop()

        assert session.state == SessionState.IDLE
        assert scheduler.tasks == []
        assert not session.spawner.running

        fake_clock.advance(10_000)
        scheduler.run_frame()
        assert session.frame == 0
        assert session.enemies == []

    def test_stop_keeps_score_and_entities(self, session, scheduler):
        session.start()
        session.engine.score = 4
        session.enemies.append(killer_enemy())

        session.stop()

        assert session.score == 4
        assert len(session.enemies) == 1

    def test_reset_clears_and_reports_zero(self, session, recorder):
        session.start()
        session.engine.score = 3
        recorder.clear()

        session.reset()

        assert session.state == SessionState.IDLE
        assert session.score == 0
        assert session.enemies == []
        assert session.projectiles == []
        assert [(e.type, e.score) for e in recorder] == [(GameEventType.SCORE_CHANGED, 0)]

    def test_reset_with_zero_score_is_silent(self, session, recorder):
        session.start()
        recorder.clear()

        session.reset()

        assert recorder == []

    def test_restart_while_running(self, session, scheduler, fake_clock):
        session.start()
        session.fire(Point2D(x=800, y=300))
        fake_clock.advance(config.SPAWN_INTERVAL_MS)
        scheduler.run_frame()
        assert session.enemies

        session.start()

        assert session.state == SessionState.RUNNING
        assert session.enemies == []
        assert session.projectiles == []
        assert session.score == 0
        assert session.frame == 0
        assert sorted(task.name for task in scheduler.tasks) == ['engine', 'spawner']


class TestFire:
    """Tests for fire()."""

    def test_fire_towards_right_edge(self, session, scheduler):
        """Target (800, 300) from (400, 300) gives velocity (4, 0)."""
        session.start()

        projectile = session.fire(Point2D(x=800, y=300))

        assert (projectile.velocity.x, projectile.velocity.y) == (4.0, 0.0)
        assert (projectile.x, projectile.y) == (400, 300)

        scheduler.run_frame()

        assert (projectile.x, projectile.y) == (404, 300)

    def test_fire_accepts_any_point_like(self, session):
        session.start()
        projectile = session.fire(Vector2D(x=400, y=0))
        assert projectile.velocity.x == pytest.approx(0.0, abs=1e-12)
        assert projectile.velocity.y == pytest.approx(-4.0)

    def test_fire_emits_event(self, session, recorder):
        session.start()
        recorder.clear()

        session.fire(Point2D(x=0, y=0))

        fired = events_of(recorder, GameEventType.PROJECTILE_FIRED)
        assert len(fired) == 1
        assert fired[0].position == Point2D(x=400, y=300)

    def test_fire_when_idle_is_noop(self, session, recorder):
        assert session.fire(Point2D(x=800, y=300)) is None
        assert session.projectiles == []
        assert recorder == []

    def test_fire_after_game_over_is_noop(self, session, scheduler):
        session.start()
        session.enemies.append(killer_enemy())
        scheduler.run_frame()

        assert session.fire(Point2D(x=800, y=300)) is None


class TestSpawning:
    """The spawner runs on wall-clock time alongside the tick."""

    def test_spawns_every_interval(self, session, scheduler, fake_clock):
        session.start()

        fake_clock.advance(config.SPAWN_INTERVAL_MS - 1)
        scheduler.run_frame()
        assert len(session.enemies) == 0

        fake_clock.advance(1)
        scheduler.run_frame()
        assert len(session.enemies) == 1

        fake_clock.advance(config.SPAWN_INTERVAL_MS)
        scheduler.run_frame()
        assert len(session.enemies) == 2

    def test_slow_frame_catches_up(self, session, scheduler, fake_clock):
        session.start()
        fake_clock.advance(config.SPAWN_INTERVAL_MS * 3)
        scheduler.run_frame()
        assert len(session.enemies) == 3


class TestGameOver:
    """An enemy reaching the player ends the session."""

    def test_single_game_over(self, session, scheduler, fake_clock, recorder):
        session.start()
        session.enemies.append(killer_enemy())

        scheduler.run_frame()
        for _ in range(10):
            fake_clock.advance(config.SPAWN_INTERVAL_MS)
            scheduler.run_frame()

        assert session.state == SessionState.GAME_OVER
        assert len(events_of(recorder, GameEventType.GAME_OVER)) == 1
        assert len(events_of(recorder, GameEventType.PLAYER_DIED)) == 1

    def test_spawner_halted(self, session, scheduler, fake_clock):
        session.start()
        session.enemies.append(killer_enemy())
        scheduler.run_frame()

        assert not session.spawner.running
        count = len(session.enemies)
        frame = session.frame

        fake_clock.advance(config.SPAWN_INTERVAL_MS * 5)
        scheduler.run_frame()

        assert len(session.enemies) == count
        assert session.frame == frame

    def test_player_died_subscribers_see_game_over(self, session, scheduler, events):
        seen = []

        def on_died(event):
            seen.append((session.state, session.fire(Point2D(x=800, y=300))))

        events.subscribe(GameEventType.PLAYER_DIED, on_died)
        session.start()
        session.enemies.append(killer_enemy())

        scheduler.run_frame()

        assert seen == [(SessionState.GAME_OVER, None)]
        assert session.projectiles == []

    def test_game_over_payload(self, session, scheduler, recorder):
        session.start()
        session.engine.score = 2
        session.enemies.append(killer_enemy())

        scheduler.run_frame()

        event = events_of(recorder, GameEventType.GAME_OVER)[0]
        assert event.name == 'ada'
        assert event.score == 2
        assert event.points == 200

    def test_game_over_writes_session_record(self, session, scheduler):
        session.start()
        session.enemies.append(killer_enemy())

        with patch('perimeter.session.emit_record') as mock_emit:
            scheduler.run_frame()

        mock_emit.assert_called_once()
        module, record = mock_emit.call_args[0]
        assert module == 'session'
        assert record['type'] == 'game_over'
        assert record['name'] == 'ada'

    def test_stop_after_game_over_keeps_state(self, session, scheduler):
        session.start()
        session.enemies.append(killer_enemy())
        scheduler.run_frame()

        session.stop()

        assert session.state == SessionState.GAME_OVER

    def test_restart_after_game_over(self, session, scheduler):
        session.start()
        session.enemies.append(killer_enemy())
        scheduler.run_frame()

        session.start()

        assert session.state == SessionState.RUNNING
        assert session.enemies == []
        assert session.score == 0

    def test_score_events_follow_kills(self, session, scheduler, recorder):
        session.start()
        session.enemies.append(
            Enemy(x=600, y=300, radius=15, color=GREEN, velocity=Vector2D(x=-1.0, y=0.0))
        )
        session.fire(Point2D(x=800, y=300))
        recorder.clear()

        # Projectile 400 -> 4/tick, enemy 600 -> -1/tick: contact within 40 ticks
        for _ in range(40):
            scheduler.run_frame()

        changes = events_of(recorder, GameEventType.SCORE_CHANGED)
        assert [e.score for e in changes] == [1]
        assert session.points == 100


class TestLongRun:
    """A seeded session played until game over."""

    def test_score_never_decreases(self, session, scheduler, fake_clock):
        session.start()
        scores = []

        for frame in range(3000):
            if not session.is_running:
                break
            if frame % 15 == 0 and session.enemies:
                target = session.enemies[-1]
                session.fire(Point2D(x=target.x, y=target.y))
            fake_clock.advance(1000 / 60)
            scheduler.run_frame()
            scores.append(session.score)

        assert all(score >= 0 for score in scores)
        assert scores == sorted(scores)
