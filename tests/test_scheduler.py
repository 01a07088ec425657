"""
Unit tests for the cooperative TaskScheduler.
"""

import pytest

from perimeter.scheduler import ScheduledTask, TaskScheduler, monotonic_ms


class TestPeriodicTasks:
    """Tests for every()."""

    def test_rejects_non_positive_interval(self, scheduler):
        with pytest.raises(ValueError):
            scheduler.every(0, lambda: None)
        with pytest.raises(ValueError):
            scheduler.every(-5, lambda: None)

    def test_first_run_after_one_interval(self, scheduler, fake_clock):
        calls = []
        scheduler.every(100, lambda: calls.append(fake_clock.now))

        scheduler.run_frame()
        fake_clock.advance(99)
        scheduler.run_frame()
        assert calls == []

        fake_clock.advance(1)
        scheduler.run_frame()
        assert calls == [100]

    def test_catch_up_runs_once_per_missed_interval(self, scheduler, fake_clock):
        calls = []
        task = scheduler.every(100, lambda: calls.append(1))

        fake_clock.advance(350)
        scheduler.run_frame()

        assert len(calls) == 3
        assert task.run_count == 3
        assert task.next_run_ms == 400

    def test_cadence_does_not_drift(self, scheduler, fake_clock):
        task = scheduler.every(100, lambda: None)
        for _ in range(10):
            fake_clock.advance(130)
            scheduler.run_frame()
        # 1300ms elapsed
        assert task.run_count == 13

    def test_now_override(self, scheduler):
        calls = []
        scheduler.every(100, lambda: calls.append(1))
        scheduler.run_frame(now_ms=250)
        assert len(calls) == 2

    def test_cancel_inside_catch_up_stops_it(self, scheduler, fake_clock):
        calls = []

        def once():
            calls.append(1)
            task.cancel()

        task = scheduler.every(10, once)
        fake_clock.advance(100)
        scheduler.run_frame()

        assert calls == [1]


class TestFrameTasks:
    """Tests for each_frame()."""

    def test_runs_every_frame(self, scheduler):
        calls = []
        scheduler.each_frame(lambda: calls.append(1))
        for _ in range(4):
            scheduler.run_frame()
        assert len(calls) == 4
        assert scheduler.frame == 4

    def test_periodic_tasks_run_before_frame_tasks(self, scheduler, fake_clock):
        order = []
        scheduler.each_frame(lambda: order.append('frame'))
        scheduler.every(10, lambda: order.append('periodic'))

        fake_clock.advance(10)
        scheduler.run_frame()

        assert order == ['periodic', 'frame']

    def test_registration_order(self, scheduler):
        order = []
        scheduler.each_frame(lambda: order.append('a'))
        scheduler.each_frame(lambda: order.append('b'))
        scheduler.run_frame()
        assert order == ['a', 'b']

    def test_task_added_by_callback_starts_next_frame(self, scheduler):
        calls = []

        def add_task():
            if not calls:
                scheduler.each_frame(lambda: calls.append('new'))
            calls.append('adder')

        scheduler.each_frame(add_task)
        scheduler.run_frame()
        assert calls == ['adder']

        scheduler.run_frame()
        assert calls == ['adder', 'adder', 'new']


class TestCancellation:
    """Cancellation is synchronous."""

    def test_cancelled_task_never_runs(self, scheduler):
        calls = []
        task = scheduler.each_frame(lambda: calls.append(1))
        task.cancel()
        scheduler.run_frame()
        assert calls == []
        assert task.cancelled

    def test_cancel_by_earlier_callback_same_frame(self, scheduler, fake_clock):
        calls = []
        victim = None

        def killer():
            victim.cancel()

        scheduler.every(10, killer, name='killer')
        victim = scheduler.each_frame(lambda: calls.append(1), name='victim')

        fake_clock.advance(10)
        scheduler.run_frame()

        assert calls == []

    def test_cancelled_tasks_are_pruned(self, scheduler):
        task = scheduler.each_frame(lambda: None)
        scheduler.each_frame(lambda: None, name='kept')
        task.cancel()
        scheduler.run_frame()
        assert [t.name for t in scheduler.tasks] == ['kept']

    def test_cancel_all(self, scheduler, fake_clock):
        calls = []
        periodic = scheduler.every(10, lambda: calls.append('p'))
        frame = scheduler.each_frame(lambda: calls.append('f'))

        scheduler.cancel_all()
        fake_clock.advance(100)
        scheduler.run_frame()

        assert calls == []
        assert periodic.cancelled and frame.cancelled
        assert scheduler.tasks == []


class TestScheduledTask:
    """Tests for the task handle."""

    def test_repr(self):
        assert repr(ScheduledTask(lambda: None, 'spawner', interval_ms=900)) == \
            "ScheduledTask('spawner', every 900ms, active)"
        task = ScheduledTask(lambda: None, 'engine')
        task.cancel()
        assert repr(task) == "ScheduledTask('engine', each frame, cancelled)"

    def test_default_clock_is_monotonic(self):
        scheduler = TaskScheduler()
        first = scheduler.now()
        assert monotonic_ms() >= first
