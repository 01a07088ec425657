"""
Cooperative task scheduler.

The pygame main loop calls ``run_frame()`` once per display refresh. Two
kinds of tasks share that single run queue:

- periodic tasks fire on a wall-clock cadence (``every``), independent of
  the frame rate, like the enemy spawner;
- frame tasks run once per ``run_frame`` (``each_frame``), like the
  simulation tick.

Every callback runs to completion before the next one starts, so tasks
never interleave and the entity lists need no locking. Cancelling a task
takes effect immediately: a task cancelled by an earlier callback in the
same frame does not run.
"""
import time
from typing import Callable, List, Optional

from perimeter.logging import get_logger

log = get_logger('scheduler')


def monotonic_ms() -> float:
    """Default scheduler clock in milliseconds."""
    return time.monotonic() * 1000.0


class ScheduledTask:
    """Handle for a registered callback.

    Attributes:
        name: Label used in log messages
        interval_ms: Cadence for periodic tasks, None for frame tasks
        next_run_ms: When a periodic task is next due
        run_count: Number of times the callback has run
    """

    def __init__(
        self,
        callback: Callable[[], None],
        name: str,
        interval_ms: Optional[float] = None,
        next_run_ms: float = 0.0,
    ):
        self.callback = callback
        self.name = name
        self.interval_ms = interval_ms
        self.next_run_ms = next_run_ms
        self.run_count = 0
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def is_periodic(self) -> bool:
        return self.interval_ms is not None

    def cancel(self) -> None:
        """Stop the task; it will never run again."""
        if not self._cancelled:
            log.debug("Cancelled task %s after %d runs", self.name, self.run_count)
        self._cancelled = True

    def _run(self) -> None:
        self.run_count += 1
        self.callback()

    def __repr__(self) -> str:
        kind = f"every {self.interval_ms:g}ms" if self.is_periodic else "each frame"
        state = "cancelled" if self._cancelled else "active"
        return f"ScheduledTask({self.name!r}, {kind}, {state})"


class TaskScheduler:
    """Single-threaded run queue for periodic and per-frame callbacks.

    Args:
        clock: Zero-argument callable returning the current time in
            milliseconds. Defaults to the monotonic clock; tests pass a
            fake clock.

    Examples:
        >>> now = [0.0]
        >>> scheduler = TaskScheduler(clock=lambda: now[0])
        >>> ticks = []
        >>> task = scheduler.each_frame(lambda: ticks.append(1), name='tick')
        >>> scheduler.run_frame()
        >>> task.cancel()
        >>> scheduler.run_frame()
        >>> len(ticks)
        1
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self._clock = clock or monotonic_ms
        self._tasks: List[ScheduledTask] = []
        self.frame = 0

    def now(self) -> float:
        """Current time on the scheduler clock (ms)."""
        return self._clock()

    @property
    def tasks(self) -> List[ScheduledTask]:
        """Active (not cancelled) tasks in registration order."""
        return [task for task in self._tasks if not task.cancelled]

    def every(self, interval_ms: float, callback: Callable[[], None], name: str = 'periodic') -> ScheduledTask:
        """Run callback every interval_ms of wall-clock time.

        The first run happens one full interval after registration.
        """
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        task = ScheduledTask(callback, name, interval_ms=interval_ms,
                             next_run_ms=self.now() + interval_ms)
        self._tasks.append(task)
        log.debug("Scheduled %s every %gms", name, interval_ms)
        return task

    def each_frame(self, callback: Callable[[], None], name: str = 'frame') -> ScheduledTask:
        """Run callback once per run_frame()."""
        task = ScheduledTask(callback, name)
        self._tasks.append(task)
        log.debug("Scheduled %s each frame", name)
        return task

    def run_frame(self, now_ms: Optional[float] = None) -> None:
        """Run everything due: periodic tasks first, then frame tasks.

        A periodic task that fell several intervals behind runs once per
        missed interval, so its cadence tracks wall-clock time even when
        frames are slow.

        Args:
            now_ms: Override the clock reading for this frame
        """
        now = self.now() if now_ms is None else now_ms
        self.frame += 1

        # Snapshot: tasks registered by a callback start next frame
        snapshot = list(self._tasks)

        for task in snapshot:
            if not task.is_periodic:
                continue
            while not task.cancelled and task.next_run_ms <= now:
                task.next_run_ms += task.interval_ms
                task._run()

        for task in snapshot:
            if task.is_periodic or task.cancelled:
                continue
            task._run()

        self._tasks = [task for task in self._tasks if not task.cancelled]

    def cancel_all(self) -> None:
        """Cancel every registered task."""
        for task in self._tasks:
            task.cancel()
        self._tasks.clear()
