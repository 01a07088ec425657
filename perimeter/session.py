"""
Perimeter - Game session controller.

Owns the simulation engine and the spawner, schedules both on the shared
TaskScheduler, and turns engine results into the two notifications the
outside world cares about: score changes and game over.

Misuse policy:
    - start() while running restarts cleanly (stop, clear, start).
    - fire() while not running is a silent no-op and returns None.
Neither ever raises.
"""
import random
from typing import Callable, List, Optional, Tuple

from models import GameEvent, GameEventType, Point2D, SessionState
from perimeter import config
from perimeter.engine import SimulationEngine
from perimeter.entities import Enemy, Player, Projectile
from perimeter.events import EventBus
from perimeter.geometry import angle_between, unit_velocity
from perimeter.logging import emit_record, get_logger
from perimeter.scheduler import ScheduledTask, TaskScheduler
from perimeter.spawner import EnemySpawner

log = get_logger('session')

Viewport = Callable[[], Tuple[int, int]]


class GameSession:
    """One play-through at a time, from start() to game over or reset().

    Args:
        viewport: Returns the current (width, height)
        scheduler: Run queue shared with the render loop
        events: Bus for SESSION_STARTED, PROJECTILE_FIRED, SCORE_CHANGED,
            GAME_OVER (plus the engine's own events)
        rng: Random source for the default spawner
        spawner: Custom spawner (tests)
        player_name: Name reported with GAME_OVER for the leaderboard

    Examples:
        >>> session = GameSession(viewport=lambda: (800, 600))
        >>> session.start()
        >>> session.state.value
        'running'
        >>> session.fire(Point2D(x=800, y=300)).velocity
        Point2D(x=4.00, y=0.00)
    """

    def __init__(
        self,
        viewport: Viewport,
        scheduler: Optional[TaskScheduler] = None,
        events: Optional[EventBus] = None,
        rng: Optional[random.Random] = None,
        spawner: Optional[EnemySpawner] = None,
        player_name: Optional[str] = None,
    ):
        self._viewport = viewport
        self.scheduler = scheduler or TaskScheduler()
        self.events = events or EventBus()
        self.engine = SimulationEngine(viewport, self.events)
        self.spawner = spawner or EnemySpawner(viewport, rng=rng)
        self.player_name = player_name

        self._state = SessionState.IDLE
        self._tick_task: Optional[ScheduledTask] = None
        self._sessions_started = 0

    # ------------------------------------------------------------------
    # Read-only view
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state == SessionState.RUNNING

    @property
    def score(self) -> int:
        return self.engine.score

    @property
    def points(self) -> int:
        return self.engine.points

    @property
    def player(self) -> Optional[Player]:
        return self.engine.player

    @property
    def enemies(self) -> List[Enemy]:
        return self.engine.enemies

    @property
    def projectiles(self) -> List[Projectile]:
        return self.engine.projectiles

    @property
    def frame(self) -> int:
        return self.engine.frame

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Begin a fresh session (restarts if one is already running)."""
        if self.is_running:
            log.info("Restarting running session")
        self.stop()
        self.engine.clear()
        self.engine.place_player()

        self._tick_task = self.scheduler.each_frame(self._on_tick, name='engine')
        self.spawner.start(self.scheduler, self.engine.enemies)
        self._state = SessionState.RUNNING
        self._sessions_started += 1

        log.info("Session %d started", self._sessions_started)
        self._emit(GameEventType.SESSION_STARTED)
        self._emit(GameEventType.SCORE_CHANGED)

    def stop(self) -> None:
        """Halt ticking and spawning; keep score and entities.

        Both tasks are cancelled before this returns. A running session
        goes back to IDLE; a finished one stays GAME_OVER.
        """
        if self._tick_task is not None:
            self._tick_task.cancel()
            self._tick_task = None
        self.spawner.stop()
        if self._state == SessionState.RUNNING:
            self._state = SessionState.IDLE
            log.debug("Session stopped at frame %d", self.engine.frame)

    def reset(self) -> None:
        """stop() and clear score and entities."""
        had_score = self.engine.score != 0
        self.stop()
        self.engine.clear()
        self._state = SessionState.IDLE
        if had_score:
            self._emit(GameEventType.SCORE_CHANGED)

    def fire(self, target) -> Optional[Projectile]:
        """Shoot from the viewport center towards target.

        Args:
            target: Pointer position (anything with x and y)

        Returns:
            The new projectile, or None when no session is running
        """
        if not self.is_running:
            log.debug("Ignoring fire while %s", self._state.value)
            return None

        origin = self.engine.center
        angle = angle_between(origin, target)
        velocity = unit_velocity(angle).scaled(config.PROJECTILE_SPEED)
        projectile = Projectile(x=origin.x, y=origin.y, velocity=velocity)
        self.engine.add_projectile(projectile)

        self._emit(GameEventType.PROJECTILE_FIRED, position=Point2D(x=origin.x, y=origin.y))
        return projectile

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _on_tick(self) -> None:
        result = self.engine.tick()
        if not result.player_alive:
            self.stop()
            self._state = SessionState.GAME_OVER
            self.engine.flush_events()
        if result.enemies_destroyed:
            self._emit(GameEventType.SCORE_CHANGED)
        if not result.player_alive:
            self._game_over()

    def _game_over(self) -> None:
        log.info("Game over: score %d (%d points) after %d frames",
                 self.engine.score, self.engine.points, self.engine.frame)

        emit_record('session', {
            'type': 'game_over',
            'name': self.player_name,
            'score': self.engine.score,
            'points': self.engine.points,
            'frames': self.engine.frame,
            'enemies_spawned': self.spawner.spawned,
        })
        self._emit(GameEventType.GAME_OVER, name=self.player_name)

    def _emit(self, event_type: GameEventType, **fields) -> None:
        self.events.emit(GameEvent(
            type=event_type,
            score=self.engine.score,
            points=self.engine.points,
            frame=self.engine.frame,
            **fields,
        ))
