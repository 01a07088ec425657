"""
Perimeter - Enemy spawner.

Places a new enemy just outside a random viewport edge every
SPAWN_INTERVAL_MS of wall-clock time, aimed at the viewport center.
"""
import random
from typing import Callable, List, Optional, Sequence, Tuple

from models import Color, Point2D
from perimeter import config
from perimeter.entities import Enemy
from perimeter.geometry import angle_between, unit_velocity
from perimeter.logging import get_logger
from perimeter.scheduler import ScheduledTask, TaskScheduler

log = get_logger('spawner')

Viewport = Callable[[], Tuple[int, int]]


class EnemySpawner:
    """Produces enemies on a fixed cadence while a session runs.

    Spawn rules:
        - radius uniform in [ENEMY_MIN_RADIUS, ENEMY_MAX_RADIUS)
        - half the time on the left/right edge (x = -r or width + r, y random),
          otherwise on the top/bottom edge (y = -r or height + r, x random),
          so the enemy starts fully off-screen whatever its size
        - unit velocity towards the viewport center
        - color drawn uniformly from the palette
    """

    def __init__(
        self,
        viewport: Viewport,
        rng: Optional[random.Random] = None,
        palette: Optional[Sequence[str]] = None,
        interval_ms: float = config.SPAWN_INTERVAL_MS,
    ):
        """Initialize the spawner.

        Args:
            viewport: Returns the current (width, height); read on every spawn
            rng: Random source (seed it for reproducible spawns)
            palette: Hex colors to choose from
            interval_ms: Wall-clock time between spawns
        """
        self._viewport = viewport
        self._rng = rng or random.Random()
        self._palette = [Color.from_hex(c) for c in (palette or config.ENEMY_PALETTE)]
        self.interval_ms = interval_ms
        self._task: Optional[ScheduledTask] = None
        self._enemies: Optional[List[Enemy]] = None
        self.spawned = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.cancelled

    def start(self, scheduler: TaskScheduler, enemies: List[Enemy]) -> None:
        """Begin appending a new enemy to enemies every interval.

        Restarting cancels any previous cadence first.
        """
        self.stop()
        self._enemies = enemies
        self.spawned = 0
        self._task = scheduler.every(self.interval_ms, self._on_timer, name='spawner')
        log.debug("Spawner started (every %gms)", self.interval_ms)

    def stop(self) -> None:
        """Cancel the cadence; no spawn runs after this returns."""
        if self._task is not None:
            self._task.cancel()
            self._task = None
            log.debug("Spawner stopped after %d spawns", self.spawned)

    def _on_timer(self) -> None:
        if self._enemies is not None:
            self._enemies.append(self.create_enemy())

    def create_enemy(self) -> Enemy:
        """Build one enemy at a random perimeter position."""
        width, height = self._viewport()
        rng = self._rng

        span = config.ENEMY_MAX_RADIUS - config.ENEMY_MIN_RADIUS
        radius = config.ENEMY_MIN_RADIUS + rng.random() * span

        if rng.random() < 0.5:
            x = -radius if rng.random() < 0.5 else width + radius
            y = rng.random() * height
        else:
            x = rng.random() * width
            y = -radius if rng.random() < 0.5 else height + radius

        center = Point2D(x=width / 2, y=height / 2)
        angle = angle_between(Point2D(x=x, y=y), center)
        velocity = unit_velocity(angle).scaled(config.ENEMY_SPEED)

        self.spawned += 1
        enemy = Enemy(x=x, y=y, radius=radius, color=rng.choice(self._palette), velocity=velocity)
        log.trace("Spawned enemy r=%.1f at (%.1f, %.1f)", radius, x, y)
        return enemy
