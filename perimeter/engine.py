"""
Perimeter - Simulation engine.

One ``tick()`` per display refresh moves every entity by its velocity,
resolves collisions and updates the score. Nothing is drawn here; the
renderer reads positions, radii and colors after the tick.

Tick order:
    1. Move projectiles; flag the ones that crossed a viewport edge.
    2. Walk enemies from the last index down, moving each one, then:
       a. enemy touching the player -> PLAYER_DIED, off-screen projectiles
          are dropped and the tick ends without moving later enemies. The
          events stay queued until the owner calls flush_events();
       b. otherwise test live projectiles from the last index down. A hit on
          an enemy larger than SPLIT_RADIUS_THRESHOLD shrinks it and
          multiplies its velocity by SPLIT_SPEED_FACTOR, and later
          projectiles are tested against the shrunken enemy in the same
          tick. A hit on a smaller enemy removes it and scores one point.
          The projectile is consumed either way.
    3. Drop the flagged projectiles that are still live.

Walking the lists backwards means deleting the current element never
shifts an index that has yet to be visited.
"""
from typing import Callable, List, Optional, Tuple

from models import GameEvent, GameEventType, Point2D, TickResult
from perimeter import config
from perimeter.entities import Enemy, Player, Projectile
from perimeter.events import EventBus
from perimeter.geometry import circle_outside, circles_touch
from perimeter.logging import get_logger

log = get_logger('engine')

Viewport = Callable[[], Tuple[int, int]]


class SimulationEngine:
    """Owns the live entity lists and advances them one tick at a time.

    Events raised during a tick are queued and delivered after the tick has
    finished, so subscribers always observe a consistent playfield. On the
    tick the player dies they are held back so the session can switch to
    GAME_OVER first.

    Attributes:
        player: The defended point, or None before the first session
        projectiles: Live projectiles (unordered)
        enemies: Live enemies (unordered); the spawner appends here
        score: Enemies destroyed this session
        frame: Ticks run this session
    """

    def __init__(self, viewport: Viewport, events: Optional[EventBus] = None):
        """Initialize the engine.

        Args:
            viewport: Returns the current (width, height); read every tick
            events: Bus that receives split/destroyed/died events
        """
        self._viewport = viewport
        self.events = events or EventBus()
        self.player: Optional[Player] = None
        self.projectiles: List[Projectile] = []
        self.enemies: List[Enemy] = []
        self.score = 0
        self.frame = 0
        self._pending: List[GameEvent] = []

    @property
    def points(self) -> int:
        """User-facing points for the current score."""
        return self.score * config.POINTS_PER_KILL

    @property
    def center(self) -> Point2D:
        """Center of the current viewport."""
        width, height = self._viewport()
        return Point2D(x=width / 2, y=height / 2)

    def clear(self) -> None:
        """Empty the playfield and zero the score.

        The lists are cleared in place; the spawner keeps a reference to
        ``enemies``.
        """
        self.projectiles.clear()
        self.enemies.clear()
        self.player = None
        self.score = 0
        self.frame = 0
        self._pending.clear()

    def place_player(self) -> Player:
        """Create the player at the viewport center."""
        center = self.center
        self.player = Player(x=center.x, y=center.y)
        return self.player

    def add_projectile(self, projectile: Projectile) -> None:
        self.projectiles.append(projectile)

    def tick(self) -> TickResult:
        """Advance the simulation by one frame."""
        self.frame += 1
        width, height = self._viewport()

        for projectile in self.projectiles:
            projectile.update()
            if circle_outside(projectile.x, projectile.y, projectile.radius, width, height):
                projectile.offscreen = True

        destroyed = 0
        split = 0
        removed = 0
        player = self.player
        tolerance = config.COLLISION_TOLERANCE

        for index in range(len(self.enemies) - 1, -1, -1):
            enemy = self.enemies[index]
            enemy.update()

            if player is not None and circles_touch(player, enemy, tolerance):
                log.info("Enemy reached the player at frame %d (score %d)", self.frame, self.score)
                self._queue(GameEventType.PLAYER_DIED, position=enemy.position, radius=enemy.radius)
                removed += self._drop_offscreen()
                # Left queued: the owner ends the session, then calls flush_events()
                return TickResult(
                    player_alive=False,
                    enemies_destroyed=destroyed,
                    enemies_split=split,
                    projectiles_removed=removed,
                )

            for p_index in range(len(self.projectiles) - 1, -1, -1):
                projectile = self.projectiles[p_index]
                if not circles_touch(projectile, enemy, tolerance):
                    continue

                del self.projectiles[p_index]
                removed += 1

                if enemy.radius > config.SPLIT_RADIUS_THRESHOLD:
                    enemy.split(config.SPLIT_SHRINK, config.SPLIT_SPEED_FACTOR)
                    split += 1
                    log.debug("Enemy split to r=%.1f", enemy.radius)
                    self._queue(GameEventType.ENEMY_SPLIT, position=enemy.position, radius=enemy.radius)
                else:
                    del self.enemies[index]
                    self.score += 1
                    destroyed += 1
                    log.debug("Enemy destroyed, score %d", self.score)
                    self._queue(GameEventType.ENEMY_DESTROYED, position=enemy.position, radius=enemy.radius)
                    break

        removed += self._drop_offscreen()

        self.flush_events()
        return TickResult(
            enemies_destroyed=destroyed,
            enemies_split=split,
            projectiles_removed=removed,
        )

    def flush_events(self) -> None:
        """Deliver the events queued by the last tick."""
        pending, self._pending = self._pending, []
        for event in pending:
            self.events.emit(event)

    def _drop_offscreen(self) -> int:
        live = [p for p in self.projectiles if not p.offscreen]
        dropped = len(self.projectiles) - len(live)
        self.projectiles[:] = live
        return dropped

    def _queue(self, event_type: GameEventType, **fields) -> None:
        self._pending.append(GameEvent(
            type=event_type,
            score=self.score,
            points=self.points,
            frame=self.frame,
            **fields,
        ))
