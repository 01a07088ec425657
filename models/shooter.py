"""
Shooter-specific enumerations and data models.

These models describe the session lifecycle, the events the simulation
emits to its collaborators, the per-tick summary returned by the engine,
and the entries persisted on the leaderboard.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, computed_field, ConfigDict

from .primitives import Point2D


class SessionState(str, Enum):
    """Lifecycle of a game session.

    Attributes:
        IDLE: Before the first start, or after stop()/reset()
        RUNNING: Ticking and spawning
        GAME_OVER: Player collided with an enemy; waiting for a restart
    """
    IDLE = "idle"
    RUNNING = "running"
    GAME_OVER = "game_over"


class GameEventType(str, Enum):
    """Named events emitted by the simulation and the session controller.

    Attributes:
        SESSION_STARTED: start() began a fresh session
        PROJECTILE_FIRED: fire() created a projectile
        ENEMY_SPLIT: A hit shrank a large enemy (and sped it up)
        ENEMY_DESTROYED: A hit removed an enemy; score went up by one
        PLAYER_DIED: An enemy reached the player
        SCORE_CHANGED: The session score changed
        GAME_OVER: The session ended; carries the final score and player name
    """
    SESSION_STARTED = "session_started"
    PROJECTILE_FIRED = "projectile_fired"
    ENEMY_SPLIT = "enemy_split"
    ENEMY_DESTROYED = "enemy_destroyed"
    PLAYER_DIED = "player_died"
    SCORE_CHANGED = "score_changed"
    GAME_OVER = "game_over"


class GameEvent(BaseModel):
    """Immutable payload delivered to event subscribers.

    Only the fields relevant to the event type are set.

    Attributes:
        type: Which event occurred
        score: Session score at emission time (enemies destroyed)
        points: User-facing points (score * points-per-kill)
        name: Player name, set on GAME_OVER
        position: Where it happened (projectile origin, enemy center)
        radius: Enemy radius after a split, or at destruction
        frame: Engine tick counter at emission time

    Examples:
        >>> event = GameEvent(type=GameEventType.SCORE_CHANGED, score=3, points=300)
        >>> event.type.value
        'score_changed'
    """
    type: GameEventType
    score: int = Field(default=0, ge=0)
    points: int = Field(default=0, ge=0)
    name: Optional[str] = None
    position: Optional[Point2D] = None
    radius: Optional[float] = None
    frame: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        """String representation for debugging."""
        return f"GameEvent({self.type.value}, score={self.score}, frame={self.frame})"


class TickResult(BaseModel):
    """Summary of one engine tick.

    Attributes:
        player_alive: False when an enemy reached the player this tick
        enemies_destroyed: Enemies removed by hits this tick
        enemies_split: Hits that shrank an enemy instead of removing it
        projectiles_removed: Projectiles removed (hits plus off-screen)

    Examples:
        >>> TickResult().player_alive
        True
    """
    player_alive: bool = True
    enemies_destroyed: int = Field(default=0, ge=0)
    enemies_split: int = Field(default=0, ge=0)
    projectiles_removed: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)


class LeaderboardEntry(BaseModel):
    """One ranked player on the leaderboard.

    Attributes:
        name: Player name (non-empty after trimming)
        points: Accumulated points across all sessions (non-negative)

    Examples:
        >>> LeaderboardEntry(name='  ada ', points=300).name
        'ada'
    """
    name: str
    points: int = 0

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Strip whitespace and reject empty names."""
        v = v.strip()
        if not v:
            raise ValueError('Leaderboard name must not be empty')
        return v

    @field_validator('points')
    @classmethod
    def validate_points(cls, v: int) -> int:
        """Validate points are non-negative."""
        if v < 0:
            raise ValueError(f'Points must be non-negative, got {v}')
        return v

    @computed_field
    @property
    def label(self) -> str:
        """Text shown on the leaderboard screen."""
        return f"{self.name}: {self.points}"

    model_config = ConfigDict(frozen=True)
