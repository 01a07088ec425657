"""
Perimeter - Positioned circles that make up the playfield.

The player sits still at the viewport center; projectiles and enemies move
by a fixed displacement every tick (one tick per display refresh).
"""
from dataclasses import dataclass, field

from models import Color, Point2D, Vector2D
from perimeter import config


@dataclass
class Player:
    """The defended point. Created at session start, never moves."""
    x: float
    y: float
    radius: float = config.PLAYER_RADIUS
    color: Color = field(default_factory=lambda: Color.from_hex(config.PLAYER_COLOR))

    @property
    def position(self) -> Point2D:
        return Point2D(x=self.x, y=self.y)


@dataclass
class Projectile:
    """A shot travelling away from the player at constant velocity.

    Attributes:
        x, y: Center position in pixels
        velocity: Displacement applied every tick
        offscreen: Set by the engine when the shot crosses a viewport edge;
            the shot is dropped at the end of that tick
    """
    x: float
    y: float
    velocity: Vector2D
    radius: float = config.PROJECTILE_RADIUS
    color: Color = field(default_factory=lambda: Color.from_hex(config.PROJECTILE_COLOR))
    offscreen: bool = False

    @property
    def position(self) -> Point2D:
        return Point2D(x=self.x, y=self.y)

    def update(self) -> None:
        """Advance one tick (Euler step, pixels per tick)."""
        self.x += self.velocity.x
        self.y += self.velocity.y


@dataclass
class Enemy:
    """An attacker homing on the viewport center.

    Radius and velocity change when a projectile splits the enemy; the color
    is fixed at spawn.
    """
    x: float
    y: float
    radius: float
    color: Color
    velocity: Vector2D

    @property
    def position(self) -> Point2D:
        return Point2D(x=self.x, y=self.y)

    def update(self) -> None:
        """Advance one tick (Euler step, pixels per tick)."""
        self.x += self.velocity.x
        self.y += self.velocity.y

    def split(self, shrink: float, speed_factor: float) -> None:
        """Shrink after a partial hit and scale velocity by speed_factor."""
        self.radius -= shrink
        self.velocity = self.velocity.scaled(speed_factor)
