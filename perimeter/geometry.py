"""Vector helpers for the simulation.

Points are anything with ``x`` and ``y`` attributes: models, entities, or
pygame vectors.
"""
import math

from models import Vector2D


def unit_velocity(angle: float) -> Vector2D:
    """Unit vector pointing along angle (radians)."""
    return Vector2D(x=math.cos(angle), y=math.sin(angle))


def angle_between(origin, target) -> float:
    """Angle in radians of the ray from origin towards target."""
    return math.atan2(target.y - origin.y, target.x - origin.x)


def distance(a, b) -> float:
    """Euclidean distance between two points."""
    return math.hypot(a.x - b.x, a.y - b.y)


def circles_touch(a, b, tolerance: float) -> bool:
    """True when the gap between two circles is below tolerance.

    Both arguments need ``x``, ``y`` and ``radius``.
    """
    return distance(a, b) - a.radius - b.radius < tolerance


def circle_outside(x: float, y: float, radius: float, width: float, height: float) -> bool:
    """True once any part of the circle crosses a viewport edge."""
    return (x - radius < 0 or x + radius > width or
            y - radius < 0 or y + radius > height)
