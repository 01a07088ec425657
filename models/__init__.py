"""
Models library for Perimeter.

This package provides the Pydantic data models used across the system:
- Primitives: Basic geometric and color types (Point2D, Vector2D, Color, Resolution)
- Shooter: Session state, emitted events, tick summaries and leaderboard entries

Usage:
    >>> from models import Vector2D, GameEvent, GameEventType
    >>> from models.primitives import Color
"""

from .primitives import (
    Point2D,
    Vector2D,  # Alias for Point2D
    Resolution,
    Color,
)

from .shooter import (
    SessionState,
    GameEventType,
    GameEvent,
    TickResult,
    LeaderboardEntry,
)

__all__ = [
    # Primitives
    "Point2D",
    "Vector2D",
    "Resolution",
    "Color",
    # Shooter
    "SessionState",
    "GameEventType",
    "GameEvent",
    "TickResult",
    "LeaderboardEntry",
]
