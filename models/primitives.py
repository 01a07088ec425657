"""
Shared primitive data types for the shooter.

This module provides the basic geometric and color types used by the
simulation, the renderer and the persistence layer.
"""

from pydantic import BaseModel, Field, field_validator, computed_field, ConfigDict
from typing import Tuple


class Point2D(BaseModel):
    """Immutable 2D point/vector for positions, velocities, and coordinates.

    This is the unified type used throughout the system for any 2D coordinate,
    whether it's a position, a pointer location or a per-tick velocity.

    Attributes:
        x: X coordinate (horizontal, pixels)
        y: Y coordinate (vertical, pixels, growing downwards)

    Examples:
        >>> pos = Point2D(x=400.0, y=300.0)
        >>> vel = Point2D(x=-1.0, y=0.0)  # Moving left one pixel per tick
        >>> vel.scaled(4)
        Point2D(x=-4.00, y=0.00)
    """
    x: float
    y: float

    model_config = ConfigDict(frozen=True)  # Immutable

    def scaled(self, factor: float) -> 'Point2D':
        """Return a copy with both components multiplied by factor."""
        return Point2D(x=self.x * factor, y=self.y * factor)

    def __str__(self) -> str:
        """String representation for debugging."""
        return f"Point2D(x={self.x:.2f}, y={self.y:.2f})"

    def __repr__(self) -> str:
        return str(self)


# Velocities read better as vectors
Vector2D = Point2D


class Resolution(BaseModel):
    """Viewport or window resolution.

    Attributes:
        width: Width in pixels (must be positive)
        height: Height in pixels (must be positive)

    Examples:
        >>> hd = Resolution(width=1280, height=720)
        >>> hd.center
        Point2D(x=640.00, y=360.00)
    """
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)

    @computed_field
    @property
    def aspect_ratio(self) -> float:
        """Calculate aspect ratio (width / height)."""
        return self.width / self.height

    @property
    def center(self) -> Point2D:
        """Center of the viewport."""
        return Point2D(x=self.width / 2, y=self.height / 2)

    @classmethod
    def parse(cls, text: str) -> 'Resolution':
        """Parse a WIDTHxHEIGHT string such as '1280x720'."""
        try:
            width, height = text.lower().split('x')
            return cls(width=int(width), height=int(height))
        except ValueError as e:
            raise ValueError(f"Resolution must look like WIDTHxHEIGHT, got {text!r}") from e

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        """String representation for debugging."""
        return f"Resolution({self.width}x{self.height})"


class Color(BaseModel):
    """Immutable RGBA color with validation.

    All color components must be in the range [0, 255] inclusive.

    Attributes:
        r: Red component (0-255)
        g: Green component (0-255)
        b: Blue component (0-255)
        a: Alpha/opacity component (0-255), where 255 is fully opaque

    Examples:
        >>> Color.from_hex('#00FF9C').as_rgb_tuple
        (0, 255, 156)
    """
    r: int
    g: int
    b: int
    a: int = 255  # Default to fully opaque

    @field_validator('r', 'g', 'b', 'a')
    @classmethod
    def validate_color_range(cls, v: int) -> int:
        """Validate color components are in valid range [0, 255]."""
        if not 0 <= v <= 255:
            raise ValueError(f'Color component must be in range [0, 255], got {v}')
        return v

    @classmethod
    def from_hex(cls, value: str) -> 'Color':
        """Build a color from '#RRGGBB' (or '#RRGGBBAA') notation."""
        digits = value.lstrip('#')
        if len(digits) not in (6, 8):
            raise ValueError(f'Hex color must have 6 or 8 digits, got {value!r}')
        components = [int(digits[i:i + 2], 16) for i in range(0, len(digits), 2)]
        return cls(r=components[0], g=components[1], b=components[2],
                   a=components[3] if len(components) == 4 else 255)

    @computed_field
    @property
    def as_tuple(self) -> Tuple[int, int, int, int]:
        """Return color as RGBA tuple for pygame compatibility."""
        return (self.r, self.g, self.b, self.a)

    @computed_field
    @property
    def as_rgb_tuple(self) -> Tuple[int, int, int]:
        """Return color as RGB tuple (without alpha)."""
        return (self.r, self.g, self.b)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        """String representation for debugging."""
        return f"Color(r={self.r}, g={self.g}, b={self.b}, a={self.a})"
