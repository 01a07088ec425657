"""
Input Event - A single pointer press in screen coordinates.

Uses Pydantic for validation and immutability.
"""
from pydantic import BaseModel, field_validator, ConfigDict

from models import Vector2D


class InputEvent(BaseModel):
    """Immutable pointer event from any source.

    Every press becomes a fire command aimed at ``position``.

    Attributes:
        position: Where the pointer was pressed (screen pixels)
        timestamp: When it happened (seconds, monotonic clock)
        button: Mouse button number (1 = primary / touch)
    """
    position: Vector2D
    timestamp: float
    button: int = 1

    @field_validator('timestamp')
    @classmethod
    def validate_timestamp(cls, v: float) -> float:
        """Validate timestamp is non-negative."""
        if v < 0:
            raise ValueError(f'Timestamp must be non-negative, got {v}')
        return v

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        """String representation for debugging."""
        return (f"InputEvent(pos=({self.position.x:.2f}, {self.position.y:.2f}), "
                f"t={self.timestamp:.3f}, button={self.button})")
