"""
Input abstraction layer for Perimeter.

Provides unified pointer input so the game can be driven by a mouse, a
touch screen, or a scripted source in tests.
"""

from perimeter.input.input_event import InputEvent
from perimeter.input.input_manager import InputManager

__all__ = ['InputEvent', 'InputManager']
