"""
Input source implementations.
"""

from perimeter.input.sources.base import InputSource, ScriptedInputSource
from perimeter.input.sources.mouse import MouseInputSource

__all__ = ['InputSource', 'ScriptedInputSource', 'MouseInputSource']
