"""
Perimeter - click-to-shoot arcade defense built on pygame.

The simulation (engine, spawner, session, scheduler) is pure Python and
runs without a display; pygame is only needed for the app, renderer,
menus, input and audio modules.
"""

from perimeter.game_info import NAME, VERSION

__version__ = VERSION
__all__ = ['NAME', 'VERSION', '__version__']
