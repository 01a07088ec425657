"""
Perimeter - Configuration loader.

Display, audio and file locations can be overridden through the
environment or a .env file next to this package. Gameplay tuning is fixed.
"""
import os
from pathlib import Path
from typing import List, Optional, Tuple

from dotenv import load_dotenv

# Load .env from package directory
_env_path = Path(__file__).parent / '.env'
load_dotenv(_env_path)


def _get_bool(key: str, default: bool) -> bool:
    """Get boolean from environment."""
    val = os.getenv(key, str(default)).lower()
    return val in ('true', '1', 'yes')


def _get_int(key: str, default: int) -> int:
    """Get integer from environment."""
    return int(os.getenv(key, str(default)))


def _get_float(key: str, default: float) -> float:
    """Get float from environment."""
    return float(os.getenv(key, str(default)))


def _get_path(key: str) -> Optional[Path]:
    """Get an optional filesystem path from environment."""
    val = os.getenv(key)
    return Path(val).expanduser() if val else None


# Display
SCREEN_WIDTH = _get_int('SCREEN_WIDTH', 1280)
SCREEN_HEIGHT = _get_int('SCREEN_HEIGHT', 720)
FULLSCREEN = _get_bool('FULLSCREEN', False)
FPS = _get_int('FPS', 60)  # One tick per frame

if SCREEN_WIDTH <= 0 or SCREEN_HEIGHT <= 0:
    raise ValueError(f"Screen size must be positive, got {SCREEN_WIDTH}x{SCREEN_HEIGHT}")
if FPS <= 0:
    raise ValueError(f"FPS must be positive, got {FPS}")

# Player
PLAYER_RADIUS = 10.0
PLAYER_COLOR = '#FFFFFF'

# Projectiles
PROJECTILE_RADIUS = 5.0
PROJECTILE_SPEED = 4.0  # pixels/tick
PROJECTILE_COLOR = '#FFFFFF'

# Enemies
SPAWN_INTERVAL_MS = 900
ENEMY_MIN_RADIUS = 10.0
ENEMY_MAX_RADIUS = 30.0  # exclusive
ENEMY_SPEED = 1.0  # pixels/tick at spawn
ENEMY_PALETTE: List[str] = ['#00FF9C', '#B6FFA1', '#563A9C', '#FFE700']

# Hit resolution
SPLIT_RADIUS_THRESHOLD = 20.0  # above this a hit shrinks instead of destroying
SPLIT_SHRINK = 10.0
SPLIT_SPEED_FACTOR = 2.5  # multiplies velocity: enemies get faster when split
COLLISION_TOLERANCE = 1.0  # gap in pixels still counted as contact

# Scoring
POINTS_PER_KILL = 100

# Visual
BACKGROUND_COLOR: Tuple[int, int, int] = (0, 0, 0)
TRAIL_FADE_ALPHA = 25  # 0.1 opacity black overlay per frame
TEXT_COLOR: Tuple[int, int, int] = (255, 255, 255)
HIGHLIGHT_COLOR: Tuple[int, int, int] = (255, 231, 0)
DIM_TEXT_COLOR: Tuple[int, int, int] = (150, 150, 150)
ERROR_COLOR: Tuple[int, int, int] = (255, 80, 80)
FONT_SIZE_SMALL = 28
FONT_SIZE_MEDIUM = 40
FONT_SIZE_LARGE = 64

# Audio
AUDIO_ENABLED = _get_bool('AUDIO_ENABLED', True)
MASTER_VOLUME = _get_float('MASTER_VOLUME', 0.7)  # 0.0 to 1.0
SFX_VOLUME = _get_float('SFX_VOLUME', 0.8)

for _name, _volume in (('MASTER_VOLUME', MASTER_VOLUME), ('SFX_VOLUME', SFX_VOLUME)):
    if not 0.0 <= _volume <= 1.0:
        raise ValueError(f"{_name} must be within [0, 1], got {_volume}")

# Leaderboard (None = platform user-data dir)
LEADERBOARD_PATH = _get_path('LEADERBOARD_PATH')
LEADERBOARD_SIZE = _get_int('LEADERBOARD_SIZE', 10)  # rows shown on screen
