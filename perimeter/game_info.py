"""Perimeter - Game Info

Arcade defense: enemies close in on the center from every edge, click to
shoot them. Big enemies split into smaller, faster ones.
"""

NAME = "Perimeter"
DESCRIPTION = "Defend the center against enemies closing in from every edge."
VERSION = "1.0.0"
AUTHOR = "Perimeter Team"

ARGUMENTS = [
    # Display
    {
        'name': '--resolution',
        'type': str,
        'default': None,
        'help': 'Window resolution as WIDTHxHEIGHT (default: SCREEN_WIDTH x SCREEN_HEIGHT)'
    },
    {
        'name': '--fullscreen',
        'action': 'store_true',
        'help': 'Run in fullscreen mode'
    },

    # Player
    {
        'name': '--name',
        'type': str,
        'default': None,
        'help': 'Player name for the leaderboard (skips the name prompt)'
    },

    # Audio
    {
        'name': '--mute',
        'action': 'store_true',
        'help': 'Start with sound muted'
    },

    # Files and diagnostics
    {
        'name': '--leaderboard',
        'type': str,
        'default': None,
        'help': 'Leaderboard JSON file (default: user data dir)'
    },
    {
        'name': '--log-level',
        'type': str,
        'default': None,
        'choices': ['TRACE', 'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL', 'OFF'],
        'help': 'Console log level (overrides PERIMETER_LOG_LEVEL)'
    },
]
