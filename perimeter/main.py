#!/usr/bin/env python3
"""
Entry point for Perimeter.

Command-line options come from game_info.ARGUMENTS; everything else is
read from the environment (see perimeter.config).

Usage:
    perimeter
    perimeter --name ada --resolution 1920x1080
    perimeter --fullscreen --mute
    perimeter --log-level DEBUG
"""
import argparse
from pathlib import Path
from typing import List, Optional

from models import Resolution
from perimeter import config, game_info
from perimeter.logging import configure_logging, get_logger

log = get_logger('main')


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser from game_info.ARGUMENTS."""
    parser = argparse.ArgumentParser(
        prog='perimeter',
        description=f'{game_info.NAME} - {game_info.DESCRIPTION}',
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {game_info.VERSION}')

    for arg_def in game_info.ARGUMENTS:
        kwargs = {}
        if 'type' in arg_def:
            kwargs['type'] = arg_def['type']
        if 'default' in arg_def:
            kwargs['default'] = arg_def['default']
        if 'help' in arg_def:
            kwargs['help'] = arg_def['help']
        if 'action' in arg_def:
            kwargs['action'] = arg_def['action']
            kwargs.pop('type', None)  # action and type are mutually exclusive
        if 'choices' in arg_def:
            kwargs['choices'] = arg_def['choices']
        parser.add_argument(arg_def['name'], **kwargs)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments and run the game. Returns the process exit code."""
    args = build_parser().parse_args(argv)

    if args.log_level:
        configure_logging(level=args.log_level)

    width, height = config.SCREEN_WIDTH, config.SCREEN_HEIGHT
    if args.resolution:
        try:
            resolution = Resolution.parse(args.resolution)
        except ValueError:
            print(f"Invalid resolution format: {args.resolution}")
            print("Expected format: WIDTHxHEIGHT (e.g., 1920x1080)")
            return 1
        width, height = resolution.width, resolution.height

    # Imported late so --help works without a display
    from perimeter.app import PerimeterApp

    app = PerimeterApp(
        width=width,
        height=height,
        fullscreen=args.fullscreen or config.FULLSCREEN,
        player_name=args.name,
        muted=args.mute,
        leaderboard_path=Path(args.leaderboard).expanduser() if args.leaderboard else None,
    )
    log.info("%s %s started", game_info.NAME, game_info.VERSION)

    try:
        app.run()
    finally:
        app.quit()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
