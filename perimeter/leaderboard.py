"""
Leaderboard persistence.

Points are accumulated per player name across sessions and kept sorted
from highest to lowest in a small JSON file:

    [{"name": "ada", "points": 1200}, {"name": "bob", "points": 300}]

The board subscribes to GAME_OVER; a game over without a player name is
not recorded.
"""
import json
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from models import GameEvent, GameEventType, LeaderboardEntry
from perimeter import config
from perimeter.events import EventBus
from perimeter.logging import get_logger, get_user_data_dir

log = get_logger('leaderboard')


class LeaderboardError(Exception):
    """The leaderboard file exists but cannot be read or parsed."""


def default_path() -> Path:
    """LEADERBOARD_PATH if configured, otherwise the user data dir."""
    return config.LEADERBOARD_PATH or get_user_data_dir() / 'leaderboard.json'


class Leaderboard:
    """Ranked list of player names and accumulated points.

    Args:
        path: JSON file backing the board (created on first write)
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else default_path()

    def entries(self) -> List[LeaderboardEntry]:
        """All entries, highest points first. Missing file means empty board.

        Raises:
            LeaderboardError: If the file is unreadable or malformed
        """
        if not self.path.exists():
            return []
        try:
            raw = json.loads(self.path.read_text(encoding='utf-8'))
        except (OSError, json.JSONDecodeError) as e:
            raise LeaderboardError(f"Cannot read leaderboard {self.path}: {e}") from e
        if not isinstance(raw, list):
            raise LeaderboardError(f"Leaderboard {self.path} must hold a JSON list")
        try:
            entries = [LeaderboardEntry(**item) for item in raw]
        except (TypeError, ValidationError) as e:
            raise LeaderboardError(f"Invalid leaderboard entry in {self.path}: {e}") from e
        return _ranked(entries)

    def top(self, count: int = config.LEADERBOARD_SIZE) -> List[LeaderboardEntry]:
        """The count best entries."""
        return self.entries()[:count]

    def add(self, name: str, points: int) -> LeaderboardEntry:
        """Add points to name's entry (creating it) and save the board.

        Returns:
            The updated entry
        """
        entry = LeaderboardEntry(name=name, points=points)
        entries = self.entries()
        for i, existing in enumerate(entries):
            if existing.name == entry.name:
                entry = LeaderboardEntry(name=entry.name, points=existing.points + entry.points)
                entries[i] = entry
                break
        else:
            entries.append(entry)

        self._save(_ranked(entries))
        log.info("Recorded %d points for %s (total %d)", points, entry.name, entry.points)
        return entry

    def rank_of(self, name: str) -> Optional[int]:
        """1-based position of name, or None if absent."""
        name = name.strip()
        for position, entry in enumerate(self.entries(), start=1):
            if entry.name == name:
                return position
        return None

    def clear(self) -> None:
        """Remove every entry."""
        self._save([])

    def attach(self, events: EventBus) -> None:
        """Record every named GAME_OVER published on events."""
        events.subscribe(GameEventType.GAME_OVER, self.on_game_over)

    def on_game_over(self, event: GameEvent) -> None:
        if not event.name or not event.name.strip():
            log.debug("Game over without a player name; not recorded")
            return
        self.add(event.name, event.points)

    def _save(self, entries: List[LeaderboardEntry]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [entry.model_dump(include={'name', 'points'}) for entry in entries]
        tmp_path = self.path.with_suffix(self.path.suffix + '.tmp')
        tmp_path.write_text(json.dumps(payload, indent=2), encoding='utf-8')
        tmp_path.replace(self.path)


def _ranked(entries: List[LeaderboardEntry]) -> List[LeaderboardEntry]:
    # Stable sort keeps earlier entries ahead on ties
    return sorted(entries, key=lambda entry: entry.points, reverse=True)
