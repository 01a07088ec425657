"""
Perimeter Logging

Console messages per module, plus one JSONL record per finished session.

Usage:
    from perimeter.logging import get_logger

    log = get_logger('engine')
    log.debug("Enemy split")
    log.info("Session started")

    # The session writes a game_over record when a sink is registered
    from perimeter.logging import emit_record
    emit_record('session', {'type': 'game_over', 'score': 12, ...})

Configuration:
    Environment variables:
        PERIMETER_LOG_LEVEL=DEBUG              # Global default level
        PERIMETER_LOG_ENGINE=TRACE             # Level for one module
        PERIMETER_LOG_DIR=~/perimeter-logs     # Where JSONL files go
        PERIMETER_LOGGING_SESSION_ENABLED=true # Write session records

    Or programmatically:
        from perimeter.logging import configure_logging
        configure_logging(level='DEBUG', modules={'spawner': 'INFO'})
"""

import json
import os
import sys
import time
import traceback
from enum import IntEnum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Set


LEVEL_PREFIX = 'PERIMETER_LOG_'
RECORDS_PREFIX = 'PERIMETER_LOGGING_'
RECORDS_SUFFIX = '_ENABLED'


class LogLevel(IntEnum):
    """Console levels; numeric values line up with the stdlib logging module."""
    TRACE = 5      # Per-tick detail
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50
    OFF = 100


_LEVEL_NAMES = {
    'TRACE': LogLevel.TRACE,
    'DEBUG': LogLevel.DEBUG,
    'INFO': LogLevel.INFO,
    'WARNING': LogLevel.WARNING,
    'WARN': LogLevel.WARNING,
    'ERROR': LogLevel.ERROR,
    'CRITICAL': LogLevel.CRITICAL,
    'OFF': LogLevel.OFF,
}

_config: Dict[str, Any] = {
    'default_level': LogLevel.INFO,
    'module_levels': {},
    'log_dir': None,
    'records': set(),        # modules whose structured records go to disk
}


def _level_from_string(level_str: str) -> LogLevel:
    return _LEVEL_NAMES.get(level_str.upper(), LogLevel.INFO)


def _truthy(value: str) -> bool:
    return value.strip().lower() in ('true', '1', 'yes', 'on')


# =============================================================================
# Directories
# =============================================================================

def get_user_data_dir() -> Path:
    """Platform-specific directory for logs and the leaderboard file.

    - macOS: ~/Library/Application Support/Perimeter
    - Windows: %APPDATA%/Perimeter
    - Linux: $XDG_DATA_HOME/perimeter (default ~/.local/share/perimeter)
    """
    if sys.platform == 'darwin':
        return Path.home() / 'Library' / 'Application Support' / 'Perimeter'
    if sys.platform == 'win32':
        return Path(os.environ.get('APPDATA', str(Path.home()))) / 'Perimeter'
    xdg_data = os.environ.get('XDG_DATA_HOME', str(Path.home() / '.local' / 'share'))
    return Path(xdg_data) / 'perimeter'


def get_log_dir() -> str:
    """PERIMETER_LOG_DIR (or configure_logging(log_dir=...)), else <user data>/logs."""
    if _config['log_dir']:
        return str(Path(_config['log_dir']).expanduser())
    return str(get_user_data_dir() / 'logs')


# =============================================================================
# Structured records
# =============================================================================

class FileSink:
    """
    Appends records to one JSONL file per module.

    The file is opened on the first record and starts with a header line;
    close() writes a footer line.

    Args:
        log_dir: Directory for the files (default: get_log_dir())
        session_name: File name prefix (default: launch timestamp)
    """

    def __init__(self, log_dir: Optional[str] = None, session_name: Optional[str] = None):
        self._log_dir = Path(log_dir) if log_dir else None
        self._session_name = session_name or time.strftime("%Y%m%d_%H%M%S")
        self._files: Dict[str, Any] = {}

    def _open(self, module: str):
        if module not in self._files:
            log_dir = self._log_dir or Path(get_log_dir())
            log_dir.mkdir(parents=True, exist_ok=True)
            f = open(log_dir / f"{self._session_name}_{module}.jsonl", 'a', encoding='utf-8')
            f.write(json.dumps({
                "type": "header",
                "module": module,
                "session_name": self._session_name,
                "start_time": time.time(),
            }) + "\n")
            self._files[module] = f
        return self._files[module]

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        """Write one record, stamped with wall_time unless it has one."""
        if 'wall_time' not in record:
            record = {'wall_time': time.time(), **record}
        self._open(module).write(json.dumps(record) + "\n")

    def flush(self) -> None:
        for f in self._files.values():
            f.flush()

    def close(self) -> None:
        for module, f in self._files.items():
            f.write(json.dumps({"type": "footer", "module": module, "end_time": time.time()}) + "\n")
            f.close()
        self._files.clear()


class NullSink:
    """Discards records; used when a module's records are disabled."""

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        pass

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass


_sinks: Dict[str, Any] = {}


def records_enabled(module: str) -> bool:
    """True when PERIMETER_LOGGING_<MODULE>_ENABLED is set."""
    return module.lower() in _config['records']


def create_sink(module: str, session_name: Optional[str] = None):
    """FileSink if records are enabled for module, else NullSink."""
    if not records_enabled(module):
        return NullSink()
    return FileSink(session_name=session_name)


def register_sink(module: str, sink) -> None:
    _sinks[module] = sink


def emit_record(module: str, record: Dict[str, Any]) -> bool:
    """
    Send a structured record to the module's sink.

    Returns:
        False when no sink is registered for module
    """
    sink = _sinks.get(module)
    if sink is None:
        return False
    sink.emit(module, record)
    return True


def close_all_sinks() -> None:
    for sink in _sinks.values():
        sink.close()
    _sinks.clear()


# =============================================================================
# Configuration
# =============================================================================

def configure_logging(
    level: str = 'INFO',
    modules: Optional[Dict[str, str]] = None,
    log_dir: Optional[str] = None,
) -> None:
    """
    Set the default level, per-module levels and the record directory.

    Args:
        level: Default console level
        modules: module name -> level
        log_dir: Directory for JSONL records
    """
    _config['default_level'] = _level_from_string(level)
    for mod, mod_level in (modules or {}).items():
        _config['module_levels'][mod.lower()] = _level_from_string(mod_level)
    if log_dir:
        _config['log_dir'] = log_dir


def _load_env_config() -> None:
    levels: Dict[str, LogLevel] = _config['module_levels']
    records: Set[str] = _config['records']

    for key, value in os.environ.items():
        if key == 'PERIMETER_LOG_LEVEL':
            _config['default_level'] = _level_from_string(value)
        elif key == 'PERIMETER_LOG_DIR':
            _config['log_dir'] = value
        elif key.startswith(LEVEL_PREFIX):
            levels[key[len(LEVEL_PREFIX):].lower()] = _level_from_string(value)
        elif key.startswith(RECORDS_PREFIX) and key.endswith(RECORDS_SUFFIX):
            module = key[len(RECORDS_PREFIX):-len(RECORDS_SUFFIX)].lower()
            if _truthy(value):
                records.add(module)


_load_env_config()


# =============================================================================
# Console loggers
# =============================================================================

class PerimeterLogger:
    """
    Prints ``[module] LEVEL: message`` for messages at or above the
    module's level. Arguments are %-formatted only when the message is shown.
    """

    def __init__(self, module: str):
        self.module = module

    @property
    def level(self) -> LogLevel:
        return _config['module_levels'].get(self.module.lower(), _config['default_level'])

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level >= self.level

    def _log(self, level: LogLevel, label: str, msg: str, *args) -> None:
        if not self.is_enabled_for(level):
            return
        if args:
            try:
                msg = msg % args
            except (TypeError, ValueError):
                msg = f"{msg} {args}"
        print(f"[{self.module}] {label}: {msg}")

    def trace(self, msg: str, *args) -> None:
        self._log(LogLevel.TRACE, 'TRACE', msg, *args)

    def debug(self, msg: str, *args) -> None:
        self._log(LogLevel.DEBUG, 'DEBUG', msg, *args)

    def info(self, msg: str, *args) -> None:
        self._log(LogLevel.INFO, 'INFO', msg, *args)

    def warning(self, msg: str, *args) -> None:
        self._log(LogLevel.WARNING, 'WARN', msg, *args)

    def error(self, msg: str, *args) -> None:
        self._log(LogLevel.ERROR, 'ERROR', msg, *args)

    def critical(self, msg: str, *args) -> None:
        self._log(LogLevel.CRITICAL, 'CRIT', msg, *args)

    def exception(self, msg: str, *args) -> None:
        """error() followed by the traceback being handled, one line each."""
        self._log(LogLevel.ERROR, 'ERROR', msg, *args)
        tb = traceback.format_exc()
        if tb.strip() != 'NoneType: None':
            for line in tb.strip().split('\n'):
                self._log(LogLevel.ERROR, 'TRACE', line)


@lru_cache(maxsize=64)
def get_logger(module: str) -> PerimeterLogger:
    """Cached logger for module (e.g. 'engine', 'session', 'leaderboard')."""
    return PerimeterLogger(module)
