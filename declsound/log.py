"""Categorised logging with per-category thresholds and a pollable message buffer."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Optional


class LogCategory(IntEnum):
    """Subsystem a log message belongs to."""

    CLI = 0
    GENERAL = 1
    AUDIO_CORE = 2
    AUDIO_DEVICE = 3
    AUDIO_BUFFER = 4
    AUDIO_MANAGER = 5
    BEHAVIOR_LOADER = 6
    ENTITY = 7
    LEAF = 8
    PARSER = 9

    @property
    def label(self) -> str:
        """Name used in printed log lines."""
        return _CATEGORY_LABELS[self]


class LogLevel(IntEnum):
    """Severity of a log message, in increasing order."""

    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARNING = 3
    ERROR = 4

    @property
    def label(self) -> str:
        return self.name.capitalize()


_CATEGORY_LABELS = {
    LogCategory.CLI: "CLI",
    LogCategory.GENERAL: "General",
    LogCategory.AUDIO_CORE: "AudioCore",
    LogCategory.AUDIO_DEVICE: "AudioDevice",
    LogCategory.AUDIO_BUFFER: "AudioBuffer",
    LogCategory.AUDIO_MANAGER: "AudioManager",
    LogCategory.BEHAVIOR_LOADER: "BehaviorLoader",
    LogCategory.ENTITY: "Entity",
    LogCategory.LEAF: "Leaf",
    LogCategory.PARSER: "Parser",
}

# AudioManager has no explicit default and so starts at the lowest level.
_DEFAULT_LEVELS = {
    category: (LogLevel.TRACE if category is LogCategory.AUDIO_MANAGER else LogLevel.DEBUG)
    for category in LogCategory
}


@dataclass(frozen=True)
class LogEntry:
    """A buffered log message."""

    message: str
    category: LogCategory
    level: LogLevel


LogCallback = Callable[[LogCategory, LogLevel, str], None]

_lock = threading.Lock()
_minimum_levels: dict[LogCategory, LogLevel] = dict(_DEFAULT_LEVELS)
_buffer: deque[LogEntry] = deque()
_callback: Optional[LogCallback] = None


def set_minimum_level(category: LogCategory | int, level: LogLevel | int) -> None:
    """Set the lowest level printed for a category."""
    _minimum_levels[LogCategory(category)] = LogLevel(level)


def log_message(message: str, category: LogCategory | int, level: LogLevel | int) -> None:
    """Print the message if it passes its category's threshold and buffer it."""
    category = LogCategory(category)
    level = LogLevel(level)
    if level >= _minimum_levels[category]:
        print(f"[Log-{category.label}] {message}", flush=True)

    with _lock:
        _buffer.append(LogEntry(message, category, level))
        callback = _callback

    if callback is not None:
        callback(category, level, message)


def set_log_callback(callback: Optional[LogCallback]) -> None:
    """Install a function called with (category, level, message) for every message."""
    global _callback
    with _lock:
        _callback = callback


def poll_log(max_length: Optional[int] = None) -> Optional[LogEntry]:
    """Remove and return the oldest buffered entry, or None when empty.

    With ``max_length`` the message is cut to at most ``max_length - 1``
    characters, leaving room for a terminator in fixed-size receivers.
    """
    if max_length is not None and max_length < 1:
        raise ValueError("max_length must be at least 1")
    with _lock:
        if not _buffer:
            return None
        entry = _buffer.popleft()
    if max_length is not None and len(entry.message) > max_length - 1:
        entry = LogEntry(entry.message[: max_length - 1], entry.category, entry.level)
    return entry


def clear_log() -> None:
    """Drop every buffered entry."""
    with _lock:
        _buffer.clear()