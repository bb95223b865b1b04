"""Levelled console logging: messages below the current level are dropped."""

from __future__ import annotations

from enum import IntEnum
from typing import Any


class LoggerLevel(IntEnum):
    """Log levels; the smaller the level, the more is logged."""

    DEBUG = 0
    INFO = 1
    ERROR = 2


_current_level = LoggerLevel.INFO


def set_level(level: LoggerLevel | int) -> None:
    """Set the lowest level that is still printed."""
    global _current_level
    _current_level = LoggerLevel(level)


def _enabled(level: LoggerLevel | int) -> bool:
    return _current_level <= level


def log(level: LoggerLevel | int, *args: Any) -> None:
    """Print the arguments separated by spaces, followed by a newline."""
    if _enabled(level):
        print(*args)


def logf(level: LoggerLevel | int, message: str, *args: Any) -> None:
    """Print a %-formatted message without adding a newline."""
    if _enabled(level):
        print(message % args if args else message, end="")


def error(*args: Any) -> None:
    log(LoggerLevel.ERROR, *args)


def errorf(message: str, *args: Any) -> None:
    logf(LoggerLevel.ERROR, message, *args)


def info(*args: Any) -> None:
    log(LoggerLevel.INFO, *args)


def infof(message: str, *args: Any) -> None:
    logf(LoggerLevel.INFO, message, *args)


def debug(*args: Any) -> None:
    log(LoggerLevel.DEBUG, *args)


def debugf(message: str, *args: Any) -> None:
    logf(LoggerLevel.DEBUG, message, *args)