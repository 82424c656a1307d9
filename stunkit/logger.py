"""Level-filtered console messages."""

from enum import IntEnum


class LogLevel(IntEnum):
    """Verbosity levels; a message prints when its level is at most the current one."""

    ALWAYS = 0
    DEBUG = 1
    VERBOSE = 2
    VERBOSE_EXTREME = 3


_level: int = int(LogLevel.ALWAYS)


def get_log_level() -> int:
    """Return the current log level."""
    return _level


def set_log_level(level: int) -> None:
    """Set the current log level; negative levels are rejected."""
    global _level
    level = int(level)
    if level < 0:
        raise ValueError("log level must not be negative")
    _level = level


def log_msg(level: int, fmt: str, *args) -> None:
    """Print a printf-style formatted message if level is enabled."""
    if level <= _level:
        print(fmt % args if args else fmt)