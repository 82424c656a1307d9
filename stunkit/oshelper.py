"""Console width and a wrapping millisecond clock."""

import os
import time

DEFAULT_CONSOLE_WIDTH = 80


def get_console_width() -> int:
    """Return the terminal width seen on stdin, or 80 when it cannot be read."""
    try:
        columns = os.get_terminal_size(0).columns
    except (OSError, ValueError):
        return DEFAULT_CONSOLE_WIDTH
    return columns if columns > 0 else DEFAULT_CONSOLE_WIDTH


def get_millisecond_counter() -> int:
    """Return wall-clock milliseconds truncated to 32 bits."""
    return (time.time_ns() // 1_000_000) & 0xFFFFFFFF