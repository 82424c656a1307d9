"""Small string utilities used when handling command-line values."""

import re
import string

_LOWER_TABLE = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_TRIM_CHARS = "\t\n\v\f\r "
_ATOI = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")


def is_null_or_empty(text: str | None) -> bool:
    """Return True for None or the empty string."""
    return text is None or text == ""


def to_lower(text: str) -> str:
    """Lower-case ASCII letters only, leaving every other character alone."""
    return text.translate(_LOWER_TABLE)


def trim(text: str) -> str:
    """Strip surrounding whitespace; text made only of whitespace is left as is."""
    stripped = text.strip(_TRIM_CHARS)
    return stripped if stripped else text


def _atoi(text: str) -> int:
    match = _ATOI.match(text)
    return int(match.group(1)) if match else 0


def validate_number_string(text: str | None, min_value: int, max_value: int) -> int:
    """Parse the leading integer of text and check it lies in [min_value, max_value].

    Raises ValueError when the text is empty or the number is out of range.
    """
    if is_null_or_empty(text):
        raise ValueError("no number given")
    value = _atoi(text)
    if value < min_value or value > max_value:
        raise ValueError(f"{value} is not between {min_value} and {max_value}")
    return value