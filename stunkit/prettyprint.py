"""Word-wrapping of help text to a console width."""

import re
import sys
from typing import TextIO

_WHITESPACE = " \t\v\r\n"
_WORD_SPLIT = re.compile(r"[ \t\v\r\n]+")
_PARAGRAPH_BREAK = re.compile(r"\r\n|\r|\n")


def split_paragraphs(text: str | None) -> list[str]:
    """Split text into lines at \\r\\n, \\r or \\n; a final newline adds no empty line."""
    if not text:
        return []
    parts = _PARAGRAPH_BREAK.split(text)
    if text.endswith(("\r", "\n")):
        parts.pop()
    return parts


def wrap_paragraph(paragraph: str | None, width: int) -> list[str]:
    """Greedily wrap one paragraph, keeping its leading indentation on every line.

    A word longer than the width still gets a line of its own. An empty
    paragraph yields one empty line.
    """
    if paragraph is None or width <= 0:
        return []
    words = [word for word in _WORD_SPLIT.split(paragraph) if word]
    if not words:
        return [""]
    indent_len = min(len(paragraph) - len(paragraph.lstrip(_WHITESPACE)), width - 1)
    indent = " " * indent_len

    lines = []
    line = indent + words[0]
    for word in words[1:]:
        if len(line) + 1 + len(word) <= width:
            line += " " + word
        else:
            lines.append(line)
            line = indent + word
    lines.append(line)
    return lines


def pretty_format(text: str | None, width: int) -> str:
    """Return text wrapped to width, each output line ending in a newline."""
    return "".join(
        line + "\n"
        for paragraph in split_paragraphs(text)
        for line in wrap_paragraph(paragraph, width)
    )


def pretty_print(text: str | None, width: int, file: TextIO | None = None) -> None:
    """Write text wrapped to width to file (standard output by default)."""
    out = sys.stdout if file is None else file
    out.write(pretty_format(text, width))