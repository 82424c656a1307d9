"""Long-option command-line parsing in the style of getopt_long_only."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Sequence


class HasArg(IntEnum):
    """Whether an option takes an argument."""

    NO = 0
    REQUIRED = 1
    OPTIONAL = 2


@dataclass
class ParsedCommandLine:
    """Values bound by name, and whether any argument could not be parsed."""

    values: dict[str, str] = field(default_factory=dict)
    error: bool = False

    def get(self, name: str, default: str = "") -> str:
        """Return the value bound to name, or default when none was given."""
        return self.values.get(name, default)


class CmdLineParser:
    """Parses long options (with one or two dashes) and named positional arguments.

    Options may be abbreviated to any unambiguous prefix. Options and
    positional arguments may be interleaved; everything after "--" is
    positional. Options without an argument are recorded as "1".
    """

    def __init__(self) -> None:
        self._options: dict[str, HasArg] = {}
        self._non_options: list[str] = []

    def add_option(self, name: str, has_arg: int) -> None:
        """Register a long option; raises ValueError for a bad name or has_arg."""
        if not isinstance(name, str):
            raise ValueError("option name must be a string")
        self._options[name] = HasArg(has_arg)

    def add_non_option(self, name: str) -> None:
        """Bind the next positional argument to name."""
        self._non_options.append(name)

    def _match(self, name: str) -> str | None:
        if name in self._options:
            return name
        if not name:
            return None
        candidates = [option for option in self._options if option.startswith(name)]
        return candidates[0] if len(candidates) == 1 else None

    def parse_command_line(self, argv: Sequence[str], start_index: int = 1) -> ParsedCommandLine:
        """Parse argv from start_index on and return what was found."""
        result = ParsedCommandLine()
        positionals: list[str] = []
        tokens = iter(argv[start_index:])

        for token in tokens:
            if token == "--":
                positionals.extend(tokens)
                break
            if token == "-" or not token.startswith("-"):
                positionals.append(token)
                continue

            body = token[2:] if token.startswith("--") else token[1:]
            name, has_inline, inline = body.partition("=")
            option = self._match(name)
            if option is None:
                result.error = True
                continue

            kind = self._options[option]
            if kind is HasArg.NO:
                if has_inline:
                    result.error = True
                    continue
                result.values[option] = "1"
            elif kind is HasArg.REQUIRED:
                value = inline if has_inline else next(tokens, None)
                if value is None:
                    result.error = True
                    continue
                result.values[option] = value
            else:
                result.values[option] = inline if has_inline else "1"

        bound = (arg for arg in positionals if arg != "--")
        for name, value in zip(self._non_options, bound):
            result.values[name] = value
        return result