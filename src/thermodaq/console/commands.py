"""Operator command vocabulary."""

from enum import Enum

from thermodaq.errors import UnknownCommandError


class Command(Enum):
    """Commands recognized on the operator console.

    Values are the canonical (upper-case) spelling.
    """

    DISPLAY_AVG = "DISPLAY AVG"
    DISPLAY_MINMAX = "DISPLAY MINMAX"
    RESET = "RESET"
    TOGGLE_POWER = "TOGGLE POWER"
    EXIT = "EXIT"


_BY_TEXT = {command.value: command for command in Command}

PROMPT = "Enter command ({}):".format(", ".join(c.value for c in Command))


def parse_command(line: str) -> Command:
    """Parse one line of operator input.

    Matching is case-insensitive and ignores surrounding whitespace.

    Raises:
        UnknownCommandError: If the line is not a recognized command.
    """
    text = line.strip().upper()
    try:
        return _BY_TEXT[text]
    except KeyError:
        raise UnknownCommandError(line.strip()) from None
