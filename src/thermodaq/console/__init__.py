"""Operator console: command parsing and the interactive control loop."""

from thermodaq.console.commands import PROMPT, Command, parse_command
from thermodaq.console.control_interface import CommandResult, ControlInterface

__all__ = [
    "PROMPT",
    "Command",
    "CommandResult",
    "ControlInterface",
    "parse_command",
]
