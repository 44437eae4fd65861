"""Operator console translating text commands into controller operations.

Reads one line at a time, maps it to an AcquisitionController call and renders
the result as text. Unknown input is reported and changes nothing.
"""

import logging
import sys
from dataclasses import dataclass
from typing import Optional, TextIO

from thermodaq.acquisition.acquisition_controller import AcquisitionController
from thermodaq.console.commands import PROMPT, Command, parse_command
from thermodaq.errors import UnknownCommandError
from thermodaq.models import ControllerState, StatsSnapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of one operator command.

    Attributes:
        command: The parsed command, or None for unrecognized input.
        text: Response to show the operator (may span several lines).
        exit_requested: Whether the console loop should stop.
    """

    command: Optional[Command]
    text: str
    exit_requested: bool = False


def format_average(snapshot: StatsSnapshot) -> str:
    if not snapshot.has_data:
        return "No data available to calculate average."
    return f"Average Temperature: {snapshot.average:.2f}"


def format_minmax(snapshot: StatsSnapshot) -> str:
    if not snapshot.has_data:
        return "No data available to calculate minimum.\nNo data available to calculate maximum."
    return (
        f"Minimum Temperature: {snapshot.minimum:.2f}\n"
        f"Maximum Temperature: {snapshot.maximum:.2f}"
    )


def format_power_state(state: ControllerState) -> str:
    if state is ControllerState.PAUSED:
        return "Power-saving mode activated. Data collection paused."
    if state is ControllerState.RUNNING:
        return "Power-saving mode deactivated. Resuming data collection."
    return "Data collection has stopped."


class ControlInterface:
    """Interactive command loop bound to one acquisition controller.

    Example:
        >>> console = ControlInterface(controller)
        >>> console.execute("display avg").text
        'Average Temperature: 18.67'
    """

    def __init__(self, controller: AcquisitionController) -> None:
        self._controller = controller

    @property
    def controller(self) -> AcquisitionController:
        """The controller commands are issued against."""
        return self._controller

    def execute(self, line: str) -> CommandResult:
        """Execute one line of operator input.

        Args:
            line: Raw operator input.

        Returns:
            CommandResult with the text to display.
        """
        try:
            command = parse_command(line)
        except UnknownCommandError as e:
            logger.debug("Rejected operator input %r", e.context.command)
            return CommandResult(command=None, text=e.user_message())

        controller = self._controller
        if command is Command.DISPLAY_AVG:
            return CommandResult(command, format_average(controller.current_stats()))

        if command is Command.DISPLAY_MINMAX:
            return CommandResult(command, format_minmax(controller.current_stats()))

        if command is Command.RESET:
            controller.reset()
            return CommandResult(command, "Data reset.")

        if command is Command.TOGGLE_POWER:
            return CommandResult(command, format_power_state(controller.pause_toggle()))

        # Command.EXIT
        controller.shutdown()
        return CommandResult(command, "Exiting the system...", exit_requested=True)

    def run(self, input_stream: Optional[TextIO] = None, output_stream: Optional[TextIO] = None) -> int:
        """Run the command loop until EXIT or end of input.

        End of input is treated as EXIT. The sampling thread is always shut
        down and joined before this returns.

        Args:
            input_stream: Source of operator lines (default: stdin).
            output_stream: Destination for responses (default: stdout).

        Returns:
            Process exit code.
        """
        if input_stream is None:
            input_stream = sys.stdin
        if output_stream is None:
            output_stream = sys.stdout

        print(PROMPT, file=output_stream, flush=True)
        try:
            for line in iter(input_stream.readline, ""):
                result = self.execute(line)
                print(result.text, file=output_stream, flush=True)
                if result.exit_requested:
                    break
            else:
                logger.info("End of operator input, exiting")
        finally:
            self._controller.shutdown()

        return 0
