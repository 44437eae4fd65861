"""Tests for the operator console and command parsing."""

import io
import time

import pytest

from conftest import FAST_INTERVAL, CountingSource, wait_until
from thermodaq.acquisition import AcquisitionController
from thermodaq.console import PROMPT, Command, ControlInterface, parse_command
from thermodaq.errors import ErrorCategory, UnknownCommandError
from thermodaq.models import ControllerState
from thermodaq.sensors import ReplaySource


class TestParseCommand:
    """Tests for parse_command()."""

    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ("DISPLAY AVG", Command.DISPLAY_AVG),
            ("display avg", Command.DISPLAY_AVG),
            ("  Display MinMax \n", Command.DISPLAY_MINMAX),
            ("reset", Command.RESET),
            ("Toggle Power", Command.TOGGLE_POWER),
            ("exit\n", Command.EXIT),
        ],
    )
    def test_recognized(self, line: str, expected: Command) -> None:
        assert parse_command(line) is expected

    @pytest.mark.parametrize("line", ["", "   ", "DISPLAY", "DISPLAYAVG", "DISPLAY  AVG", "quit", "RESET NOW"])
    def test_unknown(self, line: str) -> None:
        with pytest.raises(UnknownCommandError) as exc_info:
            parse_command(line)
        assert exc_info.value.category == ErrorCategory.CMD
        assert exc_info.value.context.command == line.strip()

    def test_prompt_lists_all_commands(self) -> None:
        for command in Command:
            assert command.value in PROMPT


class TestExecute:
    """Tests for ControlInterface.execute()."""

    def test_unknown_command_changes_nothing(self, stepped_controller) -> None:
        controller, _ = stepped_controller
        controller.sample_once()
        console = ControlInterface(controller)

        result = console.execute("FLY AWAY")

        assert result.command is None
        assert result.text == "Unknown command."
        assert result.exit_requested is False
        assert controller.state == ControllerState.RUNNING
        assert controller.buffer.snapshot_valid().tolist() == [18.0]

    def test_display_avg_no_data(self, stepped_controller) -> None:
        controller, _ = stepped_controller
        result = ControlInterface(controller).execute("DISPLAY AVG")
        assert result.text == "No data available to calculate average."

    def test_display_minmax_no_data(self, stepped_controller) -> None:
        controller, _ = stepped_controller
        result = ControlInterface(controller).execute("DISPLAY MINMAX")
        assert result.text == (
            "No data available to calculate minimum.\n"
            "No data available to calculate maximum."
        )

    def test_toggle_power_messages(self, stepped_controller) -> None:
        controller, _ = stepped_controller
        console = ControlInterface(controller)
        assert console.execute("TOGGLE POWER").text == "Power-saving mode activated. Data collection paused."
        assert console.execute("TOGGLE POWER").text == "Power-saving mode deactivated. Resuming data collection."

    def test_toggle_power_after_exit(self, stepped_controller) -> None:
        controller, _ = stepped_controller
        console = ControlInterface(controller)
        console.execute("EXIT")
        assert console.execute("TOGGLE POWER").text == "Data collection has stopped."

    def test_exit_stops_controller(self, running_controller: AcquisitionController) -> None:
        result = ControlInterface(running_controller).execute("exit")
        assert result.exit_requested is True
        assert result.text == "Exiting the system..."
        assert running_controller.state == ControllerState.STOPPED


class TestEndToEnd:
    """Operator session over a replayed sensor."""

    def test_session(self, stepped_controller) -> None:
        controller, _ = stepped_controller
        console = ControlInterface(controller)
        for _ in range(3):
            assert controller.sample_once() is True

        assert console.execute("DISPLAY AVG").text == "Average Temperature: 18.67"
        assert console.execute("DISPLAY MINMAX").text == (
            "Minimum Temperature: 16.00\nMaximum Temperature: 22.00"
        )

        before = controller.buffer.snapshot_valid().tolist()
        console.execute("TOGGLE POWER")
        console.execute("TOGGLE POWER")
        assert controller.state == ControllerState.RUNNING
        assert controller.buffer.snapshot_valid().tolist() == before

        assert console.execute("RESET").text == "Data reset."
        assert console.execute("DISPLAY AVG").text == "No data available to calculate average."

    def test_run_with_background_sampling(self) -> None:
        source = ReplaySource([18.0, 22.0, 16.0])
        controller = AcquisitionController(source, buffer_capacity=10, sample_interval=FAST_INTERVAL)
        controller.start()
        assert wait_until(lambda: len(controller.buffer) == 3)

        stdin = io.StringIO("display avg\nDISPLAY MINMAX\nbogus\nEXIT\nDISPLAY AVG\n")
        stdout = io.StringIO()
        exit_code = ControlInterface(controller).run(stdin, stdout)

        assert exit_code == 0
        assert stdout.getvalue().splitlines() == [
            PROMPT,
            "Average Temperature: 18.67",
            "Minimum Temperature: 16.00",
            "Maximum Temperature: 22.00",
            "Unknown command.",
            "Exiting the system...",
        ]
        assert controller.state == ControllerState.STOPPED
        assert controller.join(timeout=0.0) is True

    def test_run_end_of_input_shuts_down(self, counting_source: CountingSource) -> None:
        controller = AcquisitionController(counting_source, sample_interval=FAST_INTERVAL)
        controller.start()

        stdout = io.StringIO()
        assert ControlInterface(controller).run(io.StringIO("RESET\n"), stdout) == 0

        assert "Data reset." in stdout.getvalue()
        assert controller.state == ControllerState.STOPPED
        calls = counting_source.calls
        time.sleep(FAST_INTERVAL * 5)
        assert counting_source.calls == calls
