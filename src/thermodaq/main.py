"""Main entry point for the thermodaq temperature acquisition unit."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from thermodaq.acquisition import AcquisitionController
from thermodaq.config.settings import AcquisitionSettings, SettingsStore
from thermodaq.console import ControlInterface
from thermodaq.errors import InvalidSettingError
from thermodaq.sensors import SimulatedTemperatureSensor, SimulatorConfig

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="thermodaq",
        description="Temperature acquisition unit with an interactive operator console",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--config", type=Path, default=None, help="Settings file (default: user config dir)")
    parser.add_argument("--capacity", type=int, default=None, help="Ring buffer capacity in readings")
    parser.add_argument("--interval", type=float, default=None, help="Seconds between readings")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for deterministic readings")
    parser.add_argument("--min-temp", type=float, default=None, help="Lowest simulated reading in °C")
    parser.add_argument("--max-temp", type=float, default=None, help="Highest simulated reading in °C")
    parser.add_argument(
        "--save-config",
        action="store_true",
        help="Write the effective settings to the settings file and exit",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every collected reading")
    return parser


def apply_overrides(settings: AcquisitionSettings, args: argparse.Namespace) -> AcquisitionSettings:
    """Apply command-line values on top of the loaded settings."""
    if args.capacity is not None:
        settings.buffer_capacity = args.capacity
    if args.interval is not None:
        settings.sample_interval_s = args.interval
    if args.seed is not None:
        settings.sensor_seed = args.seed
    if args.min_temp is not None:
        settings.sensor_min_celsius = args.min_temp
    if args.max_temp is not None:
        settings.sensor_max_celsius = args.max_temp
    if args.verbose:
        settings.log_level = "INFO"
    return settings


def build_controller(settings: AcquisitionSettings) -> AcquisitionController:
    """Create an acquisition controller backed by the simulated sensor."""
    sensor = SimulatedTemperatureSensor(
        SimulatorConfig(
            min_celsius=settings.sensor_min_celsius,
            max_celsius=settings.sensor_max_celsius,
            seed=settings.sensor_seed,
        )
    )
    return AcquisitionController(
        sensor,
        buffer_capacity=settings.buffer_capacity,
        sample_interval=settings.sample_interval_s,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Launch the acquisition unit.

    Starts sampling in the background and runs the operator console on
    stdin/stdout until EXIT. The sampling thread is joined before returning.
    """
    args = build_parser().parse_args(argv)

    store = SettingsStore(args.config)
    settings = apply_overrides(store.load(), args)
    try:
        settings.validate(str(store.path))
    except InvalidSettingError as e:
        print(f"Error: {e.user_message()}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    logger.debug("Effective settings from %s: %s", store.path, settings)

    if args.save_config:
        try:
            store.save(settings)
        except OSError as e:
            print(f"Error: Could not write settings to {store.path}: {e}", file=sys.stderr)
            return 1
        print(f"Settings written to {store.path}")
        return 0

    print("Initializing temperature acquisition unit...")
    controller = build_controller(settings)
    print(f"Temperature sensor initialized (simulated, {settings.sensor_min_celsius:g}-{settings.sensor_max_celsius:g} °C).")
    print(f"Data storage initialized (capacity {settings.buffer_capacity} readings).")
    print("System initialized successfully.")

    controller.start()
    console = ControlInterface(controller)
    try:
        return console.run()
    except KeyboardInterrupt:
        print("\nExiting the system...")
        controller.shutdown()
        return 0


if __name__ == "__main__":
    sys.exit(main())
