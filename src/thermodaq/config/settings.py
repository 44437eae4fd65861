"""Acquisition settings storage and validation.

Settings are stored as JSON in the OS user config directory via platformdirs,
using atomic writes (temp file + rename) to prevent corruption. Only settings
live here; readings are never persisted.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import asdict, dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any

import platformdirs

from thermodaq.errors import InvalidSettingError

logger = logging.getLogger(__name__)

# Settings format version for migrations
SETTINGS_VERSION = 1

# App name for platformdirs
APP_NAME = "thermodaq"


class LogLevel(Enum):
    """Accepted log level names."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


@dataclass
class AcquisitionSettings:
    """Acquisition settings data model."""

    # Metadata
    settings_version: int = SETTINGS_VERSION

    # Buffering
    buffer_capacity: int = 10
    sample_interval_s: float = 1.0

    # Simulated sensor
    sensor_min_celsius: float = 15.0
    sensor_max_celsius: float = 30.0
    sensor_seed: int | None = None

    # Diagnostics
    log_level: str = LogLevel.WARNING.value

    def validate(self, path: str | None = None) -> None:
        """Check every value is in range.

        Args:
            path: Settings file the values came from, for error context.

        Raises:
            InvalidSettingError: On the first out-of-range value.
        """
        if not isinstance(self.buffer_capacity, int) or self.buffer_capacity < 1:
            raise InvalidSettingError("buffer_capacity", self.buffer_capacity, "must be an integer >= 1", path)
        if not isinstance(self.sample_interval_s, (int, float)) or self.sample_interval_s <= 0:
            raise InvalidSettingError("sample_interval_s", self.sample_interval_s, "must be a positive number", path)
        for name in ("sensor_min_celsius", "sensor_max_celsius"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidSettingError(name, value, "must be a number", path)
        if self.sensor_max_celsius <= self.sensor_min_celsius:
            raise InvalidSettingError(
                "sensor_max_celsius",
                self.sensor_max_celsius,
                f"must be greater than sensor_min_celsius ({self.sensor_min_celsius})",
                path,
            )
        seed = self.sensor_seed
        if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
            raise InvalidSettingError("sensor_seed", seed, "must be an integer or null", path)
        if not isinstance(self.log_level, str) or self.log_level.upper() not in {level.value for level in LogLevel}:
            raise InvalidSettingError(
                "log_level",
                self.log_level,
                "must be one of " + ", ".join(level.value for level in LogLevel),
                path,
            )


def get_settings_dir() -> Path:
    """Return the OS-specific user config directory for thermodaq."""
    return Path(platformdirs.user_config_dir(APP_NAME))


def get_settings_path() -> Path:
    """Return the full path to the settings.json file."""
    return get_settings_dir() / "settings.json"


class SettingsStore:
    """Handles loading and saving acquisition settings with atomic writes.

    Example usage:
        store = SettingsStore()
        settings = store.load()
        settings.buffer_capacity = 100
        store.save(settings)
    """

    def __init__(self, settings_path: Path | None = None) -> None:
        """Initialize the settings store.

        Args:
            settings_path: Custom path for the settings file. If None, uses
                the default OS config directory location.
        """
        self._path = settings_path or get_settings_path()

    @property
    def path(self) -> Path:
        """Return the settings file path."""
        return self._path

    def load(self) -> AcquisitionSettings:
        """Load settings from disk.

        Returns:
            AcquisitionSettings with values from disk, or defaults if the file
            doesn't exist or is unreadable.
        """
        if not self._path.exists():
            return AcquisitionSettings()

        try:
            with open(self._path, encoding="utf-8") as f:
                data = json.load(f)
            return self._from_dict(data)
        except (json.JSONDecodeError, OSError, TypeError) as e:
            logger.warning("Ignoring unreadable settings file %s: %s", self._path, e)
            return AcquisitionSettings()

    def save(self, settings: AcquisitionSettings) -> None:
        """Save settings to disk using atomic write.

        Args:
            settings: The settings to save.

        Raises:
            InvalidSettingError: If a value is out of range.
            OSError: If the directory cannot be created or write fails.
        """
        settings.validate(str(self._path))
        settings.settings_version = SETTINGS_VERSION

        self._path.parent.mkdir(parents=True, exist_ok=True)

        content = json.dumps(asdict(settings), indent=2, ensure_ascii=False)

        # Atomic write: temp file + rename
        fd, tmp_path = tempfile.mkstemp(
            suffix=".tmp",
            prefix="settings_",
            dir=self._path.parent,
        )
        try:
            try:
                os.write(fd, content.encode("utf-8"))
                os.fsync(fd)
            finally:
                os.close(fd)
            os.replace(tmp_path, self._path)
        except BaseException:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise

    def _from_dict(self, data: dict[str, Any]) -> AcquisitionSettings:
        """Convert a dictionary to AcquisitionSettings.

        Unknown keys are ignored, missing keys use defaults.
        """
        if not isinstance(data, dict):
            raise TypeError(f"expected a JSON object, got {type(data).__name__}")
        valid_fields = {f.name for f in fields(AcquisitionSettings)}
        kwargs = {key: value for key, value in data.items() if key in valid_fields}
        return AcquisitionSettings(**kwargs)
