"""Configuration: acquisition settings and their on-disk store."""

from thermodaq.config.settings import (
    APP_NAME,
    SETTINGS_VERSION,
    AcquisitionSettings,
    LogLevel,
    SettingsStore,
    get_settings_dir,
    get_settings_path,
)

__all__ = [
    "APP_NAME",
    "SETTINGS_VERSION",
    "AcquisitionSettings",
    "LogLevel",
    "SettingsStore",
    "get_settings_dir",
    "get_settings_path",
]
