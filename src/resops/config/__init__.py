"""Config – settings, loaders and validation errors."""

from resops.config.settings import EnvSettingsLoader, ResopsSettings, Settings, SettingsLoader
from resops.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "ResopsSettings",
    "Settings",
    "SettingsLoader",
]
