"""Config settings – env-based configuration."""
from resops.config.settings.base import Settings
from resops.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader
from resops.config.settings.resops import VISIBILITY_OWNER, VISIBILITY_PAGE, ResopsSettings

__all__ = [
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "ResopsSettings",
    "Settings",
    "SettingsLoader",
    "VISIBILITY_OWNER",
    "VISIBILITY_PAGE",
]
