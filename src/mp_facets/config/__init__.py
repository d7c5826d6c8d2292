"""Config – 12-factor settings, loaders and run snapshots."""

from mp_facets.config.settings import (
    EnvSettingsLoader,
    Settings,
    SettingsFactory,
    SettingsLoader,
    SettingsProvider,
)
from mp_facets.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
    "SettingsProvider",
]
