"""Config settings – 12-factor env-based configuration."""
from mp_facets.config.settings.base import Settings
from mp_facets.config.settings.factory import SettingsFactory
from mp_facets.config.settings.loaders import EnvSettingsLoader, SettingsLoader
from mp_facets.config.settings.provider import SettingsProvider

__all__ = ["EnvSettingsLoader", "Settings", "SettingsFactory", "SettingsLoader", "SettingsProvider"]
