"""Config – declaration defaults, env loading and configuration errors."""

from cache_map.config.settings import CacheMapSettings, EnvSettingsLoader, Settings, SettingsLoader
from cache_map.config.validation import (
    ConfigError,
    ConfigurationError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
    UnresolvedAssociationError,
)

__all__ = [
    "CacheMapSettings",
    "ConfigError",
    "ConfigurationError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
    "UnresolvedAssociationError",
]
