"""Config validation errors."""
from cache_map.config.validation.errors import (
    ConfigError,
    ConfigurationError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
    UnresolvedAssociationError,
)

__all__ = [
    "ConfigError",
    "ConfigurationError",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "UnresolvedAssociationError",
]
