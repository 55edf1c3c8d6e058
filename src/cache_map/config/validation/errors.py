"""Config validation errors."""
from __future__ import annotations

from typing import Any

from cache_map.graph.models import model_name
from cache_map.kernel.errors import BaseError


class ConfigError(BaseError):
    """Raised when configuration is invalid or loading failed."""
    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """A required environment variable / setting is absent."""
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(f"Required setting '{setting_name}' is missing")
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """A setting's value is present but semantically invalid."""
    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"Setting '{setting_name}' has invalid value {value!r}: {reason}"
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


class ConfigurationError(ConfigError):
    """A cache-map declaration is inconsistent with the model metadata."""
    default_code = "configuration_error"


class UnresolvedAssociationError(ConfigurationError):
    """``collection`` named an association the resource model does not have."""
    default_code = "unresolved_association"

    def __init__(self, model: Any, association_name: str) -> None:
        name = model_name(model)
        super().__init__(
            f"Relation '{association_name}' is not set on the class {name}",
            detail={"model": name, "association": association_name},
        )
        self.model = model
        self.association_name = association_name


__all__ = [
    "ConfigError",
    "ConfigurationError",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "UnresolvedAssociationError",
]
