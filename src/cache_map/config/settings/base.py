"""Config settings – Settings base class and CacheMapSettings."""
from __future__ import annotations

import dataclasses
import logging
from typing import ClassVar

from cache_map.config.validation.errors import InvalidSettingValueError
from cache_map.graph.models import TriggerEvent

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class CacheMapSettings(Settings):
    """Defaults applied by the declaration engine when an option is omitted.

    Loaded from ``CACHE_MAP_*`` environment variables by
    :class:`~cache_map.config.settings.loaders.EnvSettingsLoader`.
    """

    _prefix: ClassVar[str] = "CACHE_MAP"

    default_timestamp: bool = True
    default_scopes: list[str] = dataclasses.field(default_factory=lambda: ["scoped"])
    default_trigger: str = TriggerEvent.AFTER_SAVE.value
    log_level: str = "INFO"
    log_json: bool = True

    def _validate(self) -> None:
        if self.default_trigger not in {t.value for t in TriggerEvent}:
            raise InvalidSettingValueError(
                "default_trigger", self.default_trigger, "unknown lifecycle event"
            )
        if self.log_level.upper() not in _LOG_LEVELS:
            raise InvalidSettingValueError("log_level", self.log_level, "unknown log level")

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level.upper())


__all__ = ["CacheMapSettings", "Settings"]
