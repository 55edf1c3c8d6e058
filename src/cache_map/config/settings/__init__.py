"""Config settings – 12-factor env-based configuration."""
from cache_map.config.settings.base import CacheMapSettings, Settings
from cache_map.config.settings.loaders import EnvSettingsLoader, SettingsLoader

__all__ = ["CacheMapSettings", "EnvSettingsLoader", "Settings", "SettingsLoader"]
