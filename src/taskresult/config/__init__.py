"""Configuration loading."""

from taskresult.config.settings import CONFIG_FILENAME, Settings, SettingsError

__all__ = ["CONFIG_FILENAME", "Settings", "SettingsError"]
