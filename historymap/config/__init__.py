"""
Configuration package for the Uncovering History front-end service.
"""

from .settings import (
    Settings,
    Environment,
    LogLevel,
    BackendSettings,
    MapSettings,
    SecuritySettings,
    settings,
    get_settings,
    reload_settings,
    settings_for_environment,
    settings_from_env_file,
)

__all__ = [
    "Settings",
    "Environment",
    "LogLevel",
    "BackendSettings",
    "MapSettings",
    "SecuritySettings",
    "settings",
    "get_settings",
    "reload_settings",
    "settings_for_environment",
    "settings_from_env_file",
]
