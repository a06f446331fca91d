"""
Configuration module for the guild siege log parser.

Provides centralized configuration management for the database location,
server settings, siege timing and character class rosters.
"""

from .settings import (
    ApplicationSettings,
    DatabaseSettings,
    ServerSettings,
    SiegeSettings,
    UploadSettings,
    get_settings,
    reload_settings,
    settings
)
from .loader import ConfigLoader, load_class_lookup

__all__ = [
    "ApplicationSettings",
    "DatabaseSettings",
    "ServerSettings",
    "SiegeSettings",
    "UploadSettings",
    "ConfigLoader",
    "get_settings",
    "reload_settings",
    "load_class_lookup",
    "settings"
]
