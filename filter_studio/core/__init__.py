"""Core services for the Filter Studio application."""
from .logging_config import LoggingConfigurator, LoggingOptions
from .settings_manager import DEFAULT_SETTINGS, SettingsManager
from .threading import ThreadController

__all__ = [
    "DEFAULT_SETTINGS",
    "LoggingConfigurator",
    "LoggingOptions",
    "SettingsManager",
    "ThreadController",
]
