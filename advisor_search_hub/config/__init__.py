"""Configuration management module."""

from .settings import AppSettings, MonitoringConfig, get_settings

__all__ = [
    "AppSettings",
    "MonitoringConfig",
    "get_settings",
]
