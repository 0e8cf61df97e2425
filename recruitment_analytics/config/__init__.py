"""
Configuration Management

Centralized configuration for:
- Alert thresholds
- Dataset location
- Logging
"""

from .settings import (
    Settings,
    AlertConfig,
    get_settings,
    configure_logging
)

__all__ = [
    "Settings",
    "AlertConfig",
    "get_settings",
    "configure_logging"
]
