"""Configuration for the security center."""

from .logging_config import LoggingConfig, setup_logging
from .settings import SecurityCenterSettings, get_settings

__all__ = [
    "LoggingConfig",
    "SecurityCenterSettings",
    "get_settings",
    "setup_logging",
]
