"""Configuration handling for mobile preview."""

from .models import (
    PreviewConfig,
    IOSConfig,
    AndroidConfig,
    LaunchConfig,
)
from .loader import ConfigLoader, ConfigError

__all__ = [
    "PreviewConfig",
    "IOSConfig",
    "AndroidConfig",
    "LaunchConfig",
    "ConfigLoader",
    "ConfigError",
]
