"""Application configuration helpers."""

from __future__ import annotations

from .conversion import ConversionConfig, get_conversion_config
from .env import env_int, env_path, optional_env_var
from .errors import ConfigurationError
from .logging import configure_logging

__all__ = [
    "ConfigurationError",
    "ConversionConfig",
    "configure_logging",
    "env_int",
    "env_path",
    "get_conversion_config",
    "optional_env_var",
]
