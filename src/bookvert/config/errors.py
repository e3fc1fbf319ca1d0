"""Configuration error definitions."""

from __future__ import annotations

from bookvert.domain.errors import BookvertError


class ConfigurationError(BookvertError, RuntimeError):
    """Raised when configuration values are invalid."""
