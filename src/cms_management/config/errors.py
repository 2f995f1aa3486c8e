"""Configuration error definitions."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Base class for problems with the runtime configuration."""


class MissingConfigurationError(ConfigurationError):
    """One or more required environment variables are unset or blank."""


class InvalidConfigurationError(ConfigurationError):
    """A configuration value is present but cannot be used."""
