"""Project-specific exception types."""

from __future__ import annotations


class SecvarError(RuntimeError):
    """Base error for domain-level secvarctl failures."""


class ConfigError(SecvarError):
    """Raised when the secvarctl config file cannot be used."""


class BackendRegistrationError(SecvarError):
    """Raised when a backend or command table is malformed."""
