"""Engine error types."""

from __future__ import annotations


class ConfigError(ValueError):
    """Raised at construction when pools, templates and sectors disagree."""


class UsageError(RuntimeError):
    """Raised when a spin is requested while another one is still in flight."""
