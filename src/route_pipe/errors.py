"""Custom exceptions for route-pipe."""

from __future__ import annotations


class RoutePipeError(Exception):
    """Base error for route-pipe failures."""


class ConfigurationError(RoutePipeError):
    """Raised when a required configuration key is missing."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Missing required configuration key: {key}")
        self.key = key


class ReleaseError(RoutePipeError):
    """Raised when a release step cannot complete."""
