"""
Custom exceptions for Decaminx.

All Decaminx exceptions inherit from DecaminxError for easy catching.
Classification itself never raises: a point that belongs to no piece is
reported through the void result, not through an exception.
"""

from typing import Any


class DecaminxError(Exception):
    """Base exception for all Decaminx errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class ConfigurationError(DecaminxError):
    """Raised when configuration is invalid or missing."""

    pass


class GeometryError(DecaminxError):
    """Raised when a geometric argument is degenerate or out of range."""

    pass


class CapabilityNotImplementedError(DecaminxError, NotImplementedError):
    """Raised by queries that exist in the interface but are not built yet."""

    def __init__(
        self,
        message: str,
        capability: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.capability = capability
