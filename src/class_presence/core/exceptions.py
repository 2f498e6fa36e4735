from __future__ import annotations

from .enums import LocationErrorCode


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class ConfigurationError(DomainError):
    """Raised when institution or class data cannot be used as configured."""


class LocationError(DomainError):
    """Raised by location providers when the device cannot report a position."""

    def __init__(self, code: LocationErrorCode, detail: str | None = None):
        super().__init__(detail or code.name.lower())
        self.code = LocationErrorCode(code)
        self.detail = detail
