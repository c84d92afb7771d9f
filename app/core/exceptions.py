"""Custom exception types for domain and API layers."""
from __future__ import annotations


class AppError(Exception):
    """Base app exception."""

    status_code = 500

    def __init__(self, message: str = "", error: str | None = None):
        super().__init__(message)
        self.message = message
        # short summary for the API error envelope; routes supply a default
        self.error = error


class ConfigurationError(AppError):
    """Processor credentials or settings are missing or invalid."""

    status_code = 503


class ValidationError(AppError):
    """Validation failure for user input."""

    status_code = 400


class MissingPaymentMethod(ValidationError):
    """A stored payment profile carries neither a credit card nor a bank account."""


class IntegrationError(AppError):
    """External integration call failure."""

    status_code = 502


class VendorTransportError(IntegrationError):
    """Timeout, connection failure or unreadable body from the processor."""


class MalformedResponse(IntegrationError):
    """Processor body does not match any known response shape."""


class VendorError(IntegrationError):
    """Processor returned a non-Ok result code."""

    status_code = 500

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.code = code


class NotFound(VendorError):
    """Processor reported that the requested record does not exist."""

    status_code = 404
