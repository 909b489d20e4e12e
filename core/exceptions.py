"""Custom Exception Hierarchy for the audio description backend
This module defines a typed exception hierarchy that enables precise error
handling and structured error responses across the application.

Exception Handling Flow:
    1. Service layer raises typed exception
    2. Route (or FastAPI exception handler, see main.py) catches it
    3. Handler converts to structured JSON response
    4. Client receives error payload with message and context
"""

from __future__ import annotations


class ServiceError(Exception):
    """Base exception for all service layer errors."""


class ValidationError(ServiceError):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str | None = None):
        self.message = message
        self.field = field
        super().__init__(self.message)


class NotFoundError(ServiceError):
    """Raised when a requested resource cannot be located."""

    def __init__(self, message: str, resource: str | None = None):
        self.message = message
        self.resource = resource
        super().__init__(self.message)


class ProviderError(ServiceError):
    """Raised when an external provider (AI API) fails."""

    def __init__(self, message: str, provider: str | None = None, original_error: Exception | None = None):
        self.message = message
        self.provider = provider
        self.original_error = original_error
        super().__init__(self.message)


class SynthesisError(ProviderError):
    """Raised when a text-to-speech backend fails or returns no audio."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        http_status: int | None = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message, provider=provider, original_error=original_error)
        self.http_status = http_status


class RateLimitError(ProviderError):
    """Raised when a rate limit (provider or per-IP guard) is exceeded."""

    def __init__(self, message: str, retry_after: int | None = None, scope: str | None = None):
        super().__init__(message)
        self.retry_after = retry_after
        self.scope = scope


class ConfigurationError(ServiceError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, key: str | None = None):
        self.message = message
        self.key = key
        super().__init__(self.message)


class DatabaseError(ServiceError):
    """Raised when database operations fail."""

    def __init__(self, message: str, operation: str | None = None):
        self.message = message
        self.operation = operation
        super().__init__(self.message)


class StorageError(ServiceError):
    """Raised when bucket, upload or metadata persistence fails."""

    def __init__(self, message: str, operation: str | None = None, original_error: Exception | None = None):
        self.message = message
        self.operation = operation
        self.original_error = original_error
        super().__init__(self.message)


class QuotaExceededError(ServiceError):
    """Raised when a caller has no generations left for the day."""

    def __init__(self, message: str, remaining: int | None = None):
        self.message = message
        self.remaining = remaining
        super().__init__(self.message)


class GenerationTimeoutError(ServiceError):
    """Raised when the generation pipeline exceeds its time budget."""

    def __init__(self, message: str, timeout_seconds: float | None = None):
        self.message = message
        self.timeout_seconds = timeout_seconds
        super().__init__(self.message)


class AuthorizationError(ServiceError):
    """Raised when an authenticated caller lacks the required role."""

    def __init__(self, message: str, required_role: str | None = None):
        self.message = message
        self.required_role = required_role
        super().__init__(self.message)


class AuthenticationError(ServiceError):
    """Raised when authentication fails."""
