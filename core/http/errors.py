"""Utilities for formatting structured HTTP error responses."""

from __future__ import annotations

from typing import Any, Dict

from fastapi.responses import JSONResponse
from starlette import status

from core.exceptions import (
    AuthorizationError,
    ConfigurationError,
    NotFoundError,
    ProviderError,
    QuotaExceededError,
    RateLimitError,
    ServiceError,
    ValidationError,
)
from core.pydantic_schemas import error as api_error


def _build_error_payload(
    *,
    error: str,
    message: str,
    context: Dict[str, Any] | None = None,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"error": error, "message": message}
    if context:
        payload["context"] = context
    return payload


def format_validation_error(exc: ValidationError) -> Dict[str, Any]:
    """Return a standard payload for :class:`ValidationError`."""

    context = {"field": exc.field} if getattr(exc, "field", None) else None
    return _build_error_payload(
        error="validation_error",
        message=str(exc),
        context=context,
    )


def format_configuration_error(exc: ConfigurationError) -> Dict[str, Any]:
    """Return a standard payload for :class:`ConfigurationError`."""

    context = {"key": exc.key} if getattr(exc, "key", None) else None
    return _build_error_payload(
        error="configuration_error",
        message=str(exc),
        context=context,
    )


def format_provider_error(exc: ProviderError) -> Dict[str, Any]:
    """Return a standard payload for :class:`ProviderError`."""

    context = {
        key: value
        for key, value in {
            "provider": getattr(exc, "provider", None),
            "http_status": getattr(exc, "http_status", None),
        }.items()
        if value
    }

    return _build_error_payload(
        error="provider_error",
        message=str(exc),
        context=context or None,
    )


def format_service_error(exc: ServiceError) -> Dict[str, Any]:
    """Return a standard payload for generic service errors."""

    return _build_error_payload(
        error="service_error",
        message=str(exc),
    )


def status_code_for(exc: Exception) -> int:
    """Map a service exception onto the HTTP status code clients receive."""

    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, (AuthorizationError, QuotaExceededError)):
        return status.HTTP_403_FORBIDDEN
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, RateLimitError):
        return status.HTTP_429_TOO_MANY_REQUESTS
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def format_error(exc: ServiceError) -> Dict[str, Any]:
    """Pick the payload formatter matching ``exc``."""

    if isinstance(exc, ValidationError):
        return format_validation_error(exc)
    if isinstance(exc, ConfigurationError):
        return format_configuration_error(exc)
    if isinstance(exc, ProviderError):
        return format_provider_error(exc)
    return format_service_error(exc)


def error_response(exc: ServiceError, message: str) -> JSONResponse:
    """Return an error envelope for ``exc`` with the mapped status code."""

    code = status_code_for(exc)
    payload = api_error(code=code, message=message, data=format_error(exc))
    return JSONResponse(status_code=code, content=payload)


__all__ = [
    "error_response",
    "format_configuration_error",
    "format_error",
    "format_provider_error",
    "format_service_error",
    "format_validation_error",
    "status_code_for",
]
