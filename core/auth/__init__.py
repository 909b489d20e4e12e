"""Supabase JWT verification and the FastAPI dependencies built on it."""

from .jwt import (
    AuthContext,
    AuthenticationError,
    authenticate_bearer_token,
    create_auth_token,
    optional_auth_context,
    require_auth_context,
)

__all__ = [
    "AuthContext",
    "AuthenticationError",
    "authenticate_bearer_token",
    "create_auth_token",
    "optional_auth_context",
    "require_auth_context",
]
