"""Supabase access-token verification.

Supabase signs session tokens with the project's HS256 JWT secret and puts the
user id in ``sub``. ``MY_AUTH_TOKEN`` is accepted as the secret for local runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Annotated, Any, Dict, TypedDict

from fastapi import Header
from jose import ExpiredSignatureError, JWTError, jwt
from starlette import status

from core.utils.env import get_env

_ALGORITHM = "HS256"


class AuthContext(TypedDict, total=False):
    user_id: str
    email: str | None
    role: str | None
    token: str
    payload: Dict[str, Any]


@dataclass(slots=True)
class AuthenticationError(Exception):
    """401 raised by the auth dependencies; ``reason`` is machine readable."""

    message: str
    reason: str
    code: int = status.HTTP_401_UNAUTHORIZED

    def __str__(self) -> str:  # pragma: no cover
        return self.message


@lru_cache(maxsize=1)
def _signing_secret() -> str:
    # ConfigurationError when neither variable is set
    return get_env("SUPABASE_JWT_SECRET") or get_env("MY_AUTH_TOKEN", required=True)  # type: ignore[return-value]


def create_auth_token(
    user_id: str,
    email: str | None = None,
    expires_delta: timedelta = timedelta(hours=1),
) -> str:
    """Mint a token shaped like a Supabase session token (used by tests and scripts)."""

    claims: Dict[str, Any] = {
        "sub": str(user_id),
        "email": email,
        "role": "authenticated",
        "exp": datetime.now(timezone.utc) + expires_delta,
    }
    return jwt.encode(claims, _signing_secret(), algorithm=_ALGORITHM)


def _bearer_token(authorization: str | None) -> str | None:
    scheme, _, token = (authorization or "").strip().partition(" ")
    if not token:
        # A bare token without the scheme is tolerated
        return None if scheme.lower() in {"", "bearer"} else scheme
    return token.strip() or None


def authenticate_bearer_token(*, authorization: str | None = None) -> AuthContext:
    token = _bearer_token(authorization)
    if not token:
        raise AuthenticationError("Missing authentication token", reason="token_missing")

    audience = get_env("SUPABASE_JWT_AUDIENCE")
    try:
        claims: Dict[str, Any] = jwt.decode(
            token,
            _signing_secret(),
            algorithms=[_ALGORITHM],
            audience=audience,
            options={"verify_aud": bool(audience)},
        )
    except ExpiredSignatureError as exc:
        raise AuthenticationError("Authentication token has expired", reason="token_expired") from exc
    except JWTError as exc:
        raise AuthenticationError("Invalid authentication token", reason="token_invalid") from exc

    user_id = str(claims.get("sub") or "").strip()
    if not user_id:
        raise AuthenticationError("Authentication token missing user id", reason="token_invalid")

    return AuthContext(
        user_id=user_id,
        email=claims.get("email"),
        role=claims.get("role"),
        token=token,
        payload=claims,
    )


def require_auth_context(
    authorization: Annotated[str | None, Header(alias="Authorization")] = None,
) -> AuthContext:
    return authenticate_bearer_token(authorization=authorization)


def optional_auth_context(
    authorization: Annotated[str | None, Header(alias="Authorization")] = None,
) -> AuthContext | None:
    """Anonymous callers get ``None``; a malformed or expired token is still a 401."""

    if not _bearer_token(authorization):
        return None
    return authenticate_bearer_token(authorization=authorization)


__all__ = [
    "AuthContext",
    "AuthenticationError",
    "authenticate_bearer_token",
    "create_auth_token",
    "optional_auth_context",
    "require_auth_context",
]
