from datetime import timedelta

import pytest
from jose import jwt

from core.auth import (
    AuthenticationError,
    authenticate_bearer_token,
    create_auth_token,
    optional_auth_context,
)


# Tests for create_auth_token


def test_create_auth_token_basic(auth_token_secret: str) -> None:
    """Tokens carry the user id in ``sub``."""
    token = create_auth_token("user-123")

    payload = jwt.decode(token, auth_token_secret, algorithms=["HS256"])

    assert payload["sub"] == "user-123"
    assert payload["role"] == "authenticated"
    assert "exp" in payload


def test_create_auth_token_with_email(auth_token_secret: str) -> None:
    token = create_auth_token("user-123", email="test@example.com")

    payload = jwt.decode(token, auth_token_secret, algorithms=["HS256"])

    assert payload["email"] == "test@example.com"


def test_create_auth_token_can_be_validated() -> None:
    token = create_auth_token("user-789", email="user@test.com", expires_delta=timedelta(days=1))

    context = authenticate_bearer_token(authorization=f"Bearer {token}")

    assert context["user_id"] == "user-789"
    assert context["email"] == "user@test.com"


# Tests for authenticate_bearer_token


def test_authenticate_bearer_token_returns_context(auth_token_factory) -> None:
    token = auth_token_factory(user_id="42", email="user@example.com")

    context = authenticate_bearer_token(authorization=f"Bearer {token}")

    assert context["user_id"] == "42"
    assert context["email"] == "user@example.com"
    assert context["token"] == token
    assert context["payload"]["sub"] == "42"


def test_authenticate_bearer_token_rejects_missing_token() -> None:
    with pytest.raises(AuthenticationError) as exc:
        authenticate_bearer_token()

    assert exc.value.reason == "token_missing"
    assert exc.value.code == 401


def test_authenticate_bearer_token_rejects_expired_token(auth_token_factory) -> None:
    expired_token = auth_token_factory(expires_delta=timedelta(seconds=-1))

    with pytest.raises(AuthenticationError) as exc:
        authenticate_bearer_token(authorization=f"Bearer {expired_token}")

    assert exc.value.reason == "token_expired"


def test_authenticate_bearer_token_rejects_invalid_signature() -> None:
    with pytest.raises(AuthenticationError) as exc:
        authenticate_bearer_token(authorization="Bearer invalid-token")

    assert exc.value.reason == "token_invalid"


def test_authenticate_bearer_token_requires_subject(auth_token_secret: str) -> None:
    token = jwt.encode({"email": "nobody@example.com"}, auth_token_secret, algorithm="HS256")

    with pytest.raises(AuthenticationError) as exc:
        authenticate_bearer_token(authorization=f"Bearer {token}")

    assert exc.value.reason == "token_invalid"


def test_optional_auth_context_without_header_is_anonymous() -> None:
    assert optional_auth_context(None) is None
    assert optional_auth_context("Bearer ") is None


def test_optional_auth_context_still_rejects_bad_tokens() -> None:
    with pytest.raises(AuthenticationError):
        optional_auth_context("Bearer not-a-jwt")
