"""Dependency helpers for the profiles feature."""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header

from core.auth import AuthContext, require_auth_context
from core.exceptions import AuthorizationError
from features.audio_files.dependencies import get_audio_file_service

from .service import ProfileService


@lru_cache(maxsize=1)
def _profile_service_singleton() -> ProfileService:
    return ProfileService(audio_file_service=get_audio_file_service())


def get_profile_service() -> ProfileService:
    """Return a cached instance of :class:`ProfileService`."""

    return _profile_service_singleton()


def get_guest_session_id(
    guest_session_id: Annotated[str | None, Header(alias="X-Guest-Session-Id")] = None,
) -> str | None:
    value = (guest_session_id or "").strip()
    return value[:64] or None


async def require_admin(
    auth_context: AuthContext = Depends(require_auth_context),
    service: ProfileService = Depends(get_profile_service),
) -> AuthContext:
    """FastAPI dependency that only lets administrators through (403 otherwise)."""

    if not await service.is_admin(auth_context["user_id"]):
        raise AuthorizationError("Administrator role required", required_role="admin")
    return auth_context


__all__ = ["get_guest_session_id", "get_profile_service", "require_admin"]
