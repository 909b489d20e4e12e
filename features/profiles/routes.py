"""REST routes for session start and profile usage."""

from __future__ import annotations

import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends

from core.auth import AuthContext, require_auth_context
from core.exceptions import ServiceError
from core.http.errors import error_response
from core.pydantic_schemas import ok as api_ok

from .dependencies import get_guest_session_id, get_profile_service
from .service import ProfileService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Profile"])


@router.post("/session/start", summary="Initialise the caller's session after login")
async def start_session_endpoint(
    auth_context: AuthContext = Depends(require_auth_context),
    guest_session_id: str | None = Depends(get_guest_session_id),
    service: ProfileService = Depends(get_profile_service),
):
    """Reconcile admin role, adopt guest files and return plan details."""

    try:
        result = await service.start_session(
            user_id=auth_context["user_id"],
            email=auth_context.get("email"),
            guest_session_id=guest_session_id,
        )
    except ServiceError as exc:
        logger.error("Session start failed for %s: %s", auth_context["user_id"], exc)
        return error_response(exc, "Failed to start session")
    return api_ok("Session started", data=asdict(result))


@router.get("/profile/stats", summary="Return the caller's plan and generation usage")
async def profile_stats_endpoint(
    auth_context: AuthContext = Depends(require_auth_context),
    service: ProfileService = Depends(get_profile_service),
):
    try:
        stats = await service.get_stats(auth_context["user_id"], email=auth_context.get("email"))
    except ServiceError as exc:
        logger.error("Stats lookup failed for %s: %s", auth_context["user_id"], exc)
        return error_response(exc, "Failed to load usage statistics")
    return api_ok("Usage statistics retrieved", data=stats)


__all__ = ["router"]
