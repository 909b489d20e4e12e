"""REST route for submitting feedback."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import AuthContext, optional_auth_context
from core.exceptions import ServiceError
from core.http.errors import error_response
from core.pydantic_schemas import ok as api_ok
from infrastructure.db.sessions import get_main_session

from .repository import FeedbackRepository
from .schemas import FeedbackRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/feedback", tags=["Feedback"])


@router.post("", summary="Submit product feedback")
async def submit_feedback_endpoint(
    payload: FeedbackRequest,
    auth_context: AuthContext | None = Depends(optional_auth_context),
    session: AsyncSession = Depends(get_main_session),
):
    user_id = auth_context["user_id"] if auth_context else None
    email = payload.email or (auth_context.get("email") if auth_context else None)
    try:
        entity = (
            await FeedbackRepository(session).create(
                message=payload.message.strip(), email=email, rating=payload.rating, user_id=user_id
            )
        ).unwrap()
    except ServiceError as exc:
        return error_response(exc, "Failed to submit feedback")

    logger.info("Feedback %s received (user=%s)", entity.id, user_id or "anonymous")
    return api_ok("Feedback received", data={"id": entity.id})


__all__ = ["router"]
