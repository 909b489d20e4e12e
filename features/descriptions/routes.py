"""REST route for standalone product description generation."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request

from config.generation import LLM_RATE_LIMIT_PER_MINUTE, RATE_LIMITED_MESSAGE, RATE_LIMIT_WINDOW_SECONDS
from core.auth import AuthContext, optional_auth_context
from core.exceptions import RateLimitError, ServiceError
from core.http.errors import error_response
from core.observability import record_rate_limit_hit
from core.pydantic_schemas import ok as api_ok
from core.rate_limiting import RateLimiter, get_rate_limiter, rate_limit_key

from .dependencies import get_description_service
from .schemas import DescriptionRequest
from .service import DescriptionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/descriptions", tags=["Descriptions"])


@router.post("", summary="Write a short spoken description for a product")
async def generate_description_endpoint(
    payload: DescriptionRequest,
    request: Request,
    auth_context: AuthContext | None = Depends(optional_auth_context),
    service: DescriptionService = Depends(get_description_service),
    limiter: RateLimiter = Depends(get_rate_limiter),
):
    client_ip = request.client.host if request.client else None
    if not limiter.check(rate_limit_key("llm", client_ip), RATE_LIMIT_WINDOW_SECONDS, LLM_RATE_LIMIT_PER_MINUTE):
        record_rate_limit_hit(scope="llm", client_ip=client_ip)
        exc = RateLimitError(RATE_LIMITED_MESSAGE, retry_after=int(RATE_LIMIT_WINDOW_SECONDS), scope="llm")
        return error_response(exc, RATE_LIMITED_MESSAGE)

    try:
        result = await service.generate(payload.product_name, payload.language, voice_name=payload.voice_name)
    except ServiceError as exc:
        logger.warning("Description request rejected: %s", exc)
        return error_response(exc, "Failed to generate description")

    logger.info(
        "Generated product description (fallback=%s, user=%s)",
        result["fallback"],
        auth_context["user_id"] if auth_context else "guest",
    )
    return api_ok("Description generated", data=result)


__all__ = ["router"]
