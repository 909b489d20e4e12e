"""HTTP entry point for audio description generation.

Responses use the flat ``{success, audioUrl, text, id}`` /
``{success: false, error}`` contract instead of the API envelope.
"""

from __future__ import annotations

import logging
import uuid
from typing import Annotated, Any, Dict

from fastapi import APIRouter, Body, Depends, Header, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from starlette import status

from core.auth import AuthContext, AuthenticationError, optional_auth_context
from core.exceptions import ServiceError
from core.http.errors import status_code_for
from features.profiles.dependencies import get_guest_session_id

from .dependencies import get_generation_service
from .models import Caller, GenerationResult
from .schemas import GenerateAudioRequest
from .service import GenerationRequest, GenerationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Generation"])


GUEST_SESSION_HEADER = "X-Guest-Session-Id"


def _respond(code: int, result: GenerationResult, caller: Caller | None = None) -> JSONResponse:
    response = JSONResponse(status_code=code, content=result.to_payload())
    # Echoed so the guest can claim these records after signing in
    if caller is not None and caller.is_guest and caller.session_id:
        response.headers[GUEST_SESSION_HEADER] = caller.session_id
    return response


def _failure(code: int, message: str, caller: Caller | None = None) -> JSONResponse:
    return _respond(code, GenerationResult.failed(message), caller)


def resolve_caller(auth_context: AuthContext | None, guest_session_id: str | None) -> Caller:
    """Build the caller identity; guests without a session header get a fresh id."""

    if auth_context:
        return Caller(user_id=auth_context["user_id"], email=auth_context.get("email"))
    return Caller(session_id=guest_session_id or str(uuid.uuid4()))


@router.post("/generate-audio", summary="Generate an audio description for product text")
async def generate_audio_endpoint(
    request: Request,
    body: Dict[str, Any] = Body(...),
    authorization: Annotated[str | None, Header(alias="Authorization")] = None,
    guest_session_id: str | None = Depends(get_guest_session_id),
    service: GenerationService = Depends(get_generation_service),
) -> JSONResponse:
    try:
        payload = GenerateAudioRequest.model_validate(body)
    except PydanticValidationError as exc:
        logger.warning("Malformed generation payload: %s", exc.errors())
        return _failure(status.HTTP_400_BAD_REQUEST, "Invalid request payload")

    caller: Caller | None = None
    try:
        caller = resolve_caller(optional_auth_context(authorization), guest_session_id)
        result = await service.generate(
            GenerationRequest(
                text=payload.text,
                language_code=payload.language,
                voice_id=payload.voice,
                claimed_user_id=payload.user_id,
            ),
            caller=caller,
            client_ip=request.client.host if request.client else None,
        )
    except AuthenticationError as exc:
        logger.info("Generation rejected (%s): %s", exc.reason, exc.message)
        return _failure(exc.code, exc.message)
    except ServiceError as exc:
        return _failure(status_code_for(exc), str(exc), caller)

    return _respond(status.HTTP_200_OK, result, caller)


__all__ = ["GUEST_SESSION_HEADER", "resolve_caller", "router"]
