"""REST routes for a user's audio history."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query

from core.auth import AuthContext, require_auth_context
from core.exceptions import ServiceError
from core.http.errors import error_response
from core.pydantic_schemas import ok as api_ok

from .dependencies import get_audio_file_service
from .service import AudioFileService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/audio-files", tags=["Audio files"])


@router.get("", summary="List the caller's saved audio descriptions")
async def list_audio_files_endpoint(
    limit: int = Query(50, ge=1, le=200),
    auth_context: AuthContext = Depends(require_auth_context),
    service: AudioFileService = Depends(get_audio_file_service),
):
    try:
        items = await service.list_history(auth_context["user_id"], limit=limit)
    except ServiceError as exc:
        logger.error("Failed to list audio history: %s", exc)
        return error_response(exc, "Failed to load audio history")
    return api_ok("Audio history retrieved", data={"items": items, "count": len(items)})


@router.delete("/{audio_id}", summary="Delete one of the caller's audio descriptions")
async def delete_audio_file_endpoint(
    audio_id: str,
    auth_context: AuthContext = Depends(require_auth_context),
    service: AudioFileService = Depends(get_audio_file_service),
):
    try:
        await service.delete(audio_id, owner_id=auth_context["user_id"])
    except ServiceError as exc:
        logger.warning("Failed to delete audio file %s: %s", audio_id, exc)
        return error_response(exc, "Failed to delete audio file")
    return api_ok("Audio file deleted", data={"id": audio_id})


__all__ = ["router"]
