"""Administrative endpoints for settings and audio records."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query

from core.auth import AuthContext
from core.exceptions import ServiceError
from core.http.errors import error_response
from core.pydantic_schemas import ok as api_ok, page_meta
from features.audio_files.dependencies import get_audio_file_service
from features.audio_files.service import AudioFileService
from features.profiles.dependencies import require_admin

from .dependencies import get_admin_service
from .schemas import UnlimitedGenerationsUpdate
from .service import AdminService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("/settings/unlimited-generations")
async def get_unlimited_generations(service: AdminService = Depends(get_admin_service)) -> Any:
    try:
        enabled = await service.get_unlimited_generations()
    except ServiceError as exc:
        logger.error("Failed to read unlimited generations flag: %s", exc)
        return error_response(exc, "Failed to read settings")
    return api_ok("Settings retrieved", data={"enabled": enabled})


@router.put("/settings/unlimited-generations")
async def update_unlimited_generations(
    payload: UnlimitedGenerationsUpdate,
    auth_context: AuthContext = Depends(require_admin),
    service: AdminService = Depends(get_admin_service),
) -> Any:
    """Toggle the override that lets every caller generate without quota."""

    try:
        enabled = await service.set_unlimited_generations(payload.enabled, changed_by=auth_context["user_id"])
    except ServiceError as exc:
        logger.error("Failed to update unlimited generations flag: %s", exc)
        return error_response(exc, "Failed to update settings")
    return api_ok("Settings updated", data={"enabled": enabled})


@router.get("/audio-files")
async def list_all_audio_files(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    service: AudioFileService = Depends(get_audio_file_service),
) -> Any:
    try:
        items = await service.list_all(limit=limit, offset=offset)
    except ServiceError as exc:
        logger.error("Failed to list audio files: %s", exc)
        return error_response(exc, "Failed to list audio files")
    return api_ok(
        "Audio files retrieved",
        data={"items": items},
        meta=page_meta(limit=limit, offset=offset, returned=len(items)),
    )


@router.delete("/audio-files/{audio_id}")
async def delete_any_audio_file(
    audio_id: str,
    auth_context: AuthContext = Depends(require_admin),
    service: AudioFileService = Depends(get_audio_file_service),
) -> Any:
    try:
        await service.delete(audio_id)
    except ServiceError as exc:
        logger.warning("Admin delete of %s failed: %s", audio_id, exc)
        return error_response(exc, "Failed to delete audio file")
    logger.info("Audio file %s deleted by admin %s", audio_id, auth_context["user_id"])
    return api_ok("Audio file deleted", data={"id": audio_id})


__all__ = ["router"]
