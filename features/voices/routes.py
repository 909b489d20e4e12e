"""REST route listing selectable voices."""

from __future__ import annotations

from functools import lru_cache

from fastapi import APIRouter, Depends

from core.pydantic_schemas import ok as api_ok

from .service import VoiceService

router = APIRouter(prefix="/api/v1/voices", tags=["Voices"])


@lru_cache(maxsize=1)
def get_voice_service() -> VoiceService:
    return VoiceService()


@router.get("", summary="List available text-to-speech voices")
async def list_voices_endpoint(service: VoiceService = Depends(get_voice_service)):
    return api_ok("Voices retrieved", data=await service.list_voices())


__all__ = ["get_voice_service", "router"]
