"""Pydantic models for audio history endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AudioFileResponse(BaseModel):
    """Serialised audio record as returned to history and admin clients."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str | None = None
    session_id: str | None = None
    title: str
    description: str
    language: str
    voice_name: str
    audio_url: str
    file_path: str | None = None
    is_temporary: bool = False
    created_at: datetime | None = None


class HistoryQuery(BaseModel):
    limit: int = Field(50, ge=1, le=200, description="Maximum number of records to return")


__all__ = ["AudioFileResponse", "HistoryQuery"]
