"""Request model for the audio generation endpoint."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GenerateAudioRequest(BaseModel):
    """Inbound generation payload.

    Lengths and required values are checked by the service so every
    validation failure produces the same 400 response shape.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    text: str = ""
    language: str = ""
    voice: Optional[str] = None
    user_id: Optional[str] = Field(default=None, alias="userId")

    @field_validator("text", "language", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value


__all__ = ["GenerateAudioRequest"]
