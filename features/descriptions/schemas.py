"""Request models for the descriptions endpoint."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class DescriptionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_name: str = Field(..., min_length=1, max_length=200, alias="productName")
    language: str = Field("en-US", min_length=2, max_length=16)
    voice_name: Optional[str] = Field(default=None, alias="voiceName")


__all__ = ["DescriptionRequest"]
