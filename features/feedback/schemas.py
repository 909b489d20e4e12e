"""Request models for feedback submission."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class FeedbackRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=5000)
    email: Optional[str] = Field(default=None, max_length=255)
    rating: Optional[int] = Field(default=None, ge=1, le=5)


__all__ = ["FeedbackRequest"]
