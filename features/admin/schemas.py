"""Request models for administrative endpoints."""

from __future__ import annotations

from pydantic import BaseModel


class UnlimitedGenerationsUpdate(BaseModel):
    enabled: bool


__all__ = ["UnlimitedGenerationsUpdate"]
