"""Envelope returned by the history, profile, voice and admin endpoints.

``POST /api/v1/generate-audio`` keeps its own flat contract (see
``features.generation.schemas``); everything else answers with
``{code, success, message, data, meta}``.
"""

from __future__ import annotations

from typing import Any, Dict, Generic, Mapping, Optional, TypeVar, Union

from pydantic import BaseModel, Field

T = TypeVar("T")

Message = Union[str, Mapping[str, Any]]
Payload = Dict[str, Any]


class ApiResponse(BaseModel, Generic[T]):
    code: int = Field(..., description="HTTP status mirrored into the body")
    success: bool
    message: Message
    data: Optional[T] = None
    meta: Optional[Dict[str, Any]] = Field(default=None, description="Pagination or request metadata")


def api_response(*, code: int = 200, message: Message, data: Any = None, meta: Payload | None = None) -> Payload:
    """Build the envelope; ``success`` is derived from ``code``."""

    return ApiResponse[Any](code=code, success=code < 400, message=message, data=data, meta=meta).model_dump()


def ok(message: str, data: Any = None, meta: Payload | None = None) -> Payload:
    return api_response(code=200, message=message, data=data, meta=meta)


def error(code: int, message: str, data: Any = None, meta: Payload | None = None) -> Payload:
    if code < 400:
        raise ValueError(f"Error responses must carry a 4xx/5xx code, got {code}")
    return api_response(code=code, message=message, data=data, meta=meta)


def page_meta(*, limit: int, offset: int, returned: int) -> Payload:
    # A full page means there may be another one
    return {"limit": limit, "offset": offset, "returned": returned, "has_more": returned >= limit}


__all__ = ["ApiResponse", "api_response", "error", "ok", "page_meta"]
