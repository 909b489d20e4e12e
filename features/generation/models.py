"""Value objects shared across the generation pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class GenerationState(str, Enum):
    """Lifecycle of one generation request.

    ``ENHANCING`` is skipped for inputs that already read as a full
    description. Any state may move to ``FAILED``.
    """

    RECEIVED = "received"
    AUTH_CHECKED = "auth_checked"
    ENHANCING = "enhancing"
    SYNTHESIZING = "synthesizing"
    PERSISTING = "persisting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class Caller:
    """Authenticated user or anonymous guest session issuing a request."""

    user_id: str | None = None
    session_id: str | None = None
    email: str | None = None

    @property
    def is_guest(self) -> bool:
        return self.user_id is None

    @property
    def owner_id(self) -> str:
        return self.user_id or self.session_id or "anonymous"

    @property
    def label(self) -> str:
        return f"user:{self.user_id}" if self.user_id else f"guest:{self.session_id}"


@dataclass(frozen=True, slots=True)
class PersistedAudio:
    audio_url: str
    record_id: str
    delivery: str
    file_path: str | None = None


@dataclass(frozen=True, slots=True)
class GenerationResult:
    """Terminal outcome handed back to the HTTP layer."""

    success: bool
    audio_url: str | None = None
    text: str | None = None
    id: str | None = None
    error: str | None = None

    @classmethod
    def failed(cls, error: str) -> "GenerationResult":
        return cls(success=False, error=error)

    def to_payload(self) -> Dict[str, Any]:
        if not self.success:
            return {"success": False, "error": self.error}
        return {"success": True, "audioUrl": self.audio_url, "text": self.text, "id": self.id}


__all__ = ["Caller", "GenerationResult", "GenerationState", "PersistedAudio"]
