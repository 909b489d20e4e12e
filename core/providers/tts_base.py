"""Base classes and schemas for text-to-speech providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Mapping, MutableMapping


@dataclass(slots=True)
class TTSRequest:
    """Container describing a text-to-speech generation request."""

    text: str
    language_code: str
    voice: str | None = None
    model: str | None = None
    format: str = "mp3"
    speed: float | None = None
    metadata: MutableMapping[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class TTSResult:
    """Normalised text-to-speech response returned by providers."""

    audio_bytes: bytes
    provider: str
    format: str
    voice: str | None = None
    model: str | None = None
    metadata: Mapping[str, Any] | None = None

    @property
    def content_type(self) -> str:
        return f"audio/{self.format}"


class BaseTTSProvider(ABC):
    """Base interface for text-to-speech providers.

    Implementations raise :class:`core.exceptions.SynthesisError` when the
    upstream call returns a non-success status or no audio payload.
    """

    name: str = "tts"

    def configure(self, settings: Mapping[str, Any]) -> None:
        """Apply provider specific configuration settings."""

    @abstractmethod
    async def generate(self, request: TTSRequest) -> TTSResult:
        """Return generated audio for the supplied text request."""

    def available_voices(self) -> list[str]:
        """Return voice identifiers this provider accepts, empty when unrestricted."""

        return []


__all__ = ["TTSRequest", "TTSResult", "BaseTTSProvider"]
