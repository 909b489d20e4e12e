"""Name -> class registry for speech synthesis backends."""

from __future__ import annotations

from typing import Dict, Type

from core.providers.tts_base import BaseTTSProvider

_tts_providers: Dict[str, Type[BaseTTSProvider]] = {}


def register_tts_provider(name: str, provider_class: Type[BaseTTSProvider]) -> None:
    """Register a text-to-speech provider implementation."""
    _tts_providers[name] = provider_class


def registered_tts_providers() -> list[str]:
    """Return the names of all registered text-to-speech providers."""
    return sorted(_tts_providers)


__all__ = ["register_tts_provider", "registered_tts_providers"]
