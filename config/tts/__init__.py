"""Text-to-speech settings: deployment default plus per-provider modules."""

from __future__ import annotations

from .defaults import DEFAULT_AUDIO_FORMAT, DEFAULT_PROVIDER
from .providers import google, openai

__all__ = ["DEFAULT_AUDIO_FORMAT", "DEFAULT_PROVIDER", "google", "openai"]
