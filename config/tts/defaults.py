"""Deployment-wide speech settings."""

from __future__ import annotations

import os

from .providers import openai

# "openai" or "google"; requests naming a voice may still switch backend
DEFAULT_PROVIDER = os.getenv("TTS_PROVIDER", "openai").strip().lower() or "openai"

# Both backends are asked for MP3 so stored files share one content type
DEFAULT_AUDIO_FORMAT = openai.DEFAULT_AUDIO_FORMAT

__all__ = ["DEFAULT_AUDIO_FORMAT", "DEFAULT_PROVIDER"]
