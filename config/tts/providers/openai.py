"""OpenAI speech endpoint settings."""

from __future__ import annotations

import os
from typing import Dict, List

DEFAULT_MODEL = os.getenv("OPENAI_TTS_MODEL", "tts-1")
DEFAULT_AUDIO_FORMAT = "mp3"

# Voice id -> speaker gender shown in the voice picker
VOICE_GENDERS: Dict[str, str] = {
    "alloy": "neutral",
    "echo": "male",
    "fable": "female",
    "onyx": "male",
    "nova": "female",
    "shimmer": "female",
}
DEFAULT_VOICE = "alloy"
AVAILABLE_VOICES: List[str] = list(VOICE_GENDERS)

# Narration runs slightly slower than the API default of 1.0
DEFAULT_SPEED = float(os.getenv("OPENAI_TTS_SPEED", "0.95"))
MIN_SPEED = 0.25
MAX_SPEED = 4.0


def clamp_speed(value: float) -> float:
    return max(MIN_SPEED, min(MAX_SPEED, value))


__all__ = [
    "AVAILABLE_VOICES",
    "DEFAULT_AUDIO_FORMAT",
    "DEFAULT_MODEL",
    "DEFAULT_SPEED",
    "DEFAULT_VOICE",
    "MAX_SPEED",
    "MIN_SPEED",
    "VOICE_GENDERS",
    "clamp_speed",
]
