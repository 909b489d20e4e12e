"""Google Cloud text-to-speech configuration."""

from __future__ import annotations

import os
from typing import Dict, List

SYNTHESIZE_URL = os.getenv(
    "GOOGLE_TTS_SYNTHESIZE_URL", "https://texttospeech.googleapis.com/v1/text:synthesize"
)
VOICES_URL = os.getenv("GOOGLE_TTS_VOICES_URL", "https://texttospeech.googleapis.com/v1/voices")
REQUEST_TIMEOUT_SECONDS = float(os.getenv("GOOGLE_TTS_TIMEOUT", "30"))

DEFAULT_LANGUAGE = "en-US"
DEFAULT_VOICE = "en-US-Standard-C"
DEFAULT_AUDIO_ENCODING = "MP3"
DEFAULT_AUDIO_FORMAT = "mp3"

LANGUAGE_DISPLAY_NAMES: Dict[str, str] = {
    "en-US": "English (US)",
    "en-GB": "English (UK)",
    "es-ES": "Spanish (Spain)",
    "fr-FR": "French (France)",
    "de-DE": "German (Germany)",
}

# Served when the voices endpoint is unreachable or no key is configured.
FALLBACK_VOICES: Dict[str, Dict[str, List[Dict[str, str]]]] = {
    "en-US": {
        "MALE": [
            {"name": "en-US-Standard-A", "ssml_gender": "MALE"},
            {"name": "en-US-Standard-B", "ssml_gender": "MALE"},
        ],
        "FEMALE": [
            {"name": "en-US-Standard-C", "ssml_gender": "FEMALE"},
            {"name": "en-US-Standard-E", "ssml_gender": "FEMALE"},
        ],
    },
    "en-GB": {
        "MALE": [{"name": "en-GB-Standard-B", "ssml_gender": "MALE"}],
        "FEMALE": [{"name": "en-GB-Standard-A", "ssml_gender": "FEMALE"}],
    },
    "es-ES": {
        "MALE": [{"name": "es-ES-Standard-B", "ssml_gender": "MALE"}],
        "FEMALE": [{"name": "es-ES-Standard-A", "ssml_gender": "FEMALE"}],
    },
    "fr-FR": {
        "MALE": [{"name": "fr-FR-Standard-B", "ssml_gender": "MALE"}],
        "FEMALE": [{"name": "fr-FR-Standard-A", "ssml_gender": "FEMALE"}],
    },
    "de-DE": {
        "MALE": [{"name": "de-DE-Standard-B", "ssml_gender": "MALE"}],
        "FEMALE": [{"name": "de-DE-Standard-A", "ssml_gender": "FEMALE"}],
    },
}

__all__ = [
    "SYNTHESIZE_URL",
    "VOICES_URL",
    "REQUEST_TIMEOUT_SECONDS",
    "DEFAULT_LANGUAGE",
    "DEFAULT_VOICE",
    "DEFAULT_AUDIO_ENCODING",
    "DEFAULT_AUDIO_FORMAT",
    "LANGUAGE_DISPLAY_NAMES",
    "FALLBACK_VOICES",
]
