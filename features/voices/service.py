"""Voice catalogue for the generator UI."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict

from config.tts.defaults import DEFAULT_PROVIDER
from config.tts.providers import google as google_config
from config.tts.providers import openai as openai_config
from core.exceptions import ConfigurationError, ProviderError
from core.providers.tts.google import GoogleTTSProvider, VoiceCatalogue

logger = logging.getLogger(__name__)


class VoiceService:
    """Return Google voices grouped by language and gender plus the OpenAI voice list.

    Falls back to built-in Google voice data when no key is configured or the
    catalogue request fails.
    """

    def __init__(self, *, google_provider_factory: Callable[[], GoogleTTSProvider] = GoogleTTSProvider) -> None:
        self._google_provider_factory = google_provider_factory

    async def _google_voices(self) -> tuple[VoiceCatalogue, str]:
        try:
            catalogue = await self._google_provider_factory().list_voices()
        except ConfigurationError:
            logger.debug("Google TTS key not configured, serving fallback voices")
            return google_config.FALLBACK_VOICES, "fallback"
        except ProviderError as exc:
            logger.warning("Google voice catalogue unavailable, serving fallback: %s", exc)
            return google_config.FALLBACK_VOICES, "fallback"
        if not catalogue:
            return google_config.FALLBACK_VOICES, "fallback"
        return catalogue, "google"

    async def list_voices(self) -> Dict[str, Any]:
        catalogue, source = await self._google_voices()
        languages = [
            {"code": code, "name": google_config.LANGUAGE_DISPLAY_NAMES.get(code, code)}
            for code in sorted(catalogue)
        ]
        return {
            "default_provider": DEFAULT_PROVIDER,
            "google": {"source": source, "languages": languages, "voices": catalogue},
            "openai": {
                "default": openai_config.DEFAULT_VOICE,
                "voices": list(openai_config.AVAILABLE_VOICES),
                "genders": dict(openai_config.VOICE_GENDERS),
            },
        }


__all__ = ["VoiceService"]
