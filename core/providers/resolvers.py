"""Pick a speech backend for a generation request."""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping

from config.tts.defaults import DEFAULT_PROVIDER
from config.tts.providers import openai as openai_config
from core.exceptions import ConfigurationError
from core.providers.registries import _tts_providers
from core.providers.tts_base import BaseTTSProvider

logger = logging.getLogger(__name__)

# Google Cloud voice ids: en-US-Standard-C, de-DE-Neural2-B, ...
_GOOGLE_VOICE_RE = re.compile(r"^[a-z]{2,3}-[A-Z]{2}-\w+")


def provider_for_voice(voice: str) -> str | None:
    if not voice:
        return None
    if voice in openai_config.VOICE_GENDERS:
        return "openai"
    if _GOOGLE_VOICE_RE.match(voice):
        return "google"
    return None


def get_tts_provider(settings: Mapping[str, Any] | None = None) -> BaseTTSProvider:
    """Instantiate and configure the backend named by ``settings["tts"]``.

    An explicit ``provider`` wins; otherwise the voice id decides, and
    ``TTS_PROVIDER`` covers everything else.
    """

    tts_settings = (settings or {}).get("tts") or {}
    if not isinstance(tts_settings, Mapping):
        tts_settings = {}

    name = str(tts_settings.get("provider") or "").strip().lower()
    if not name:
        name = provider_for_voice(str(tts_settings.get("voice") or "").strip()) or DEFAULT_PROVIDER

    provider_class = _tts_providers.get(name)
    if provider_class is None:
        raise ConfigurationError(
            f"Unknown TTS provider '{name}' (registered: {', '.join(sorted(_tts_providers))})",
            key="tts.provider",
        )

    provider = provider_class()
    provider.configure(dict(tts_settings))
    logger.debug("Using %s for speech synthesis", provider_class.__name__)
    return provider


__all__ = ["get_tts_provider", "provider_for_voice"]
