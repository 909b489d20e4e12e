"""Speech synthesis step of the generation pipeline."""

from __future__ import annotations

import logging
from typing import Callable, Dict

from config.tts.providers import openai as openai_config
from core.exceptions import SynthesisError
from core.providers.resolvers import get_tts_provider
from core.providers.tts_base import BaseTTSProvider, TTSRequest, TTSResult

logger = logging.getLogger(__name__)

ProviderResolver = Callable[[Dict[str, object]], BaseTTSProvider]


def provider_settings_for_voice(voice_id: str | None) -> Dict[str, object]:
    """Build resolver settings; OpenAI voice names pin the OpenAI provider."""

    voice = (voice_id or "").strip()
    tts: Dict[str, object] = {}
    if voice:
        tts["voice"] = voice
        if voice.lower() in openai_config.AVAILABLE_VOICES:
            tts["provider"] = "openai"
            tts["voice"] = voice.lower()
    return {"tts": tts}


class SpeechSynthesizer:
    """Turn text into audio bytes with exactly one TTS backend."""

    def __init__(self, *, provider_resolver: ProviderResolver = get_tts_provider) -> None:
        self._provider_resolver = provider_resolver

    async def synthesize(self, text: str, language_code: str, voice_id: str | None) -> TTSResult:
        settings = provider_settings_for_voice(voice_id)
        provider = self._provider_resolver(settings)
        voice = settings["tts"].get("voice")  # type: ignore[union-attr]

        logger.info(
            "Synthesizing %s characters with %s (language=%s voice=%s)",
            len(text),
            provider.name,
            language_code,
            voice or "default",
        )
        result = await provider.generate(
            TTSRequest(text=text, language_code=language_code, voice=voice or None)  # type: ignore[arg-type]
        )
        if not result.audio_bytes:
            raise SynthesisError(f"{provider.name} returned no audio", provider=provider.name)
        return result


__all__ = ["SpeechSynthesizer", "provider_settings_for_voice"]
