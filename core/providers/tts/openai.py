"""OpenAI text-to-speech provider implementation."""

from __future__ import annotations

import logging
from typing import Any, Mapping

import openai

from config.tts.providers import openai as openai_config
from core.clients.ai import get_openai_async_client
from core.exceptions import SynthesisError
from core.providers.tts_base import BaseTTSProvider, TTSRequest, TTSResult

logger = logging.getLogger(__name__)


class OpenAITTSProvider(BaseTTSProvider):
    """Adapter around the OpenAI text-to-speech API."""

    name = "openai"

    def __init__(self, client: Any | None = None) -> None:
        self._client = client or get_openai_async_client()
        self._default_voice = openai_config.DEFAULT_VOICE
        self._default_format = openai_config.DEFAULT_AUDIO_FORMAT
        self._last_settings: dict[str, Any] = {}

    def configure(self, settings: Mapping[str, Any]) -> None:  # pragma: no cover - trivial
        self._last_settings = dict(settings)

    def available_voices(self) -> list[str]:
        return list(openai_config.AVAILABLE_VOICES)

    async def generate(self, request: TTSRequest) -> TTSResult:
        if not request.text or not request.text.strip():
            raise SynthesisError("TTS request text cannot be empty", provider=self.name)

        model = request.model or self._last_settings.get("model") or openai_config.DEFAULT_MODEL
        voice = request.voice or self._last_settings.get("voice") or self._default_voice
        audio_format = request.format or self._default_format
        speed = openai_config.clamp_speed(
            float(request.speed or self._last_settings.get("speed") or openai_config.DEFAULT_SPEED)
        )

        # OpenAI voices are language independent; language_code only travels in metadata.
        payload: dict[str, Any] = {
            "model": model,
            "voice": voice,
            "input": request.text,
            "response_format": audio_format,
            "speed": speed,
        }

        logger.info(
            "Requesting OpenAI TTS generation (model=%s voice=%s format=%s)",
            model,
            voice,
            audio_format,
        )

        try:
            response = await self._client.audio.speech.create(**payload)
        except openai.APIStatusError as exc:
            raise SynthesisError(
                f"OpenAI TTS request failed with status {exc.status_code}",
                provider=self.name,
                http_status=exc.status_code,
                original_error=exc,
            ) from exc
        except openai.OpenAIError as exc:
            raise SynthesisError(
                "OpenAI TTS request failed", provider=self.name, original_error=exc
            ) from exc

        audio_bytes = response.content
        if not audio_bytes:
            raise SynthesisError("OpenAI TTS returned no audio content", provider=self.name)

        return TTSResult(
            audio_bytes=audio_bytes,
            provider=self.name,
            model=model,
            format=audio_format,
            voice=voice,
            metadata={
                "language_code": request.language_code,
                "speed": speed,
            },
        )


__all__ = ["OpenAITTSProvider"]
