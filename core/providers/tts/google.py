"""Google Cloud text-to-speech provider implementation (REST API)."""

from __future__ import annotations

import base64
import binascii
import logging
from collections import defaultdict
from typing import Any, Dict, List

import httpx

from config.api_keys import GOOGLE_TTS_API_KEY
from config.tts.providers import google as google_config
from core.clients.ai import get_http_client
from core.exceptions import ConfigurationError, ProviderError, SynthesisError
from core.providers.tts_base import BaseTTSProvider, TTSRequest, TTSResult

logger = logging.getLogger(__name__)

VoiceCatalogue = Dict[str, Dict[str, List[Dict[str, str]]]]


def group_voices(voices: List[Dict[str, Any]]) -> VoiceCatalogue:
    """Group raw ``voices`` entries by language code and then by SSML gender."""

    grouped: Dict[str, Dict[str, List[Dict[str, str]]]] = defaultdict(
        lambda: {"MALE": [], "FEMALE": []}
    )
    for voice in voices:
        gender = str(voice.get("ssmlGender", "")).upper()
        if gender not in ("MALE", "FEMALE"):
            continue
        for language_code in voice.get("languageCodes", []):
            grouped[language_code][gender].append(
                {"name": voice.get("name", ""), "ssml_gender": gender}
            )
    return dict(grouped)


class GoogleTTSProvider(BaseTTSProvider):
    """Adapter around the Google Cloud ``text:synthesize`` endpoint."""

    name = "google"

    def __init__(self, *, api_key: str | None = None, http_client: httpx.AsyncClient | None = None) -> None:
        self._api_key = api_key if api_key is not None else GOOGLE_TTS_API_KEY
        self._http_client = http_client

    def _client(self) -> httpx.AsyncClient:
        return self._http_client or get_http_client()

    def _require_key(self) -> str:
        if not self._api_key:
            raise ConfigurationError("GOOGLE_TTS_API_KEY is not configured", key="GOOGLE_TTS_API_KEY")
        return self._api_key

    async def generate(self, request: TTSRequest) -> TTSResult:
        if not request.text or not request.text.strip():
            raise SynthesisError("TTS request text cannot be empty", provider=self.name)

        language_code = request.language_code or google_config.DEFAULT_LANGUAGE
        voice = request.voice or google_config.DEFAULT_VOICE
        payload = {
            "input": {"text": request.text},
            "voice": {"languageCode": language_code, "name": voice},
            "audioConfig": {"audioEncoding": google_config.DEFAULT_AUDIO_ENCODING},
        }

        logger.info("Requesting Google TTS generation (language=%s voice=%s)", language_code, voice)

        try:
            response = await self._client().post(
                google_config.SYNTHESIZE_URL,
                params={"key": self._require_key()},
                json=payload,
                timeout=google_config.REQUEST_TIMEOUT_SECONDS,
            )
        except httpx.HTTPError as exc:
            raise SynthesisError(
                "Google TTS request failed", provider=self.name, original_error=exc
            ) from exc

        if response.status_code >= 400:
            logger.error(
                "Google TTS returned status %s: %s", response.status_code, response.text[:500]
            )
            raise SynthesisError(
                f"Google TTS request failed with status {response.status_code}",
                provider=self.name,
                http_status=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise SynthesisError(
                "Google TTS returned malformed JSON",
                provider=self.name,
                http_status=response.status_code,
                original_error=exc,
            ) from exc

        audio_content = body.get("audioContent") if isinstance(body, dict) else None
        if not audio_content:
            raise SynthesisError(
                "Google TTS response did not include audio content",
                provider=self.name,
                http_status=response.status_code,
            )

        try:
            audio_bytes = base64.b64decode(audio_content, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise SynthesisError(
                "Google TTS returned undecodable audio content",
                provider=self.name,
                original_error=exc,
            ) from exc

        return TTSResult(
            audio_bytes=audio_bytes,
            provider=self.name,
            format=google_config.DEFAULT_AUDIO_FORMAT,
            voice=voice,
            metadata={"language_code": language_code},
        )

    async def list_voices(self) -> VoiceCatalogue:
        """Return the remote voice catalogue grouped by language and gender."""

        try:
            response = await self._client().get(
                google_config.VOICES_URL,
                params={"key": self._require_key()},
                timeout=google_config.REQUEST_TIMEOUT_SECONDS,
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise ProviderError("Google voices request failed", provider=self.name, original_error=exc) from exc

        try:
            voices = response.json().get("voices", [])
        except (ValueError, AttributeError) as exc:
            raise ProviderError("Google voices response was malformed", provider=self.name, original_error=exc) from exc
        return group_voices(voices)


__all__ = ["GoogleTTSProvider", "VoiceCatalogue", "group_voices"]
