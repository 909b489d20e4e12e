import pytest

from core.exceptions import SynthesisError
from features.generation.synthesis import SpeechSynthesizer, provider_settings_for_voice
from tests.helpers import FakeTTSProvider


def test_openai_voice_pins_openai_provider():
    assert provider_settings_for_voice("Nova") == {"tts": {"voice": "nova", "provider": "openai"}}


def test_other_voice_keeps_default_provider():
    assert provider_settings_for_voice("en-US-Neural2-F") == {"tts": {"voice": "en-US-Neural2-F"}}
    assert provider_settings_for_voice(None) == {"tts": {}}


@pytest.mark.anyio
async def test_synthesize_passes_text_language_and_voice():
    provider = FakeTTSProvider(b"mp3")
    seen = []

    def resolver(settings):
        seen.append(settings)
        return provider

    result = await SpeechSynthesizer(provider_resolver=resolver).synthesize("Hello", "en-GB", "alloy")

    assert result.audio_bytes == b"mp3"
    assert seen == [{"tts": {"voice": "alloy", "provider": "openai"}}]
    request = provider.requests[0]
    assert (request.text, request.language_code, request.voice) == ("Hello", "en-GB", "alloy")


@pytest.mark.anyio
async def test_empty_audio_is_an_error():
    synthesizer = SpeechSynthesizer(provider_resolver=lambda settings: FakeTTSProvider(b""))

    with pytest.raises(SynthesisError):
        await synthesizer.synthesize("Hello", "en-US", None)


@pytest.mark.anyio
async def test_provider_errors_propagate():
    synthesizer = SpeechSynthesizer(provider_resolver=lambda settings: FakeTTSProvider(fail_status=503))

    with pytest.raises(SynthesisError) as exc_info:
        await synthesizer.synthesize("Hello", "en-US", None)

    assert exc_info.value.http_status == 503
