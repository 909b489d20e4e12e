import pytest

from core.exceptions import ConfigurationError
from core.providers import get_tts_provider, registered_tts_providers
from core.providers.resolvers import provider_for_voice
from core.providers.tts.google import GoogleTTSProvider


def test_both_backends_are_registered():
    assert registered_tts_providers() == ["google", "openai"]


def test_google_voice_names_select_google():
    provider = get_tts_provider({"tts": {"voice": "en-GB-Standard-A"}})

    assert isinstance(provider, GoogleTTSProvider)


def test_explicit_provider_wins():
    provider = get_tts_provider({"tts": {"provider": "google", "voice": "whatever"}})

    assert provider.name == "google"


def test_unknown_provider_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        get_tts_provider({"tts": {"provider": "acme"}})


@pytest.mark.parametrize(
    ("voice", "expected"),
    [("nova", "openai"), ("de-DE-Neural2-B", "google"), ("", None), ("robot", None)],
)
def test_provider_for_voice(voice, expected):
    assert provider_for_voice(voice) == expected
