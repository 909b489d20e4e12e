import pytest

from config.descriptions import (
    DEFAULT_SYSTEM_PROMPT,
    LANGUAGE_SYSTEM_PROMPTS,
    LOCALE_SYSTEM_PROMPTS,
    resolve_system_prompt,
)


@pytest.mark.parametrize("code", ["es-MX", "es_mx", "ES-MX"])
def test_full_locale_match_is_case_and_separator_insensitive(code):
    assert resolve_system_prompt(code) == LOCALE_SYSTEM_PROMPTS["es-MX"]


def test_language_prefix_fallback():
    assert resolve_system_prompt("it-IT") == LANGUAGE_SYSTEM_PROMPTS["it"]
    assert resolve_system_prompt("fr-CA") == LANGUAGE_SYSTEM_PROMPTS["fr"]


@pytest.mark.parametrize("code", ["ja-JP", "", None])
def test_generic_english_fallback(code):
    assert resolve_system_prompt(code) == DEFAULT_SYSTEM_PROMPT
