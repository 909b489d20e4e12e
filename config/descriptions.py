"""Prompt templates for product description generation."""

from __future__ import annotations

from typing import Dict

DEFAULT_SYSTEM_PROMPT = (
    "You are a professional copywriter specializing in creating concise, engaging "
    "e-commerce product descriptions for audio playback. Write in natural spoken English "
    "without markdown, lists or emojis."
)

# Keyed by full locale code
LOCALE_SYSTEM_PROMPTS: Dict[str, str] = {
    "en-US": (
        "You are a professional American copywriter creating engaging e-commerce product "
        "descriptions for audio playback. Use US spelling and a warm, confident tone. "
        "Write plain spoken text without markdown, lists or emojis."
    ),
    "en-GB": (
        "You are a professional British copywriter creating engaging e-commerce product "
        "descriptions for audio playback. Use British spelling and a polished, friendly tone. "
        "Write plain spoken text without markdown, lists or emojis."
    ),
    "es-ES": (
        "Eres un redactor publicitario profesional de España especializado en descripciones "
        "de productos de comercio electrónico para reproducción en audio. Escribe en español "
        "peninsular natural, sin markdown, listas ni emojis."
    ),
    "es-MX": (
        "Eres un redactor publicitario profesional de México especializado en descripciones "
        "de productos de comercio electrónico para reproducción en audio. Escribe en español "
        "latinoamericano natural, sin markdown, listas ni emojis."
    ),
    "fr-FR": (
        "Vous êtes un rédacteur publicitaire professionnel spécialisé dans les descriptions "
        "de produits e-commerce destinées à une écoute audio. Écrivez en français naturel, "
        "sans markdown, listes ni emojis."
    ),
    "de-DE": (
        "Sie sind ein professioneller Werbetexter für E-Commerce-Produktbeschreibungen, "
        "die als Audio abgespielt werden. Schreiben Sie natürliches Deutsch ohne Markdown, "
        "Listen oder Emojis."
    ),
}

# Keyed by language prefix, used when no full locale matches
LANGUAGE_SYSTEM_PROMPTS: Dict[str, str] = {
    "en": DEFAULT_SYSTEM_PROMPT,
    "es": LOCALE_SYSTEM_PROMPTS["es-ES"],
    "fr": LOCALE_SYSTEM_PROMPTS["fr-FR"],
    "de": LOCALE_SYSTEM_PROMPTS["de-DE"],
    "it": (
        "Sei un copywriter professionista specializzato in descrizioni di prodotti e-commerce "
        "per la riproduzione audio. Scrivi in italiano naturale, senza markdown, elenchi o emoji."
    ),
    "pt": (
        "Você é um redator publicitário profissional especializado em descrições de produtos "
        "de comércio eletrônico para reprodução em áudio. Escreva em português natural, sem "
        "markdown, listas ou emojis."
    ),
}

ENHANCE_USER_PROMPT = (
    'Create a {style} audio description for: "{text}".\n\n'
    "The description should:\n"
    "1. Be clear and concise\n"
    "2. Highlight key features and benefits\n"
    "3. Use natural language optimized for speech\n"
    "4. Be in {language} language\n"
    "5. {length_rule}\n\n"
    "Make it sound professional and engaging."
)

FULL_DESCRIPTION_STYLE = "detailed"
FULL_DESCRIPTION_LENGTH_RULE = "Be between 100-200 words"
ENHANCE_STYLE = "brief enhanced"
ENHANCE_LENGTH_RULE = "Be no more than 100 words"

PRODUCT_USER_PROMPT = (
    'Write a compelling 2-3 sentence product description for "{product_name}" '
    "in {language} language, suitable for being read aloud{voice_hint}."
)

PRODUCT_FALLBACK_TEMPLATE = (
    "Introducing the {name}. This high-quality product offers exceptional performance and value. "
    "Discover what makes {name} a favorite choice among customers."
)


def resolve_system_prompt(language_code: str | None) -> str:
    """Return the system prompt for ``language_code``.

    Lookup order is the full locale (``es-MX``), then the language prefix
    (``es``), then the generic English prompt.
    """

    code = (language_code or "").strip().replace("_", "-")
    if not code:
        return DEFAULT_SYSTEM_PROMPT

    for locale, prompt in LOCALE_SYSTEM_PROMPTS.items():
        if locale.lower() == code.lower():
            return prompt

    prefix = code.split("-", 1)[0].lower()
    return LANGUAGE_SYSTEM_PROMPTS.get(prefix, DEFAULT_SYSTEM_PROMPT)


__all__ = [
    "DEFAULT_SYSTEM_PROMPT",
    "LOCALE_SYSTEM_PROMPTS",
    "LANGUAGE_SYSTEM_PROMPTS",
    "ENHANCE_USER_PROMPT",
    "FULL_DESCRIPTION_STYLE",
    "FULL_DESCRIPTION_LENGTH_RULE",
    "ENHANCE_STYLE",
    "ENHANCE_LENGTH_RULE",
    "PRODUCT_USER_PROMPT",
    "PRODUCT_FALLBACK_TEMPLATE",
    "resolve_system_prompt",
]
