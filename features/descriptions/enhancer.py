"""LLM rewrite of short product prompts into narration scripts.

Enhancement is a soft step: every failure yields ``None`` and the caller
keeps the original text.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

import openai

from config.descriptions import (
    ENHANCE_LENGTH_RULE,
    ENHANCE_STYLE,
    ENHANCE_USER_PROMPT,
    FULL_DESCRIPTION_LENGTH_RULE,
    FULL_DESCRIPTION_STYLE,
    resolve_system_prompt,
)
from config.generation import (
    ENHANCE_MAX_TOKENS,
    ENHANCER_TIMEOUT_SECONDS,
    FULL_DESCRIPTION_MAX_TOKENS,
    FULL_DESCRIPTION_THRESHOLD,
    LLM_MODEL,
    LLM_TEMPERATURE,
    SHORT_PROMPT_THRESHOLD,
)
from core.clients.ai import get_openai_async_client
from core.exceptions import ConfigurationError, ProviderError

logger = logging.getLogger(__name__)


class EnhancementMode(str, Enum):
    ENHANCE = "enhance"
    FULL_DESCRIPTION = "full_description"


@dataclass(frozen=True, slots=True)
class ModeSettings:
    style: str
    length_rule: str
    max_tokens: int


MODE_SETTINGS = {
    EnhancementMode.ENHANCE: ModeSettings(ENHANCE_STYLE, ENHANCE_LENGTH_RULE, ENHANCE_MAX_TOKENS),
    EnhancementMode.FULL_DESCRIPTION: ModeSettings(
        FULL_DESCRIPTION_STYLE, FULL_DESCRIPTION_LENGTH_RULE, FULL_DESCRIPTION_MAX_TOKENS
    ),
}


def select_mode(text: str) -> EnhancementMode | None:
    """Pick the enhancement mode from the input length; ``None`` skips enhancement."""

    length = len(text.strip())
    if length >= FULL_DESCRIPTION_THRESHOLD:
        return None
    if length < SHORT_PROMPT_THRESHOLD:
        return EnhancementMode.FULL_DESCRIPTION
    return EnhancementMode.ENHANCE


async def complete_chat(
    client: Any,
    *,
    system_prompt: str,
    user_prompt: str,
    max_tokens: int,
    model: str = LLM_MODEL,
    temperature: float = LLM_TEMPERATURE,
) -> str:
    """Run one chat completion and return the stripped content.

    Raises :class:`ProviderError` on API failures or an empty answer.
    """

    params: dict[str, Any] = {
        "model": model,
        "messages": [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ],
        "temperature": temperature,
        "max_tokens": max_tokens,
    }
    logger.debug("OpenAI chat call: model=%s, max_tokens=%s", model, max_tokens)

    try:
        response = await client.chat.completions.create(**params)
    except openai.OpenAIError as exc:
        raise ProviderError(f"OpenAI API error: {exc}", provider="openai", original_error=exc) from exc

    try:
        content = response.choices[0].message.content
    except (AttributeError, IndexError, TypeError) as exc:
        raise ProviderError("OpenAI returned a malformed completion", provider="openai", original_error=exc) from exc

    text = (content or "").strip()
    if not text:
        raise ProviderError("OpenAI returned an empty completion", provider="openai")
    return text


class DescriptionEnhancer:
    """Rewrite a product prompt in the requested language."""

    def __init__(
        self,
        *,
        client_factory: Callable[[], Any] = get_openai_async_client,
        timeout_seconds: float = ENHANCER_TIMEOUT_SECONDS,
    ) -> None:
        self._client_factory = client_factory
        self._timeout_seconds = timeout_seconds

    async def enhance(
        self, text: str, language_code: str, *, mode: EnhancementMode | None = None
    ) -> str | None:
        mode = mode or select_mode(text) or EnhancementMode.ENHANCE
        settings = MODE_SETTINGS[mode]
        user_prompt = ENHANCE_USER_PROMPT.format(
            style=settings.style,
            text=text.strip(),
            language=language_code,
            length_rule=settings.length_rule,
        )

        try:
            client = self._client_factory()
            return await asyncio.wait_for(
                complete_chat(
                    client,
                    system_prompt=resolve_system_prompt(language_code),
                    user_prompt=user_prompt,
                    max_tokens=settings.max_tokens,
                ),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning("Description enhancement timed out after %.1fs", self._timeout_seconds)
        except (ConfigurationError, ProviderError) as exc:
            logger.warning("Description enhancement failed (%s): %s", mode.value, exc)
        return None


__all__ = ["DescriptionEnhancer", "EnhancementMode", "complete_chat", "select_mode"]
