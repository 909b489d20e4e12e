"""Standalone product description generation."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict

from config.descriptions import PRODUCT_FALLBACK_TEMPLATE, PRODUCT_USER_PROMPT, resolve_system_prompt
from config.generation import ENHANCER_TIMEOUT_SECONDS, PRODUCT_DESCRIPTION_MAX_TOKENS
from core.clients.ai import get_openai_async_client
from core.exceptions import ConfigurationError, ProviderError, ValidationError

from .enhancer import complete_chat

logger = logging.getLogger(__name__)


def fallback_description(product_name: str) -> str:
    return PRODUCT_FALLBACK_TEMPLATE.format(name=product_name)


class DescriptionService:
    """Write a short spoken description for a product name."""

    def __init__(
        self,
        *,
        client_factory: Callable[[], Any] = get_openai_async_client,
        timeout_seconds: float = ENHANCER_TIMEOUT_SECONDS,
    ) -> None:
        self._client_factory = client_factory
        self._timeout_seconds = timeout_seconds

    async def generate(
        self, product_name: str, language: str, *, voice_name: str | None = None
    ) -> Dict[str, Any]:
        name = (product_name or "").strip()
        if not name:
            raise ValidationError("Product name is required", field="product_name")

        voice_hint = f" by the voice {voice_name}" if voice_name else ""
        prompt = PRODUCT_USER_PROMPT.format(product_name=name, language=language, voice_hint=voice_hint)

        try:
            client = self._client_factory()
            description = await asyncio.wait_for(
                complete_chat(
                    client,
                    system_prompt=resolve_system_prompt(language),
                    user_prompt=prompt,
                    max_tokens=PRODUCT_DESCRIPTION_MAX_TOKENS,
                ),
                timeout=self._timeout_seconds,
            )
        except (asyncio.TimeoutError, ConfigurationError, ProviderError) as exc:
            logger.warning("Falling back to template description for %r: %s", name, str(exc) or "timeout")
            return {"description": fallback_description(name), "fallback": True}

        return {"description": description, "fallback": False}


__all__ = ["DescriptionService", "fallback_description"]
