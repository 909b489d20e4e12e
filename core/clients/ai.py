"""Initialise AI provider clients used across the application."""

from __future__ import annotations

import logging
from typing import Dict

import httpx
from openai import AsyncOpenAI

from core.exceptions import ConfigurationError
from core.utils.env import get_env

logger = logging.getLogger(__name__)

_HTTP_TIMEOUT = httpx.Timeout(30.0, connect=10.0)

ai_clients: Dict[str, object] = {}


def _require_key(key: str) -> str:
    value = get_env(key)
    if not value:
        raise ConfigurationError(f"Required environment variable {key} not set", key=key)
    return value


if get_env("OPENAI_API_KEY"):
    ai_clients["openai_async"] = AsyncOpenAI()
    logger.info("Initialised OpenAI async client")


def get_openai_async_client() -> AsyncOpenAI:
    """Return a cached asynchronous OpenAI client."""

    client = ai_clients.get("openai_async")
    if client is not None:
        return client  # type: ignore[return-value]

    api_key = _require_key("OPENAI_API_KEY")
    client = AsyncOpenAI(api_key=api_key)
    ai_clients["openai_async"] = client
    logger.info("Initialised OpenAI async client via helper")
    return client


def get_http_client() -> httpx.AsyncClient:
    """Return the shared ``httpx`` client used for REST providers (Google TTS)."""

    client = ai_clients.get("http")
    if client is not None and not client.is_closed:  # type: ignore[attr-defined]
        return client  # type: ignore[return-value]

    client = httpx.AsyncClient(timeout=_HTTP_TIMEOUT)
    ai_clients["http"] = client
    return client


async def close_ai_clients() -> None:
    """Close cached clients and release their connection pools."""

    for name in list(ai_clients):
        client = ai_clients.pop(name)
        close = getattr(client, "aclose", None) or getattr(client, "close", None)
        if close is None:
            continue
        try:
            await close()
        except Exception:  # pragma: no cover - best-effort cleanup
            logger.debug("Failed to close %s client", name, exc_info=True)


__all__ = ["ai_clients", "close_ai_clients", "get_http_client", "get_openai_async_client"]
