"""Per-request access logging with credential and payload redaction."""
from __future__ import annotations

import json
import logging
import time
from typing import Any, Iterable, Mapping

from fastapi import FastAPI, Request

_PREVIEW_BYTES = 2048
_SKIPPED_PATHS = frozenset({"/health"})
_SECRET_HEADERS = frozenset({"authorization", "cookie", "apikey", "x-api-key"})
_SECRET_FIELDS = frozenset({"access_token", "refresh_token", "token", "password", "api_key", "apikey", "secret"})
# Product copy can be long; log its size instead of its text
_BULKY_FIELDS = frozenset({"productdescription", "description", "text"})


def mask_headers(headers: Iterable[tuple[str, str]]) -> Mapping[str, str]:
    return {name: "***" if name.lower() in _SECRET_HEADERS else value for name, value in headers}


def _scrub(value: Any, depth: int = 6) -> Any:
    if depth == 0:
        return "..."
    if isinstance(value, Mapping):
        scrubbed = {}
        for key, item in value.items():
            lowered = str(key).lower()
            if lowered in _SECRET_FIELDS:
                scrubbed[key] = "***"
            elif lowered in _BULKY_FIELDS and isinstance(item, str):
                scrubbed[key] = f"<{len(item)} chars>"
            else:
                scrubbed[key] = _scrub(item, depth - 1)
        return scrubbed
    if isinstance(value, list):
        return [_scrub(item, depth - 1) for item in value]
    return value


def _clip(text: str, total: int) -> str:
    text = " ".join(text.split())
    if len(text) > _PREVIEW_BYTES:
        return f"{text[:_PREVIEW_BYTES]}... ({total} bytes)"
    return text


def render_payload_preview(payload: Any) -> str:
    """Redacted one-line preview of a request body for DEBUG logs."""

    if payload is None:
        return "<none>"
    if isinstance(payload, (bytes, bytearray)):
        if not payload:
            return "<empty>"
        try:
            payload = json.loads(payload)
        except ValueError:
            try:
                return _clip(bytes(payload).decode("utf-8"), len(payload))
            except UnicodeDecodeError:
                return f"<binary {len(payload)} bytes>"
    if isinstance(payload, str):
        return _clip(payload, len(payload))

    rendered = json.dumps(_scrub(payload), default=repr, ensure_ascii=False, separators=(",", ":"))
    return _clip(rendered, len(rendered))


def register_http_request_logging(app: FastAPI, *, logger_name: str = "core.http") -> None:
    """Log method, path, client, status and latency for every request."""

    logger = logging.getLogger(logger_name)

    @app.middleware("http")
    async def _access_log(request: Request, call_next):
        if request.url.path in _SKIPPED_PATHS or request.method == "OPTIONS":
            return await call_next(request)

        client = f"{request.client.host}:{request.client.port}" if request.client else "unknown"
        logger.info("HTTP %s %s from %s", request.method, request.url.path, client)
        if logger.isEnabledFor(logging.DEBUG):
            body = await request.body()
            logger.debug("payload %s", render_payload_preview(body))
            logger.debug("headers %s", mask_headers(request.headers.items()))

        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "HTTP %s %s -> %s (%.0f ms)",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
        )
        return response


__all__ = ["mask_headers", "register_http_request_logging", "render_payload_preview"]
