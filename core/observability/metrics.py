"""Structured logging helpers for audio generation observability."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

_logger = logging.getLogger("observability.generation")
_metrics_logger = logging.getLogger("observability.metrics")


def _build_payload(**fields: Any) -> Mapping[str, Any]:
    """Return a payload suitable for structured logging handlers."""

    return {
        "event": fields.pop("event"),
        "generation": fields,
    }


def record_generation_success(
    *,
    request_id: str,
    provider: str,
    caller: str,
    enhanced: bool,
    delivery: str,
    text_length: int,
    audio_bytes: int,
    elapsed_seconds: float,
) -> None:
    """Emit a structured log entry for a completed generation."""

    payload = _build_payload(
        event="audio_generation.completed",
        request_id=request_id,
        provider=provider,
        caller=caller,
        enhanced=enhanced,
        delivery=delivery,
        text_length=text_length,
        audio_bytes=audio_bytes,
        elapsed_ms=int(elapsed_seconds * 1000),
    )
    _logger.info("audio_generation_completed", extra={"observability": payload})


def record_generation_failure(
    *,
    request_id: str,
    caller: str | None,
    state: str,
    error_type: str,
    error: str,
    elapsed_seconds: float,
) -> None:
    """Emit a structured log entry for a failed generation."""

    payload = _build_payload(
        event="audio_generation.failed",
        request_id=request_id,
        caller=caller,
        state=state,
        error_type=error_type,
        error=error,
        elapsed_ms=int(elapsed_seconds * 1000),
    )
    _logger.error("audio_generation_failed", extra={"observability": payload})


def record_rate_limit_hit(*, scope: str, client_ip: str | None) -> None:
    """Count a request rejected by the per-IP abuse guard."""

    track_metric("rate_limit.rejected", tags={"scope": scope, "client_ip": client_ip or "unknown"})


def track_metric(name: str, value: float = 1.0, *, tags: Optional[Mapping[str, Any]] = None) -> None:
    """Emit a lightweight metric event for ad-hoc tracking.

    Falls back to structured logging so downstream collectors can ingest the data.
    """

    payload = {
        "event": "metric",
        "metric": name,
        "value": value,
        "tags": dict(tags or {}),
    }
    _metrics_logger.info("metric_event", extra={"observability": payload})


__all__ = [
    "record_generation_failure",
    "record_generation_success",
    "record_rate_limit_hit",
    "track_metric",
]
