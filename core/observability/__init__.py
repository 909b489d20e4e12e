"""Observability helpers for emitting structured metrics/events."""

from .metrics import (
    record_generation_failure,
    record_generation_success,
    record_rate_limit_hit,
    track_metric,
)
from .request_logging import (
    register_http_request_logging,
    render_payload_preview,
)

__all__ = [
    "record_generation_failure",
    "record_generation_success",
    "record_rate_limit_hit",
    "track_metric",
    "register_http_request_logging",
    "render_payload_preview",
]
