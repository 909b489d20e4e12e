"""Object storage configuration for generated audio."""

from __future__ import annotations

import os
from typing import Dict, Literal

from config.api_keys import AWS_REGION as _DEFAULT_REGION
from config.environment import ENVIRONMENT
from core.utils.config_helpers import parse_bool

AudioDelivery = Literal["storage", "inline"]

_ENVIRONMENT_DEFAULTS: Dict[str, Dict[str, str]] = {
    "production": {
        "audio_bucket": "audio-files",
        "delivery": "storage",
    },
    "staging": {
        "audio_bucket": "audio-files-staging",
        "delivery": "storage",
    },
    "development": {
        "audio_bucket": "audio-files-dev",
        "delivery": "inline",
    },
    "test": {
        "audio_bucket": "audio-files-test",
        "delivery": "inline",
    },
}

_defaults = _ENVIRONMENT_DEFAULTS.get(ENVIRONMENT, _ENVIRONMENT_DEFAULTS["development"])


def _resolve_delivery(raw: str | None) -> AudioDelivery:
    value = (raw or "").strip().lower()
    if value in ("storage", "inline"):
        return value  # type: ignore[return-value]
    return _defaults["delivery"]  # type: ignore[return-value]


STORAGE_REGION = os.getenv("STORAGE_REGION", _DEFAULT_REGION)
AUDIO_BUCKET = os.getenv("AUDIO_BUCKET", _defaults["audio_bucket"])
# Supabase Storage exposes an S3-compatible endpoint, e.g. https://<ref>.supabase.co/storage/v1/s3
STORAGE_ENDPOINT_URL = os.getenv("STORAGE_ENDPOINT_URL", "")
# Public object base, e.g. https://<ref>.supabase.co/storage/v1/object/public
STORAGE_PUBLIC_BASE_URL = os.getenv("STORAGE_PUBLIC_BASE_URL", "")
AUDIO_DELIVERY: AudioDelivery = _resolve_delivery(os.getenv("AUDIO_DELIVERY"))
INLINE_FALLBACK_ON_UPLOAD_ERROR = parse_bool(os.getenv("INLINE_FALLBACK_ON_UPLOAD_ERROR"), False)

USER_AUDIO_PREFIX = "audio"
GUEST_AUDIO_PREFIX = "temp"

__all__ = [
    "AudioDelivery",
    "AUDIO_BUCKET",
    "AUDIO_DELIVERY",
    "GUEST_AUDIO_PREFIX",
    "INLINE_FALLBACK_ON_UPLOAD_ERROR",
    "STORAGE_ENDPOINT_URL",
    "STORAGE_PUBLIC_BASE_URL",
    "STORAGE_REGION",
    "USER_AUDIO_PREFIX",
]
