"""Credentials for the speech providers and the storage bucket.

The OpenAI key is read lazily by ``core.clients.ai`` so tests can toggle it
with ``monkeypatch.setenv``; everything here is resolved once at import time.
"""

from __future__ import annotations

import os

GOOGLE_TTS_API_KEY = os.getenv("GOOGLE_TTS_API_KEY") or os.getenv("GOOGLE_API_KEY", "")

# Supabase Storage exposes an S3-compatible endpoint; these are its access keys
AWS_ACCESS_KEY_ID = os.getenv("AWS_ACCESS_KEY_ID", "")
AWS_SECRET_ACCESS_KEY = os.getenv("AWS_SECRET_ACCESS_KEY", "")
AWS_REGION = os.getenv("AWS_REGION", "us-east-1")


__all__ = [
    "AWS_ACCESS_KEY_ID",
    "AWS_REGION",
    "AWS_SECRET_ACCESS_KEY",
    "GOOGLE_TTS_API_KEY",
]
