"""Dependency helpers for the audio history feature."""

from __future__ import annotations

from functools import lru_cache

from .service import AudioFileService


@lru_cache(maxsize=1)
def _audio_file_service_singleton() -> AudioFileService:
    return AudioFileService()


def get_audio_file_service() -> AudioFileService:
    """Return a cached instance of :class:`AudioFileService`."""

    return _audio_file_service_singleton()


__all__ = ["get_audio_file_service"]
