"""Dependency helpers for the generation feature."""

from __future__ import annotations

from functools import lru_cache

from core.rate_limiting import get_rate_limiter
from features.descriptions.dependencies import get_description_enhancer

from .service import GenerationService


@lru_cache(maxsize=1)
def _generation_service_singleton() -> GenerationService:
    return GenerationService(enhancer=get_description_enhancer(), rate_limiter=get_rate_limiter())


def get_generation_service() -> GenerationService:
    """Return a cached instance of :class:`GenerationService`."""

    return _generation_service_singleton()


__all__ = ["get_generation_service"]
