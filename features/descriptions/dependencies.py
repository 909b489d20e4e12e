"""Dependency helpers for the descriptions feature."""

from __future__ import annotations

from functools import lru_cache

from .enhancer import DescriptionEnhancer
from .service import DescriptionService


@lru_cache(maxsize=1)
def _description_service_singleton() -> DescriptionService:
    return DescriptionService()


@lru_cache(maxsize=1)
def _enhancer_singleton() -> DescriptionEnhancer:
    return DescriptionEnhancer()


def get_description_service() -> DescriptionService:
    """Return a cached instance of :class:`DescriptionService`."""

    return _description_service_singleton()


def get_description_enhancer() -> DescriptionEnhancer:
    return _enhancer_singleton()


__all__ = ["get_description_enhancer", "get_description_service"]
