"""Dependency helpers for the admin feature."""

from __future__ import annotations

from functools import lru_cache

from .service import AdminService


@lru_cache(maxsize=1)
def _admin_service_singleton() -> AdminService:
    return AdminService()


def get_admin_service() -> AdminService:
    """Return a cached instance of :class:`AdminService`."""

    return _admin_service_singleton()


__all__ = ["get_admin_service"]
