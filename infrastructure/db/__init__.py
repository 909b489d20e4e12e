"""Database infrastructure helpers."""

from __future__ import annotations

from .base import Base, metadata, prepare_database, utcnow
from .engines import (
    AsyncSessionFactory,
    SessionDependency,
    create_db_engine,
    dispose_engine,
    get_session_factory,
)
from .sessions import (
    get_main_session,
    get_session_dependency,
    require_main_session_factory,
    session_scope,
)

__all__ = [
    "Base",
    "metadata",
    "prepare_database",
    "utcnow",
    "AsyncSessionFactory",
    "SessionDependency",
    "create_db_engine",
    "dispose_engine",
    "get_session_factory",
    "get_main_session",
    "get_session_dependency",
    "require_main_session_factory",
    "session_scope",
]
