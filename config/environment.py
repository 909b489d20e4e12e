"""Runtime environment and database backend selection."""

from __future__ import annotations

import os
from typing import Literal

from core.utils.env import get_node_env

DatabaseType = Literal["postgresql", "sqlite"]

_KNOWN_ENVIRONMENTS = ("development", "staging", "production", "test")


def _resolve_environment() -> str:
    env = get_node_env()
    return env if env in _KNOWN_ENVIRONMENTS else "development"


def _resolve_database_type() -> DatabaseType:
    """Map ``DB_TYPE`` onto a backend; anything unrecognised means Supabase Postgres."""

    raw = os.getenv("DB_TYPE", "").strip().lower()
    if raw == "sqlite":
        return "sqlite"
    return "postgresql"


ENVIRONMENT = _resolve_environment()

DATABASE_TYPE: DatabaseType = _resolve_database_type()
IS_SQLITE = DATABASE_TYPE == "sqlite"

__all__ = ["DATABASE_TYPE", "DatabaseType", "ENVIRONMENT", "IS_SQLITE"]
