"""Connection URL for the Supabase Postgres database.

``MAIN_DB_URL`` overrides everything. Otherwise the URL is assembled from the
``SUPABASE_DB_*`` variables, or points at a local SQLite file when
``DB_TYPE=sqlite``.
"""

from __future__ import annotations

import os

from config.environment import ENVIRONMENT, IS_SQLITE
from core.utils.config_helpers import postgres_url

SQLITE_DB_PATH = os.getenv("SQLITE_DB_PATH", "./audio_descriptions.db")

# Staging shares the production instance under its own schema
_SCHEMA_BY_ENVIRONMENT = {"staging": "staging"}


def _supabase_url() -> str:
    host = os.getenv("SUPABASE_HOST") or os.getenv("SUPABASE_DB_HOST", "")
    password = os.getenv("SUPABASE_DB_PASSWORD") or os.getenv("SUPABASE_DB_PASS", "")
    if not (host and password):
        # sessions.py reports the missing settings on first use
        return ""
    return postgres_url(
        os.getenv("SUPABASE_DB_USER", "postgres"),
        password,
        host,
        os.getenv("SUPABASE_DB_NAME", "postgres"),
        port=int(os.getenv("SUPABASE_DB_PORT", "5432")),
        schema=os.getenv("MAIN_DB_SCHEMA") or _SCHEMA_BY_ENVIRONMENT.get(ENVIRONMENT),
    )


def _default_url() -> str:
    if IS_SQLITE:
        return f"sqlite+aiosqlite:///{SQLITE_DB_PATH}"
    return _supabase_url()


MAIN_DB_URL = os.getenv("MAIN_DB_URL") or _default_url()

__all__ = ["MAIN_DB_URL", "SQLITE_DB_PATH"]
