"""Engine and pool tuning for the Postgres connection."""

from __future__ import annotations

import os

# Supabase's pooler closes idle connections after about 15 minutes
POOL_RECYCLE = int(os.getenv("DB_POOL_RECYCLE", "900"))
POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "5"))
MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", "5"))

# asyncpg per-statement timeout, seconds
COMMAND_TIMEOUT = int(os.getenv("DB_COMMAND_TIMEOUT", "10"))

ECHO = os.getenv("DB_ECHO", "").lower() in {"1", "true", "yes"}
