"""Test configuration helpers."""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, AsyncIterator, Callable, Dict

import pytest
from jose import jwt

# Explicitly opt-in to the async plugins we rely on. Some execution environments
# disable plugin auto-discovery via ``PYTEST_DISABLE_PLUGIN_AUTOLOAD`` which
# prevents ``pytest-asyncio`` and AnyIO's plugin from being loaded even if the
# packages are installed.
pytest_plugins = ("anyio", "pytest_asyncio")

# Ensure the repository root is importable so ``import core`` and the
# ``tests.helpers`` fakes resolve from any working directory.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ.setdefault("MY_AUTH_TOKEN", "test-secret")
os.environ.setdefault("NODE_ENV", "test")
os.environ.setdefault("DB_TYPE", "sqlite")
os.environ.setdefault("AUDIO_DELIVERY", "inline")
os.environ.pop("SUPABASE_JWT_SECRET", None)
os.environ.pop("SUPABASE_JWT_AUDIENCE", None)


@pytest.fixture
def anyio_backend() -> str:
    """Default AnyIO backend used when tests do not override the fixture."""

    return "asyncio"


@pytest.fixture(scope="session", autouse=True)
def suppress_asyncio_debug_logging() -> None:
    """Prevent asyncio debug logs from writing to closed pytest capture streams."""

    logger = logging.getLogger("asyncio")
    if logger.getEffectiveLevel() < logging.INFO:
        logger.setLevel(logging.INFO)


@pytest.fixture(scope="session")
def auth_token_secret() -> str:
    """Return the JWT secret configured for tests."""

    return os.environ["MY_AUTH_TOKEN"]


@pytest.fixture()
def auth_token_factory(auth_token_secret: str) -> Callable[..., str]:
    """Factory producing Supabase-style signed JWTs."""

    def _factory(
        *,
        user_id: str = "user-1",
        email: str | None = "user@example.com",
        expires_delta: timedelta | None = timedelta(hours=1),
        extra_claims: Dict[str, Any] | None = None,
    ) -> str:
        payload: Dict[str, Any] = {"sub": user_id, "email": email, "role": "authenticated"}
        if extra_claims:
            payload.update(extra_claims)
        if expires_delta is not None:
            payload["exp"] = datetime.now(timezone.utc) + expires_delta
        return jwt.encode(payload, auth_token_secret, algorithm="HS256")

    return _factory


@pytest.fixture()
def auth_token(auth_token_factory: Callable[..., str]) -> str:
    """Return a default signed JWT for convenience."""

    return auth_token_factory()


@pytest.fixture()
async def session_factory(tmp_path: Path) -> AsyncIterator[Any]:
    """Session factory bound to a fresh SQLite database with every table created."""

    import features.audio_files.db_models  # noqa: F401
    import features.feedback.db_models  # noqa: F401
    import features.profiles.db_models  # noqa: F401
    from infrastructure.db import create_db_engine, get_session_factory, prepare_database

    engine = create_db_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await prepare_database(engine)
    try:
        yield get_session_factory(engine)
    finally:
        await engine.dispose()
