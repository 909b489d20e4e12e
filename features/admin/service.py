"""Administrative operations over application settings."""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import async_sessionmaker

from features.profiles.repository import AppSettingsRepository
from infrastructure.db.sessions import require_main_session_factory, session_scope

logger = logging.getLogger(__name__)


class AdminService:
    def __init__(self, *, session_factory: async_sessionmaker | None = None) -> None:
        self._session_factory = session_factory

    def _sessions(self) -> async_sessionmaker:
        return self._session_factory or require_main_session_factory()

    async def get_unlimited_generations(self) -> bool:
        async with session_scope(self._sessions()) as session:
            return (await AppSettingsRepository(session).unlimited_generations_for_all()).unwrap()

    async def set_unlimited_generations(self, enabled: bool, *, changed_by: str) -> bool:
        async with session_scope(self._sessions()) as session:
            value = (await AppSettingsRepository(session).set_unlimited_generations_for_all(enabled)).unwrap()
        logger.info("Unlimited generations for all set to %s by %s", value, changed_by)
        return value


__all__ = ["AdminService"]
