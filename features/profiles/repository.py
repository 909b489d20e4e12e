"""Repositories for profiles, roles, usage counters and application settings.

All methods return ``Ok``/``Err`` results; callers own the transaction.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from config.generation import FREE_PLAN, FREE_PLAN_DAILY_LIMIT
from core.exceptions import DatabaseError, NotFoundError
from core.utils.result import Err, Ok, Result

from .db_models import SETTINGS_ROW_ID, AppSettings, GenerationCount, Profile, UserRole

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GenerationStats:
    total: int
    today: int


class ProfileRepository:
    """Data access for the ``profiles`` table."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, user_id: str) -> Result[Profile, Exception]:
        try:
            profile = await self._session.get(Profile, user_id)
        except SQLAlchemyError as exc:
            logger.error("Failed to load profile %s: %s", user_id, exc)
            return Err(DatabaseError("Failed to load profile", operation="profiles.get"))
        if profile is None:
            return Err(NotFoundError(f"Profile {user_id} not found", resource="profile"))
        return Ok(profile)

    async def ensure_profile(self, user_id: str, email: str | None = None) -> Result[Profile, DatabaseError]:
        """Return the user's profile, creating a free-plan profile when missing."""

        existing = await self.get(user_id)
        if isinstance(existing, Ok):
            return existing
        if not isinstance(existing.error, NotFoundError):
            return existing  # type: ignore[return-value]

        profile = Profile(
            id=user_id,
            email=email,
            plan=FREE_PLAN,
            daily_limit=FREE_PLAN_DAILY_LIMIT,
            remaining_generations=FREE_PLAN_DAILY_LIMIT,
        )
        self._session.add(profile)
        try:
            await self._session.flush()
        except SQLAlchemyError as exc:
            logger.error("Failed to create profile %s: %s", user_id, exc)
            return Err(DatabaseError("Failed to create profile", operation="profiles.insert"))
        logger.info("Created free plan profile for user %s", user_id)
        return Ok(profile)

    async def decrement_remaining(self, user_id: str) -> Result[bool, DatabaseError]:
        """Consume one generation; ``Ok(False)`` when nothing was left to consume.

        A single conditional UPDATE, so concurrent decrements never drive the
        counter below zero.
        """

        statement = (
            update(Profile)
            .where(Profile.id == user_id, Profile.remaining_generations > 0)
            .values(remaining_generations=Profile.remaining_generations - 1)
        )
        try:
            result = await self._session.execute(statement)
        except SQLAlchemyError as exc:
            logger.error("Failed to decrement quota for %s: %s", user_id, exc)
            return Err(DatabaseError("Failed to update remaining generations", operation="profiles.decrement"))
        return Ok(result.rowcount > 0)

    async def set_plan(self, user_id: str, *, plan: str, daily_limit: int) -> Result[Profile, Exception]:
        loaded = await self.get(user_id)
        if isinstance(loaded, Err):
            return loaded
        profile = loaded.value
        profile.plan = plan
        profile.daily_limit = daily_limit
        profile.remaining_generations = daily_limit
        try:
            await self._session.flush()
        except SQLAlchemyError as exc:
            logger.error("Failed to update plan for %s: %s", user_id, exc)
            return Err(DatabaseError("Failed to update plan", operation="profiles.set_plan"))
        return Ok(profile)


class RoleRepository:
    """Data access for the ``user_roles`` table."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def has_role(self, user_id: str, role: str) -> Result[bool, DatabaseError]:
        query = select(UserRole.id).where(UserRole.user_id == user_id, UserRole.role == role).limit(1)
        try:
            result = await self._session.execute(query)
        except SQLAlchemyError as exc:
            logger.error("Failed to check role %s for %s: %s", role, user_id, exc)
            return Err(DatabaseError("Failed to check role", operation="user_roles.select"))
        return Ok(result.scalar_one_or_none() is not None)

    async def grant(self, user_id: str, role: str) -> Result[bool, DatabaseError]:
        """Grant ``role``; ``Ok(False)`` when it was already held."""

        held = await self.has_role(user_id, role)
        if isinstance(held, Err):
            return held
        if held.value:
            return Ok(False)

        self._session.add(UserRole(user_id=user_id, role=role))
        try:
            await self._session.flush()
        except SQLAlchemyError as exc:
            logger.error("Failed to grant role %s to %s: %s", role, user_id, exc)
            return Err(DatabaseError("Failed to grant role", operation="user_roles.insert"))
        return Ok(True)


class GenerationCountRepository:
    """Daily generation counters used for usage statistics."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def increment(self, user_id: str, day: date) -> Result[int, DatabaseError]:
        query = select(GenerationCount).where(
            GenerationCount.user_id == user_id, GenerationCount.date == day
        )
        try:
            row = (await self._session.execute(query)).scalar_one_or_none()
            if row is None:
                row = GenerationCount(user_id=user_id, date=day, count=1)
                self._session.add(row)
            else:
                row.count += 1
            await self._session.flush()
        except SQLAlchemyError as exc:
            logger.error("Failed to increment generation count for %s: %s", user_id, exc)
            return Err(DatabaseError("Failed to record generation", operation="generation_counts.upsert"))
        return Ok(row.count)

    async def stats(self, user_id: str, day: date) -> Result[GenerationStats, DatabaseError]:
        total_query = select(func.coalesce(func.sum(GenerationCount.count), 0)).where(
            GenerationCount.user_id == user_id
        )
        today_query = select(GenerationCount.count).where(
            GenerationCount.user_id == user_id, GenerationCount.date == day
        )
        try:
            total = (await self._session.execute(total_query)).scalar_one()
            today = (await self._session.execute(today_query)).scalar_one_or_none()
        except SQLAlchemyError as exc:
            logger.error("Failed to load generation stats for %s: %s", user_id, exc)
            return Err(DatabaseError("Failed to load generation stats", operation="generation_counts.stats"))
        return Ok(GenerationStats(total=int(total or 0), today=int(today or 0)))


class AppSettingsRepository:
    """Access to the single ``app_settings`` row."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def unlimited_generations_for_all(self) -> Result[bool, DatabaseError]:
        try:
            settings = await self._session.get(AppSettings, SETTINGS_ROW_ID)
        except SQLAlchemyError as exc:
            logger.error("Failed to read app settings: %s", exc)
            return Err(DatabaseError("Failed to read app settings", operation="app_settings.get"))
        return Ok(bool(settings and settings.unlimited_generations_for_all))

    async def set_unlimited_generations_for_all(self, enabled: bool) -> Result[bool, DatabaseError]:
        try:
            settings = await self._session.get(AppSettings, SETTINGS_ROW_ID)
            if settings is None:
                settings = AppSettings(id=SETTINGS_ROW_ID, unlimited_generations_for_all=enabled)
                self._session.add(settings)
            else:
                settings.unlimited_generations_for_all = enabled
            await self._session.flush()
        except SQLAlchemyError as exc:
            logger.error("Failed to update app settings: %s", exc)
            return Err(DatabaseError("Failed to update app settings", operation="app_settings.upsert"))
        return Ok(enabled)


__all__ = [
    "AppSettingsRepository",
    "GenerationCountRepository",
    "GenerationStats",
    "ProfileRepository",
    "RoleRepository",
]
