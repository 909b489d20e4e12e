"""Profile lifecycle: admin reconciliation, session start and usage stats."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Dict, Iterable

from sqlalchemy.ext.asyncio import async_sessionmaker

from config.generation import ADMIN_DAILY_LIMIT, ADMIN_EMAILS, ADMIN_PLAN
from core.exceptions import ServiceError
from core.utils.result import Err
from features.audio_files.service import AudioFileService
from infrastructure.db.sessions import require_main_session_factory, session_scope

from .repository import GenerationCountRepository, ProfileRepository, RoleRepository

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"


@dataclass(slots=True)
class SessionStartResult:
    user_id: str
    plan: str
    daily_limit: int
    remaining_generations: int
    is_admin: bool
    adopted_files: int = 0
    warnings: list[str] = field(default_factory=list)


class ProfileService:
    def __init__(
        self,
        *,
        session_factory: async_sessionmaker | None = None,
        audio_file_service: AudioFileService | None = None,
        admin_emails: Iterable[str] | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._audio_files = audio_file_service or AudioFileService(session_factory=session_factory)
        self._admin_emails = frozenset(
            email.lower() for email in (admin_emails if admin_emails is not None else ADMIN_EMAILS)
        )

    def _sessions(self) -> async_sessionmaker:
        return self._session_factory or require_main_session_factory()

    async def reconcile_admin_role(self, email: str | None, user_id: str) -> bool:
        """Grant the admin role and plan to configured admin emails.

        Idempotent; returns whether the caller is an administrator afterwards.
        Profile reads never call this.
        """

        async with session_scope(self._sessions()) as session:
            roles = RoleRepository(session)
            if not email or email.lower() not in self._admin_emails:
                return (await roles.has_role(user_id, ADMIN_ROLE)).unwrap()

            granted = (await roles.grant(user_id, ADMIN_ROLE)).unwrap()
            profiles = ProfileRepository(session)
            profile = (await profiles.ensure_profile(user_id, email)).unwrap()
            if profile.plan != ADMIN_PLAN or profile.daily_limit != ADMIN_DAILY_LIMIT:
                (await profiles.set_plan(user_id, plan=ADMIN_PLAN, daily_limit=ADMIN_DAILY_LIMIT)).unwrap()
                logger.info("Upgraded %s to the admin plan", user_id)
            if granted:
                logger.info("Granted admin role to %s", user_id)
            return True

    async def is_admin(self, user_id: str) -> bool:
        async with session_scope(self._sessions()) as session:
            return (await RoleRepository(session).has_role(user_id, ADMIN_ROLE)).unwrap()

    async def start_session(
        self, *, user_id: str, email: str | None, guest_session_id: str | None = None
    ) -> SessionStartResult:
        """Run the once-per-login steps for an authenticated caller."""

        is_admin = await self.reconcile_admin_role(email, user_id)

        warnings: list[str] = []
        adopted = 0
        if guest_session_id:
            try:
                adopted = await self._audio_files.adopt_guest_files(guest_session_id, user_id)
            except ServiceError as exc:
                logger.warning("Guest adoption for session %s failed: %s", guest_session_id, exc)
                warnings.append("guest_files_not_adopted")

        async with session_scope(self._sessions()) as session:
            profile = (await ProfileRepository(session).ensure_profile(user_id, email)).unwrap()
            return SessionStartResult(
                user_id=user_id,
                plan=profile.plan,
                daily_limit=profile.daily_limit,
                remaining_generations=profile.remaining_generations,
                is_admin=is_admin,
                adopted_files=adopted,
                warnings=warnings,
            )

    async def get_stats(self, user_id: str, *, email: str | None = None) -> Dict[str, Any]:
        today = datetime.now(UTC).date()
        async with session_scope(self._sessions()) as session:
            profile = (await ProfileRepository(session).ensure_profile(user_id, email)).unwrap()
            stats = await GenerationCountRepository(session).stats(user_id, today)
            if isinstance(stats, Err):
                logger.warning("Generation stats unavailable for %s: %s", user_id, stats.error)
                total, today_count = 0, 0
            else:
                total, today_count = stats.value.total, stats.value.today
            return {
                "plan": profile.plan,
                "daily_limit": profile.daily_limit,
                "remaining_generations": profile.remaining_generations,
                "total": total,
                "today": today_count,
            }


__all__ = ["ADMIN_ROLE", "ProfileService", "SessionStartResult"]
