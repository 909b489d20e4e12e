"""Quota guard deciding whether a caller may consume one generation."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from core.utils.result import Err

from .repository import AppSettingsRepository, ProfileRepository

logger = logging.getLogger(__name__)

DAILY_LIMIT_REACHED = "daily limit reached"
QUOTA_UNVERIFIABLE = "quota unavailable"


@dataclass(frozen=True, slots=True)
class QuotaDecision:
    allowed: bool
    reason: str | None = None
    remaining: int | None = None
    unlimited: bool = False


class QuotaGuard:
    """Read-only quota check plus the post-success decrement."""

    def __init__(self, profiles: ProfileRepository, settings: AppSettingsRepository):
        self._profiles = profiles
        self._settings = settings

    async def unlimited_for_all(self) -> bool:
        flag = await self._settings.unlimited_generations_for_all()
        if isinstance(flag, Err):
            logger.warning("Unlimited generations flag unreadable, assuming disabled")
            return False
        return flag.value

    async def check_quota(self, user_id: str, *, email: str | None = None) -> QuotaDecision:
        """Return whether ``user_id`` may start a generation. Has no side effects on the counter."""

        if await self.unlimited_for_all():
            return QuotaDecision(allowed=True, unlimited=True)

        loaded = await self._profiles.ensure_profile(user_id, email)
        if isinstance(loaded, Err):
            logger.error("Could not verify remaining generations for %s: %s", user_id, loaded.error)
            return QuotaDecision(allowed=False, reason=QUOTA_UNVERIFIABLE)

        remaining = loaded.value.remaining_generations
        if remaining <= 0:
            logger.info("User %s has no generations left", user_id)
            return QuotaDecision(allowed=False, reason=DAILY_LIMIT_REACHED, remaining=remaining)

        return QuotaDecision(allowed=True, remaining=remaining)

    async def consume(self, user_id: str, decision: QuotaDecision) -> bool:
        """Decrement the counter after a successful generation.

        Skipped under the unlimited override. Failures are logged and reported
        as ``False``; the generation itself already succeeded.
        """

        if decision.unlimited:
            return False

        result = await self._profiles.decrement_remaining(user_id)
        if isinstance(result, Err):
            logger.warning("Quota decrement failed for %s: %s", user_id, result.error)
            return False
        if not result.value:
            logger.warning("Quota for %s was already exhausted at decrement time", user_id)
        return result.value


__all__ = ["DAILY_LIMIT_REACHED", "QUOTA_UNVERIFIABLE", "QuotaDecision", "QuotaGuard"]
