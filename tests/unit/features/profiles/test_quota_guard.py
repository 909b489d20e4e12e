import pytest

from core.exceptions import DatabaseError
from core.utils.result import Err, Ok
from features.profiles.db_models import Profile
from features.profiles.quota import DAILY_LIMIT_REACHED, QUOTA_UNVERIFIABLE, QuotaDecision, QuotaGuard
from features.profiles.repository import AppSettingsRepository, ProfileRepository
from infrastructure.db.sessions import session_scope


class _BrokenProfiles:
    async def ensure_profile(self, user_id, email=None):
        return Err(DatabaseError("down"))

    async def decrement_remaining(self, user_id):
        return Err(DatabaseError("down"))


class _Settings:
    def __init__(self, result):
        self.result = result

    async def unlimited_generations_for_all(self):
        return self.result


async def _guard_call(session_factory, method, *args, **kwargs):
    async with session_scope(session_factory) as session:
        guard = QuotaGuard(ProfileRepository(session), AppSettingsRepository(session))
        return await getattr(guard, method)(*args, **kwargs)


@pytest.mark.anyio
async def test_check_has_no_side_effects(session_factory):
    async with session_scope(session_factory) as session:
        session.add(Profile(id="u1", remaining_generations=3))

    decision = await _guard_call(session_factory, "check_quota", "u1")
    await _guard_call(session_factory, "check_quota", "u1")

    assert decision == QuotaDecision(allowed=True, remaining=3)
    async with session_scope(session_factory) as session:
        assert (await session.get(Profile, "u1")).remaining_generations == 3


@pytest.mark.anyio
async def test_zero_remaining_is_denied(session_factory):
    async with session_scope(session_factory) as session:
        session.add(Profile(id="u1", remaining_generations=0))

    decision = await _guard_call(session_factory, "check_quota", "u1")

    assert decision.allowed is False
    assert decision.reason == DAILY_LIMIT_REACHED


@pytest.mark.anyio
async def test_consume_never_goes_below_zero(session_factory):
    async with session_scope(session_factory) as session:
        session.add(Profile(id="u1", remaining_generations=1))
    decision = QuotaDecision(allowed=True, remaining=1)

    assert await _guard_call(session_factory, "consume", "u1", decision) is True
    assert await _guard_call(session_factory, "consume", "u1", decision) is False

    async with session_scope(session_factory) as session:
        assert (await session.get(Profile, "u1")).remaining_generations == 0


@pytest.mark.anyio
async def test_unlimited_decision_is_not_consumed(session_factory):
    async with session_scope(session_factory) as session:
        session.add(Profile(id="u1", remaining_generations=2))

    consumed = await _guard_call(session_factory, "consume", "u1", QuotaDecision(allowed=True, unlimited=True))

    assert consumed is False
    async with session_scope(session_factory) as session:
        assert (await session.get(Profile, "u1")).remaining_generations == 2


@pytest.mark.anyio
async def test_unreadable_profile_fails_closed():
    guard = QuotaGuard(_BrokenProfiles(), _Settings(Ok(False)))

    decision = await guard.check_quota("u1")

    assert decision == QuotaDecision(allowed=False, reason=QUOTA_UNVERIFIABLE)


@pytest.mark.anyio
async def test_unreadable_flag_counts_as_disabled():
    guard = QuotaGuard(_BrokenProfiles(), _Settings(Err(DatabaseError("down"))))

    assert await guard.unlimited_for_all() is False
    assert (await guard.check_quota("u1")).allowed is False


@pytest.mark.anyio
async def test_decrement_failure_is_reported_not_raised():
    guard = QuotaGuard(_BrokenProfiles(), _Settings(Ok(False)))

    assert await guard.consume("u1", QuotaDecision(allowed=True, remaining=2)) is False
