from datetime import date

import pytest

from core.exceptions import NotFoundError
from core.utils.result import Err, Ok
from features.profiles.repository import (
    AppSettingsRepository,
    GenerationCountRepository,
    ProfileRepository,
    RoleRepository,
)
from infrastructure.db.sessions import session_scope


@pytest.mark.anyio
async def test_ensure_profile_creates_free_plan_once(session_factory):
    async with session_scope(session_factory) as session:
        created = (await ProfileRepository(session).ensure_profile("u1", "a@example.com")).unwrap()
        assert (created.plan, created.daily_limit, created.remaining_generations) == ("free", 10, 10)

    async with session_scope(session_factory) as session:
        again = (await ProfileRepository(session).ensure_profile("u1")).unwrap()
        assert again.email == "a@example.com"


@pytest.mark.anyio
async def test_get_missing_profile_is_not_found(session_factory):
    async with session_scope(session_factory) as session:
        result = await ProfileRepository(session).get("missing")

    assert isinstance(result, Err)
    assert isinstance(result.error, NotFoundError)


@pytest.mark.anyio
async def test_set_plan_resets_remaining(session_factory):
    async with session_scope(session_factory) as session:
        repository = ProfileRepository(session)
        await repository.ensure_profile("u1")
        await repository.decrement_remaining("u1")
        profile = (await repository.set_plan("u1", plan="admin", daily_limit=9999)).unwrap()

    assert profile.remaining_generations == 9999


@pytest.mark.anyio
async def test_role_grant_is_idempotent(session_factory):
    async with session_scope(session_factory) as session:
        roles = RoleRepository(session)
        assert await roles.grant("u1", "admin") == Ok(True)
        assert await roles.grant("u1", "admin") == Ok(False)
        assert await roles.has_role("u1", "admin") == Ok(True)
        assert await roles.has_role("u2", "admin") == Ok(False)


@pytest.mark.anyio
async def test_generation_counts_accumulate_per_day(session_factory):
    async with session_scope(session_factory) as session:
        counts = GenerationCountRepository(session)
        await counts.increment("u1", date(2024, 5, 1))
        await counts.increment("u1", date(2024, 5, 2))
        assert await counts.increment("u1", date(2024, 5, 2)) == Ok(2)
        stats = (await counts.stats("u1", date(2024, 5, 2))).unwrap()

    assert (stats.total, stats.today) == (3, 2)


@pytest.mark.anyio
async def test_unlimited_flag_defaults_to_false(session_factory):
    async with session_scope(session_factory) as session:
        settings = AppSettingsRepository(session)
        assert await settings.unlimited_generations_for_all() == Ok(False)
        await settings.set_unlimited_generations_for_all(True)
        assert await settings.unlimited_generations_for_all() == Ok(True)
