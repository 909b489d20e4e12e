"""Transaction boundaries of ``session_scope`` against the SQLite schema."""

from __future__ import annotations

import pytest
from sqlalchemy import func, select

from core.exceptions import DatabaseError
from features.audio_files.db_models import AudioFile
from features.profiles.db_models import Profile
from infrastructure.db.sessions import session_scope


def _audio(user_id: str = "user-1") -> AudioFile:
    return AudioFile(
        user_id=user_id,
        title="Espresso machine",
        description="Espresso machine with a steam wand",
        language="en-US",
        voice_name="alloy",
        audio_url="data:audio/mp3;base64,SUQz",
    )


async def _count(session_factory, model) -> int:
    async with session_scope(session_factory) as session:
        return (await session.execute(select(func.count()).select_from(model))).scalar_one()


class _Abort(Exception):
    pass


@pytest.mark.anyio
async def test_profile_and_audio_commit_together(session_factory):
    async with session_scope(session_factory) as session:
        session.add(Profile(id="user-1", email="user@example.com", remaining_generations=3))
        session.add(_audio())

    assert await _count(session_factory, Profile) == 1
    assert await _count(session_factory, AudioFile) == 1


@pytest.mark.anyio
async def test_error_inside_scope_discards_pending_audio_record(session_factory):
    with pytest.raises(_Abort):
        async with session_scope(session_factory) as session:
            session.add(_audio())
            await session.flush()
            raise _Abort()

    assert await _count(session_factory, AudioFile) == 0


@pytest.mark.anyio
async def test_duplicate_profile_surfaces_as_database_error(session_factory):
    async with session_scope(session_factory) as session:
        session.add(Profile(id="user-1"))

    with pytest.raises(DatabaseError) as exc_info:
        async with session_scope(session_factory) as session:
            session.add(_audio())
            session.add(Profile(id="user-1"))

    assert exc_info.value.operation == "transaction"
    assert await _count(session_factory, AudioFile) == 0
    assert await _count(session_factory, Profile) == 1
