import pytest

from core.exceptions import NotFoundError
from core.utils.result import Ok
from features.audio_files.repository import AudioFileRepository, NewAudioFile
from infrastructure.db.sessions import session_scope


def _record(**overrides):
    values = dict(
        title="Headphones",
        description="Great headphones",
        language="en-US",
        voice_name="alloy",
        audio_url="https://storage.test/a.mp3",
    )
    values.update(overrides)
    return NewAudioFile(**values)


@pytest.mark.anyio
async def test_history_excludes_temporary_and_foreign_records(session_factory):
    async with session_scope(session_factory) as session:
        repository = AudioFileRepository(session)
        mine = (await repository.create(_record(user_id="u1"))).unwrap()
        await repository.create(_record(user_id="u2"))
        await repository.create(_record(session_id="guest-1", is_temporary=True))

    async with session_scope(session_factory) as session:
        history = (await AudioFileRepository(session).list_for_user("u1")).unwrap()

    assert [entity.id for entity in history] == [mine.id]


@pytest.mark.anyio
async def test_delete_and_get(session_factory):
    async with session_scope(session_factory) as session:
        created = (await AudioFileRepository(session).create(_record(user_id="u1"))).unwrap()

    async with session_scope(session_factory) as session:
        repository = AudioFileRepository(session)
        assert await repository.delete(created.id) == Ok(True)
        assert await repository.delete(created.id) == Ok(False)
        missing = await repository.get(created.id)

    assert isinstance(missing.error, NotFoundError)


@pytest.mark.anyio
async def test_list_all_pages(session_factory):
    async with session_scope(session_factory) as session:
        repository = AudioFileRepository(session)
        for index in range(3):
            await repository.create(_record(user_id=f"u{index}"))

    async with session_scope(session_factory) as session:
        page = (await AudioFileRepository(session).list_all(limit=2, offset=2)).unwrap()

    assert len(page) == 1
