import pytest
from sqlalchemy import func, select

from features.audio_files.db_models import AudioFile
from features.audio_files.repository import AudioFileRepository, NewAudioFile
from features.audio_files.service import AudioFileService, adopted_path
from infrastructure.db.sessions import session_scope
from tests.helpers import FakeStorageService


async def _seed_guest_files(session_factory, storage):
    paths = ["temp/guest-1/audio_1_a.mp3", "temp/guest-1/audio_2_b.mp3"]
    async with session_scope(session_factory) as session:
        repository = AudioFileRepository(session)
        for path in paths:
            storage.objects[path] = b"audio"
            await repository.create(
                NewAudioFile(
                    title="Guest audio",
                    description="Guest audio",
                    language="en-US",
                    voice_name="alloy",
                    audio_url=storage.public_url(path),
                    file_path=path,
                    session_id="guest-1",
                    is_temporary=True,
                )
            )
        await repository.create(
            NewAudioFile(
                title="Inline guest audio",
                description="Inline guest audio",
                language="en-US",
                voice_name="alloy",
                audio_url="data:audio/mp3;base64,AAAA",
                session_id="guest-1",
                is_temporary=True,
            )
        )
    return paths


def test_adopted_path_moves_to_user_prefix():
    assert adopted_path("temp/guest-1/audio_1_a.mp3", "u1") == "audio/u1/audio_1_a.mp3"


@pytest.mark.anyio
async def test_adoption_updates_rows_in_place_and_moves_objects(session_factory):
    storage = FakeStorageService()
    guest_paths = await _seed_guest_files(session_factory, storage)
    service = AudioFileService(session_factory=session_factory, storage_service_factory=lambda: storage)

    adopted = await service.adopt_guest_files("guest-1", "u1")

    assert adopted == 3
    async with session_scope(session_factory) as session:
        total = (await session.execute(select(func.count()).select_from(AudioFile))).scalar_one()
        rows = (await session.execute(select(AudioFile))).scalars().all()
    assert total == 3
    assert all(row.user_id == "u1" and row.session_id is None and not row.is_temporary for row in rows)

    stored = sorted(row.file_path for row in rows if row.file_path)
    assert stored == ["audio/u1/audio_1_a.mp3", "audio/u1/audio_2_b.mp3"]
    assert sorted(storage.deleted) == guest_paths
    assert set(storage.objects) == set(stored)
    assert all(row.audio_url == storage.public_url(row.file_path) for row in rows if row.file_path)


@pytest.mark.anyio
async def test_second_adoption_is_a_no_op(session_factory):
    storage = FakeStorageService()
    await _seed_guest_files(session_factory, storage)
    service = AudioFileService(session_factory=session_factory, storage_service_factory=lambda: storage)

    await service.adopt_guest_files("guest-1", "u1")

    assert await service.adopt_guest_files("guest-1", "u1") == 0
    assert len(await service.list_history("u1")) == 3


@pytest.mark.anyio
async def test_delete_checks_owner_and_removes_object(session_factory):
    from core.exceptions import NotFoundError

    storage = FakeStorageService()
    await _seed_guest_files(session_factory, storage)
    service = AudioFileService(session_factory=session_factory, storage_service_factory=lambda: storage)
    await service.adopt_guest_files("guest-1", "u1")
    target = next(item for item in await service.list_history("u1") if item["file_path"])

    with pytest.raises(NotFoundError):
        await service.delete(target["id"], owner_id="intruder")

    await service.delete(target["id"], owner_id="u1")

    assert target["file_path"] in storage.deleted
    assert len(await service.list_history("u1")) == 2
