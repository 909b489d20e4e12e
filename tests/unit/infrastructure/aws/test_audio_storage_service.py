import asyncio
from datetime import UTC, datetime

import pytest

from core.exceptions import ConfigurationError, StorageError
from infrastructure.aws.storage import StorageService, build_audio_path
from tests.helpers import FakeS3Client


def _service(client: FakeS3Client, **kwargs) -> StorageService:
    return StorageService(bucket_name="audio-files", s3_client=client, **kwargs)


@pytest.mark.anyio
async def test_existing_bucket_is_not_recreated():
    client = FakeS3Client()
    service = _service(client)

    await service.ensure_bucket()
    await service.ensure_bucket()

    assert client.operations() == ["head_bucket"]


@pytest.mark.anyio
async def test_missing_bucket_is_created():
    client = FakeS3Client(head_error="404")

    await _service(client).ensure_bucket()

    assert client.operations() == ["head_bucket", "create_bucket"]


@pytest.mark.anyio
@pytest.mark.parametrize("code", ["BucketAlreadyOwnedByYou", "BucketAlreadyExists"])
async def test_bucket_creation_race_is_tolerated(code):
    client = FakeS3Client(head_error="NoSuchBucket", create_error=code)
    service = _service(client)

    await service.ensure_bucket()
    await service.ensure_bucket()

    assert client.operations() == ["head_bucket", "create_bucket"]


@pytest.mark.anyio
async def test_concurrent_callers_check_bucket_once():
    client = FakeS3Client(head_error="404")
    service = _service(client)

    await asyncio.gather(*(service.ensure_bucket() for _ in range(5)))

    assert client.operations() == ["head_bucket", "create_bucket"]


@pytest.mark.anyio
async def test_access_denied_is_a_storage_error():
    client = FakeS3Client(head_error="AccessDenied")

    with pytest.raises(StorageError):
        await _service(client).ensure_bucket()


@pytest.mark.anyio
async def test_upload_returns_public_url():
    client = FakeS3Client()
    service = _service(client, public_base_url="https://ref.supabase.co/storage/v1/object/public")

    url = await service.upload_audio(audio_bytes=b"mp3", path="audio/user-1/audio_1.mp3")

    assert url == "https://ref.supabase.co/storage/v1/object/public/audio-files/audio/user-1/audio_1.mp3"
    put = dict(client.calls)["put_object"]
    assert put["ContentType"] == "audio/mpeg"
    assert put["Key"] == "audio/user-1/audio_1.mp3"


@pytest.mark.anyio
async def test_empty_upload_is_rejected():
    with pytest.raises(StorageError):
        await _service(FakeS3Client()).upload_audio(audio_bytes=b"", path="audio/x.mp3")


def test_missing_client_is_a_configuration_error(monkeypatch):
    monkeypatch.setattr("infrastructure.aws.storage.get_s3_client", lambda: None)

    with pytest.raises(ConfigurationError):
        StorageService(bucket_name="audio-files")


def test_build_audio_path_layout():
    now = datetime(2024, 1, 1, tzinfo=UTC)

    path = build_audio_path("temp", "session-9", now=now)

    prefix, owner, name = path.split("/")
    assert (prefix, owner) == ("temp", "session-9")
    assert name.startswith(f"audio_{int(now.timestamp() * 1000)}_")
    assert name.endswith(".mp3")
