"""Fakes shared by unit and API tests."""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List

from botocore.exceptions import ClientError

from core.exceptions import StorageError, SynthesisError
from core.providers.tts_base import BaseTTSProvider, TTSRequest, TTSResult


def client_error(code: str, operation: str = "HeadBucket") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


class FakeTTSProvider(BaseTTSProvider):
    name = "fake"

    def __init__(self, audio: bytes = b"ID3fake-mp3-bytes", *, fail_status: int | None = None, delay: float = 0.0):
        self.audio = audio
        self.fail_status = fail_status
        self.delay = delay
        self.requests: List[TTSRequest] = []

    async def generate(self, request: TTSRequest) -> TTSResult:
        self.requests.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail_status is not None:
            raise SynthesisError(
                f"fake TTS request failed with status {self.fail_status}",
                provider=self.name,
                http_status=self.fail_status,
            )
        return TTSResult(audio_bytes=self.audio, provider=self.name, format="mp3", voice=request.voice)


class FakeEnhancer:
    def __init__(self, result: str | None = None):
        self.result = result
        self.calls: List[tuple[str, str, Any]] = []

    async def enhance(self, text: str, language_code: str, *, mode: Any = None) -> str | None:
        self.calls.append((text, language_code, mode))
        return self.result


class FakeStorageService:
    """In-memory stand-in for :class:`infrastructure.aws.storage.StorageService`."""

    def __init__(self, *, fail_upload: bool = False, upload_delay: float = 0.0):
        self.objects: Dict[str, bytes] = {}
        self.fail_upload = fail_upload
        self.upload_delay = upload_delay
        self.deleted: List[str] = []

    async def upload_audio(self, *, audio_bytes: bytes, path: str, file_extension: str = "mp3") -> str:
        if self.upload_delay:
            await asyncio.sleep(self.upload_delay)
        if self.fail_upload:
            raise StorageError("Audio upload failed", operation="upload")
        self.objects[path] = audio_bytes
        return self.public_url(path)

    async def copy_object(self, *, source_path: str, target_path: str) -> str:
        self.objects[target_path] = self.objects[source_path]
        return self.public_url(target_path)

    async def delete_object(self, path: str) -> None:
        self.deleted.append(path)
        self.objects.pop(path, None)

    def public_url(self, path: str) -> str:
        return f"https://storage.test/audio-files/{path}"


class FakeS3Client:
    """Synchronous boto3-like client recording calls."""

    def __init__(self, *, head_error: str | None = None, create_error: str | None = None):
        self.head_error = head_error
        self.create_error = create_error
        self.calls: List[tuple[str, Dict[str, Any]]] = []

    def head_bucket(self, **kwargs: Any) -> Dict[str, Any]:
        self.calls.append(("head_bucket", kwargs))
        if self.head_error:
            raise client_error(self.head_error, "HeadBucket")
        return {}

    def create_bucket(self, **kwargs: Any) -> Dict[str, Any]:
        self.calls.append(("create_bucket", kwargs))
        if self.create_error:
            raise client_error(self.create_error, "CreateBucket")
        return {}

    def put_object(self, **kwargs: Any) -> Dict[str, Any]:
        self.calls.append(("put_object", kwargs))
        return {}

    def copy_object(self, **kwargs: Any) -> Dict[str, Any]:
        self.calls.append(("copy_object", kwargs))
        return {}

    def delete_object(self, **kwargs: Any) -> Dict[str, Any]:
        self.calls.append(("delete_object", kwargs))
        return {}

    def operations(self) -> List[str]:
        return [name for name, _ in self.calls]


__all__ = [
    "FakeEnhancer",
    "FakeS3Client",
    "FakeStorageService",
    "FakeTTSProvider",
    "client_error",
]
