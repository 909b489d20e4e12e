"""Audio persistence step: deliver the audio and record its metadata."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from sqlalchemy.ext.asyncio import async_sessionmaker

from config.generation import BASE64_CHUNK_SIZE, STORAGE_FAILURE_MESSAGE, TITLE_MAX_LENGTH
from config.storage import (
    AUDIO_DELIVERY,
    GUEST_AUDIO_PREFIX,
    INLINE_FALLBACK_ON_UPLOAD_ERROR,
    USER_AUDIO_PREFIX,
)
from core.exceptions import ConfigurationError, DatabaseError, StorageError
from core.providers.tts_base import TTSResult
from features.audio_files.repository import AudioFileRepository, NewAudioFile
from infrastructure.aws.storage import StorageService, build_audio_path
from infrastructure.db.sessions import require_main_session_factory, session_scope

from .encoding import to_data_url
from .models import Caller, PersistedAudio

logger = logging.getLogger(__name__)

INLINE = "inline"
STORAGE = "storage"


def make_title(text: str, max_length: int = TITLE_MAX_LENGTH) -> str:
    text = " ".join(text.split())
    if len(text) <= max_length:
        return text
    return f"{text[:max_length]}..."


class AudioPersister:
    """Store generated audio inline or in object storage, then save the record.

    A record that cannot be written fails the whole step; an object already
    uploaded for it is removed again.
    """

    def __init__(
        self,
        *,
        session_factory: async_sessionmaker | None = None,
        storage_service_factory: Callable[[], StorageService] = StorageService,
        delivery: str = AUDIO_DELIVERY,
        inline_fallback: bool = INLINE_FALLBACK_ON_UPLOAD_ERROR,
        chunk_size: int = BASE64_CHUNK_SIZE,
    ) -> None:
        self._session_factory = session_factory
        self._storage_service_factory = storage_service_factory
        self._delivery = delivery
        self._inline_fallback = inline_fallback
        self._chunk_size = chunk_size
        self._storage: StorageService | None = None

    def _sessions(self) -> async_sessionmaker:
        return self._session_factory or require_main_session_factory()

    def _get_storage(self) -> StorageService:
        if self._storage is None:
            self._storage = self._storage_service_factory()
        return self._storage

    async def persist(
        self,
        audio: TTSResult,
        *,
        caller: Caller,
        text: str,
        language: str,
        voice_name: str,
    ) -> PersistedAudio:
        audio_url, file_path, delivery = await self._deliver(audio, caller)

        record = NewAudioFile(
            title=make_title(text),
            description=text,
            language=language,
            voice_name=voice_name,
            audio_url=audio_url,
            file_path=file_path,
            user_id=caller.user_id,
            session_id=None if caller.user_id else caller.session_id,
            is_temporary=caller.is_guest,
        )

        try:
            async with session_scope(self._sessions()) as session:
                entity = (await AudioFileRepository(session).create(record)).unwrap()
                record_id = entity.id
        except (ConfigurationError, DatabaseError) as exc:
            logger.error("Audio metadata write failed for %s: %s", caller.label, exc)
            await self._discard_upload(file_path)
            raise StorageError(STORAGE_FAILURE_MESSAGE, operation="metadata", original_error=exc) from exc
        except asyncio.CancelledError:
            logger.warning("Generation for %s cancelled before its record was saved", caller.label)
            await self._discard_upload(file_path)
            raise

        logger.info("Persisted audio record %s (%s) for %s", record_id, delivery, caller.label)
        return PersistedAudio(audio_url=audio_url, record_id=record_id, delivery=delivery, file_path=file_path)

    async def _deliver(self, audio: TTSResult, caller: Caller) -> tuple[str, str | None, str]:
        if self._delivery != STORAGE:
            return self._inline(audio), None, INLINE

        prefix = GUEST_AUDIO_PREFIX if caller.is_guest else USER_AUDIO_PREFIX
        path = build_audio_path(prefix, caller.owner_id, extension=audio.format)
        try:
            storage = self._get_storage()
            url = await storage.upload_audio(audio_bytes=audio.audio_bytes, path=path, file_extension=audio.format)
        except (ConfigurationError, StorageError) as exc:
            if not self._inline_fallback:
                logger.error("Audio upload failed for %s: %s", caller.label, exc)
                raise StorageError(STORAGE_FAILURE_MESSAGE, operation="upload", original_error=exc) from exc
            logger.warning("Audio upload failed for %s, delivering inline: %s", caller.label, exc)
            return self._inline(audio), None, INLINE
        return url, path, STORAGE

    def _inline(self, audio: TTSResult) -> str:
        return to_data_url(audio.audio_bytes, audio.content_type, chunk_size=self._chunk_size)

    async def _discard_upload(self, file_path: str | None) -> None:
        if not file_path:
            return
        try:
            await self._get_storage().delete_object(file_path)
        except (ConfigurationError, StorageError) as exc:
            logger.warning("Orphaned audio object %s could not be removed: %s", file_path, exc)


__all__ = ["AudioPersister", "INLINE", "STORAGE", "make_title"]
