"""Repository for audio record persistence.

Methods return :class:`core.utils.result.Ok` / :class:`Err` values; this
module is the only place that touches the ``audio_files`` ORM model.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Sequence

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import DatabaseError, NotFoundError
from core.utils.result import Err, Ok, Result

from .db_models import AudioFile

logger = logging.getLogger(__name__)

@dataclass(slots=True)
class NewAudioFile:
    title: str
    description: str
    language: str
    voice_name: str
    audio_url: str
    file_path: str | None = None
    user_id: str | None = None
    session_id: str | None = None
    is_temporary: bool = False


class AudioFileRepository:
    """Data access for the ``audio_files`` table. Never commits."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(self, record: NewAudioFile) -> Result[AudioFile, DatabaseError]:
        entity = AudioFile(
            user_id=record.user_id,
            session_id=record.session_id,
            title=record.title,
            description=record.description,
            language=record.language,
            voice_name=record.voice_name,
            audio_url=record.audio_url,
            file_path=record.file_path,
            is_temporary=record.is_temporary,
        )
        self._session.add(entity)
        try:
            await self._session.flush()
        except SQLAlchemyError as exc:
            logger.error("Failed to insert audio record: %s", exc)
            return Err(DatabaseError("Failed to save audio record", operation="audio_files.insert"))
        return Ok(entity)

    async def get(self, audio_id: str) -> Result[AudioFile, Exception]:
        try:
            entity = await self._session.get(AudioFile, audio_id)
        except SQLAlchemyError as exc:
            logger.error("Failed to load audio record %s: %s", audio_id, exc)
            return Err(DatabaseError("Failed to load audio record", operation="audio_files.get"))
        if entity is None:
            return Err(NotFoundError(f"Audio file {audio_id} not found", resource="audio_file"))
        return Ok(entity)

    async def list_for_user(self, user_id: str, *, limit: int = 50) -> Result[Sequence[AudioFile], DatabaseError]:
        """Return the user's permanent records, newest first."""

        query = (
            select(AudioFile)
            .where(AudioFile.user_id == user_id, AudioFile.is_temporary.is_(False))
            .order_by(AudioFile.created_at.desc())
            .limit(limit)
        )
        return await self._fetch(query, operation="audio_files.list_for_user")

    async def list_for_session(self, session_id: str) -> Result[Sequence[AudioFile], DatabaseError]:
        query = (
            select(AudioFile)
            .where(AudioFile.session_id == session_id, AudioFile.is_temporary.is_(True))
            .order_by(AudioFile.created_at.asc())
        )
        return await self._fetch(query, operation="audio_files.list_for_session")

    async def list_all(self, *, limit: int = 50, offset: int = 0) -> Result[Sequence[AudioFile], DatabaseError]:
        query = select(AudioFile).order_by(AudioFile.created_at.desc()).limit(limit).offset(offset)
        return await self._fetch(query, operation="audio_files.list_all")

    async def delete(self, audio_id: str) -> Result[bool, DatabaseError]:
        try:
            result = await self._session.execute(delete(AudioFile).where(AudioFile.id == audio_id))
        except SQLAlchemyError as exc:
            logger.error("Failed to delete audio record %s: %s", audio_id, exc)
            return Err(DatabaseError("Failed to delete audio record", operation="audio_files.delete"))
        return Ok(result.rowcount > 0)

    async def adopt_session_files(
        self,
        session_id: str,
        user_id: str,
        *,
        relocated: Mapping[str, tuple[str, str | None]] | None = None,
    ) -> Result[int, DatabaseError]:
        """Transfer a guest session's temporary records to ``user_id`` in place.

        ``relocated`` maps record ids to the new ``(audio_url, file_path)`` of
        objects that were moved to the user's prefix.
        """

        listed = await self.list_for_session(session_id)
        if isinstance(listed, Err):
            return listed

        adopted = 0
        for entity in listed.value:
            if relocated and entity.id in relocated:
                entity.audio_url, entity.file_path = relocated[entity.id]
            entity.user_id = user_id
            entity.session_id = None
            entity.is_temporary = False
            adopted += 1

        try:
            await self._session.flush()
        except SQLAlchemyError as exc:
            logger.error("Failed to adopt session %s files: %s", session_id, exc)
            return Err(DatabaseError("Failed to adopt guest files", operation="audio_files.adopt"))
        return Ok(adopted)

    async def _fetch(self, query, *, operation: str) -> Result[Sequence[AudioFile], DatabaseError]:
        try:
            result = await self._session.execute(query)
        except SQLAlchemyError as exc:
            logger.error("Audio query %s failed: %s", operation, exc)
            return Err(DatabaseError("Failed to load audio records", operation=operation))
        return Ok(result.scalars().all())


__all__ = ["AudioFileRepository", "NewAudioFile"]
