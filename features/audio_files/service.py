"""Audio history, deletion and guest adoption."""

from __future__ import annotations

import logging
import posixpath
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from config.storage import GUEST_AUDIO_PREFIX, USER_AUDIO_PREFIX
from core.exceptions import ConfigurationError, NotFoundError, StorageError
from core.utils.result import Err
from infrastructure.aws.storage import StorageService
from infrastructure.db.sessions import require_main_session_factory, session_scope

from .db_models import AudioFile
from .repository import AudioFileRepository
from .schemas import AudioFileResponse

logger = logging.getLogger(__name__)


def serialise_audio_file(entity: AudioFile) -> Dict[str, Any]:
    return AudioFileResponse.model_validate(entity).model_dump(mode="json")


def adopted_path(file_path: str, user_id: str) -> str:
    """Return the permanent storage path a guest object moves to."""

    return f"{USER_AUDIO_PREFIX}/{user_id}/{posixpath.basename(file_path)}"


class AudioFileService:
    """Service facade over :class:`AudioFileRepository` and object storage."""

    def __init__(
        self,
        *,
        session_factory: async_sessionmaker | None = None,
        storage_service_factory: Optional[Callable[[], StorageService]] = None,
    ) -> None:
        self._session_factory = session_factory
        self._storage_service_factory = storage_service_factory or StorageService

    def _sessions(self) -> async_sessionmaker:
        return self._session_factory or require_main_session_factory()

    def _storage(self) -> StorageService | None:
        try:
            return self._storage_service_factory()
        except ConfigurationError as exc:
            logger.warning("Object storage unavailable: %s", exc)
            return None

    async def list_history(self, user_id: str, *, limit: int = 50) -> List[Dict[str, Any]]:
        async with session_scope(self._sessions()) as session:
            result = await AudioFileRepository(session).list_for_user(user_id, limit=limit)
            return [serialise_audio_file(entity) for entity in result.unwrap()]

    async def list_all(self, *, limit: int = 50, offset: int = 0) -> List[Dict[str, Any]]:
        async with session_scope(self._sessions()) as session:
            result = await AudioFileRepository(session).list_all(limit=limit, offset=offset)
            return [serialise_audio_file(entity) for entity in result.unwrap()]

    async def delete(self, audio_id: str, *, owner_id: str | None = None) -> None:
        """Delete a record and its stored object.

        With ``owner_id`` set, records owned by someone else are reported as
        missing.
        """

        async with session_scope(self._sessions()) as session:
            repository = AudioFileRepository(session)
            entity = (await repository.get(audio_id)).unwrap()
            if owner_id is not None and entity.user_id != owner_id:
                raise NotFoundError(f"Audio file {audio_id} not found", resource="audio_file")
            file_path = entity.file_path
            (await repository.delete(audio_id)).unwrap()

        if file_path:
            storage = self._storage()
            if storage is None:
                logger.warning("Stored object %s left behind, storage not configured", file_path)
                return
            try:
                await storage.delete_object(file_path)
            except StorageError as exc:
                logger.warning("Failed to delete stored object %s: %s", file_path, exc)

        logger.info("Deleted audio file %s", audio_id)

    async def adopt_guest_files(self, session_id: str, user_id: str) -> int:
        """Reassign a guest session's temporary records to ``user_id``.

        Stored objects are copied from the guest prefix to the user's prefix
        before the rows are updated; the guest copies are removed after
        commit. No rows are inserted.
        """

        async with session_scope(self._sessions()) as session:
            repository = AudioFileRepository(session)
            listed = await repository.list_for_session(session_id)
            if isinstance(listed, Err):
                raise listed.error
            guest_files = list(listed.value)
            if not guest_files:
                return 0

            relocated, moved_paths = await self._relocate_objects(guest_files, user_id)
            adopted = (await repository.adopt_session_files(session_id, user_id, relocated=relocated)).unwrap()

        await self._remove_objects(moved_paths)
        logger.info("Adopted %s guest audio file(s) from session %s into user %s", adopted, session_id, user_id)
        return adopted

    async def _relocate_objects(
        self, guest_files: List[AudioFile], user_id: str
    ) -> tuple[Dict[str, tuple[str, str | None]], List[str]]:
        movable = [
            entity
            for entity in guest_files
            if entity.file_path and entity.file_path.startswith(f"{GUEST_AUDIO_PREFIX}/")
        ]
        if not movable:
            return {}, []

        storage = self._storage()
        if storage is None:
            return {}, []

        relocated: Dict[str, tuple[str, str | None]] = {}
        moved_paths: List[str] = []
        for entity in movable:
            target = adopted_path(entity.file_path, user_id)
            try:
                url = await storage.copy_object(source_path=entity.file_path, target_path=target)
            except StorageError as exc:
                logger.warning("Keeping guest object %s in place: %s", entity.file_path, exc)
                continue
            relocated[entity.id] = (url, target)
            moved_paths.append(entity.file_path)
        return relocated, moved_paths

    async def _remove_objects(self, paths: List[str]) -> None:
        if not paths:
            return
        storage = self._storage()
        if storage is None:
            return
        for path in paths:
            try:
                await storage.delete_object(path)
            except StorageError as exc:
                logger.warning("Failed to remove adopted guest object %s: %s", path, exc)


__all__ = ["AudioFileService", "adopted_path", "serialise_audio_file"]
