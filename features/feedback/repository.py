"""Repository for stored feedback."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import DatabaseError
from core.utils.result import Err, Ok, Result

from .db_models import Feedback

logger = logging.getLogger(__name__)


class FeedbackRepository:
    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(
        self, *, message: str, email: str | None, rating: int | None, user_id: str | None
    ) -> Result[Feedback, DatabaseError]:
        entity = Feedback(message=message, email=email, rating=rating, user_id=user_id)
        self._session.add(entity)
        try:
            await self._session.flush()
        except SQLAlchemyError as exc:
            logger.error("Failed to store feedback: %s", exc)
            return Err(DatabaseError("Failed to store feedback", operation="feedback.insert"))
        return Ok(entity)


__all__ = ["FeedbackRepository"]
