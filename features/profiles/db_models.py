"""SQLAlchemy ORM models for profiles, roles, settings and usage counters."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import Boolean, Date, DateTime, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from config.generation import FREE_PLAN, FREE_PLAN_DAILY_LIMIT
from infrastructure.db.base import Base, utcnow


class Profile(Base):
    """Plan and quota counters for an authenticated user."""

    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    plan: Mapped[str] = mapped_column(String(32), default=FREE_PLAN, nullable=False)
    daily_limit: Mapped[int] = mapped_column(Integer, default=FREE_PLAN_DAILY_LIMIT, nullable=False)
    remaining_generations: Mapped[int] = mapped_column(
        Integer, default=FREE_PLAN_DAILY_LIMIT, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
    )


class UserRole(Base):
    __tablename__ = "user_roles"
    __table_args__ = (UniqueConstraint("user_id", "role", name="uq_user_roles_user_role"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    role: Mapped[str] = mapped_column(String(32), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )


class AppSettings(Base):
    """Single-row table of administrator controlled switches."""

    __tablename__ = "app_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    unlimited_generations_for_all: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
    )


class GenerationCount(Base):
    __tablename__ = "generation_counts"
    __table_args__ = (UniqueConstraint("user_id", "date", name="uq_generation_counts_user_date"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    date: Mapped[date] = mapped_column(Date, nullable=False)
    count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)


SETTINGS_ROW_ID = 1

__all__ = ["AppSettings", "GenerationCount", "Profile", "SETTINGS_ROW_ID", "UserRole"]
