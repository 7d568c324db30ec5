"""Habits and the daily completion cards built from them."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from ..services.ids import generate_id


class Habit(SQLModel, table=True):
    """A user-defined habit tracked on the daily card."""

    __tablename__: ClassVar[str] = "habit"

    id: str = Field(default_factory=generate_id, primary_key=True, max_length=32)
    user_id: str = Field(foreign_key="user.username", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=80)
    category: str = Field(default="custom", nullable=False, max_length=16)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )


class DailyCard(SQLModel, table=True):
    """The single completion record for one user on one calendar day.

    ``completed_habits``, ``total_habits`` and ``completion_pct`` are snapshots
    taken at save time and are never recomputed when habits change later.
    """

    __tablename__: ClassVar[str] = "daily_card"

    user_id: str = Field(foreign_key="user.username", primary_key=True)
    date: str = Field(primary_key=True, max_length=10)
    habit_checks: dict[str, bool] = Field(
        default_factory=dict, sa_column=Column(JSON, nullable=False)
    )
    sleep_hours: float = Field(default=0.0, nullable=False)
    notes: str = Field(default="", nullable=False)
    completed_habits: int = Field(default=0, nullable=False)
    total_habits: int = Field(default=0, nullable=False)
    completion_pct: int = Field(default=0, nullable=False)
