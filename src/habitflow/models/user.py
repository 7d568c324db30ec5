"""User model; credentials live with the external auth provider."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar

from sqlmodel import Field, SQLModel


class User(SQLModel, table=True):
    """A HabitFlow user identified by a lowercase username."""

    __tablename__: ClassVar[str] = "user"

    username: str = Field(primary_key=True, max_length=64)
    display_name: str = Field(default="", max_length=120)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
