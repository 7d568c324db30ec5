"""Journal entries: thoughts, quotes and saved media links."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar

from sqlmodel import Field, SQLModel

from ..services.ids import generate_id


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Thought(SQLModel, table=True):
    """A short journal note, public ones appear on the profile."""

    __tablename__: ClassVar[str] = "thought"

    id: str = Field(default_factory=generate_id, primary_key=True, max_length=32)
    user_id: str = Field(foreign_key="user.username", nullable=False, index=True)
    text: str = Field(nullable=False)
    visibility: str = Field(default="public", nullable=False, max_length=16)
    date: str = Field(nullable=False, max_length=10, index=True)
    created_at: datetime = Field(default_factory=_utcnow, nullable=False)


class Quote(SQLModel, table=True):
    __tablename__: ClassVar[str] = "quote"

    id: str = Field(default_factory=generate_id, primary_key=True, max_length=32)
    user_id: str = Field(foreign_key="user.username", nullable=False, index=True)
    text: str = Field(nullable=False)
    author: str = Field(default="", max_length=120)
    date: str = Field(nullable=False, max_length=10, index=True)
    created_at: datetime = Field(default_factory=_utcnow, nullable=False)


class MediaLink(SQLModel, table=True):
    __tablename__: ClassVar[str] = "media_link"

    id: str = Field(default_factory=generate_id, primary_key=True, max_length=32)
    user_id: str = Field(foreign_key="user.username", nullable=False, index=True)
    url: str = Field(nullable=False, max_length=2048)
    title: str = Field(default="", max_length=255)
    date: str = Field(nullable=False, max_length=10, index=True)
    created_at: datetime = Field(default_factory=_utcnow, nullable=False)
