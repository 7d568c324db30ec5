"""Messages exchanged between users."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar

from sqlmodel import Field, SQLModel

from ..services.ids import generate_id


class Message(SQLModel, table=True):
    """A motivational note from one user to another.

    Stored once; it shows in the sender's outbox and the recipient's inbox.
    """

    __tablename__: ClassVar[str] = "message"

    id: str = Field(default_factory=generate_id, primary_key=True, max_length=32)
    sender: str = Field(nullable=False, index=True, max_length=64)
    sender_name: str = Field(default="", max_length=120)
    recipient: str = Field(nullable=False, index=True, max_length=64)
    text: str = Field(nullable=False)
    kind: str = Field(default="motivation", nullable=False, max_length=16)
    visibility: str = Field(default="public", nullable=False, max_length=16)
    date: str = Field(nullable=False, max_length=10)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
