"""Messages between users and inbox/outbox views over them."""

from __future__ import annotations

from typing import Iterable

from ..constants import MessageKind, Visibility, coerce_choice
from ..models.message import Message
from .dates import today


def normalize_username(username: str) -> str:
    return (username or "").strip().lower()


def create_message(
    sender: str,
    recipient: str,
    text: str,
    kind: str = MessageKind.MOTIVATION,
    visibility: str = Visibility.PUBLIC,
    *,
    sender_name: str = "",
    date: str | None = None,
) -> Message:
    """Build a message from ``sender`` to ``recipient``.

    Raises ValueError for a blank recipient or text, and for messages to oneself.
    """

    to_user = normalize_username(recipient)
    from_user = normalize_username(sender)
    body = (text or "").strip()
    if not to_user:
        raise ValueError("Recipient is required")
    if not body:
        raise ValueError("Message text is required")
    if to_user == from_user:
        raise ValueError("Cannot send a message to yourself")
    return Message(
        sender=from_user,
        sender_name=sender_name or from_user,
        recipient=to_user,
        text=body,
        kind=coerce_choice(MessageKind, kind),
        visibility=coerce_choice(Visibility, visibility),
        date=date or today(),
    )


def inbox(messages: Iterable[Message], username: str) -> list[Message]:
    name = normalize_username(username)
    return [m for m in messages if m.recipient == name]


def outbox(messages: Iterable[Message], username: str) -> list[Message]:
    name = normalize_username(username)
    return [m for m in messages if m.sender == name]


def public_inbox(messages: Iterable[Message], username: str) -> list[Message]:
    """Received messages the sender allowed on the recipient's public profile."""

    return [m for m in inbox(messages, username) if m.visibility == Visibility.PUBLIC.value]


__all__ = ["create_message", "inbox", "normalize_username", "outbox", "public_inbox"]
