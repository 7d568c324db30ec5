"""camelCase record shapes exchanged with storage adapters and exports.

Field names here are the interchange contract; SQL column names are internal.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

from ..constants import HabitCategory, MessageKind, Visibility, coerce_choice
from ..models import DailyCard, Habit, MediaLink, Message, Quote, Thought, User
from .habits import parse_sleep_hours


def _timestamp(value: datetime | None) -> str | None:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if not value:
        return datetime.now(timezone.utc)
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def _int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def user_to_record(user: User) -> dict[str, Any]:
    return {
        "username": user.username,
        "displayName": user.display_name,
        "createdAt": _timestamp(user.created_at),
    }


def habit_to_record(habit: Habit) -> dict[str, Any]:
    return {
        "id": habit.id,
        "name": habit.name,
        "category": habit.category,
        "createdAt": _timestamp(habit.created_at),
    }


def habit_from_record(record: Mapping[str, Any], *, user_id: str = "") -> Habit:
    # Older records used "type" for the category.
    category = record.get("category", record.get("type", HabitCategory.CUSTOM))
    return Habit(
        id=str(record["id"]),
        user_id=user_id,
        name=str(record["name"]),
        category=coerce_choice(HabitCategory, category),
        created_at=_parse_timestamp(record.get("createdAt")),
    )


def card_to_record(card: DailyCard) -> dict[str, Any]:
    return {
        "date": card.date,
        "habitChecks": dict(card.habit_checks or {}),
        "sleepHours": card.sleep_hours,
        "notes": card.notes,
        "completedHabits": card.completed_habits,
        "totalHabits": card.total_habits,
        "completionPct": card.completion_pct,
    }


def card_from_record(record: Mapping[str, Any], *, user_id: str = "") -> DailyCard:
    """Rebuild a stored card; snapshot counts are taken as stored, not recomputed."""

    checks = {str(k): bool(v) for k, v in (record.get("habitChecks") or {}).items()}
    return DailyCard(
        user_id=user_id,
        date=str(record["date"]),
        habit_checks=checks,
        sleep_hours=parse_sleep_hours(record.get("sleepHours")),
        notes=record.get("notes") or "",
        completed_habits=_int(record.get("completedHabits")),
        total_habits=_int(record.get("totalHabits")),
        completion_pct=_int(record.get("completionPct")),
    )


def thought_to_record(thought: Thought) -> dict[str, Any]:
    return {
        "id": thought.id,
        "text": thought.text,
        "visibility": thought.visibility,
        "date": thought.date,
        "createdAt": _timestamp(thought.created_at),
    }


def thought_from_record(record: Mapping[str, Any], *, user_id: str = "") -> Thought:
    return Thought(
        id=str(record["id"]),
        user_id=user_id,
        text=str(record["text"]),
        visibility=coerce_choice(Visibility, record.get("visibility", Visibility.PUBLIC)),
        date=str(record["date"]),
        created_at=_parse_timestamp(record.get("createdAt")),
    )


def quote_to_record(quote: Quote) -> dict[str, Any]:
    return {
        "id": quote.id,
        "text": quote.text,
        "author": quote.author,
        "date": quote.date,
        "createdAt": _timestamp(quote.created_at),
    }


def quote_from_record(record: Mapping[str, Any], *, user_id: str = "") -> Quote:
    return Quote(
        id=str(record["id"]),
        user_id=user_id,
        text=str(record["text"]),
        author=record.get("author") or "",
        date=str(record["date"]),
        created_at=_parse_timestamp(record.get("createdAt")),
    )


def media_link_to_record(link: MediaLink) -> dict[str, Any]:
    return {
        "id": link.id,
        "url": link.url,
        "title": link.title,
        "date": link.date,
        "createdAt": _timestamp(link.created_at),
    }


def media_link_from_record(record: Mapping[str, Any], *, user_id: str = "") -> MediaLink:
    url = str(record["url"])
    return MediaLink(
        id=str(record["id"]),
        user_id=user_id,
        url=url,
        title=record.get("title") or url,
        date=str(record["date"]),
        created_at=_parse_timestamp(record.get("createdAt")),
    )


def message_to_record(message: Message) -> dict[str, Any]:
    return {
        "id": message.id,
        "from": message.sender,
        "fromName": message.sender_name,
        "to": message.recipient,
        "text": message.text,
        "type": message.kind,
        "visibility": message.visibility,
        "date": message.date,
        "createdAt": _timestamp(message.created_at),
    }


def message_from_record(record: Mapping[str, Any]) -> Message:
    return Message(
        id=str(record["id"]),
        sender=str(record["from"]).lower(),
        sender_name=record.get("fromName") or "",
        recipient=str(record["to"]).lower(),
        text=str(record["text"]),
        kind=coerce_choice(MessageKind, record.get("type", MessageKind.MOTIVATION)),
        visibility=coerce_choice(Visibility, record.get("visibility", Visibility.PUBLIC)),
        date=str(record["date"]),
        created_at=_parse_timestamp(record.get("createdAt")),
    )


__all__ = [
    "card_from_record",
    "card_to_record",
    "habit_from_record",
    "habit_to_record",
    "media_link_from_record",
    "media_link_to_record",
    "message_from_record",
    "message_to_record",
    "quote_from_record",
    "quote_to_record",
    "thought_from_record",
    "thought_to_record",
    "user_to_record",
]
