"""Journal builders for thoughts, quotes and media links."""

from __future__ import annotations

from typing import Iterable, TypeVar

from ..constants import Visibility, coerce_choice
from ..models.journal import MediaLink, Quote, Thought
from .dates import today

T = TypeVar("T", Thought, Quote, MediaLink)


def _required(value: str, label: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValueError(f"{label} is required")
    return cleaned


def create_thought(
    text: str, visibility: str = Visibility.PUBLIC, *, user_id: str = "", date: str | None = None
) -> Thought:
    return Thought(
        user_id=user_id,
        text=_required(text, "Thought text"),
        visibility=coerce_choice(Visibility, visibility),
        date=date or today(),
    )


def create_quote(text: str, author: str = "", *, user_id: str = "", date: str | None = None) -> Quote:
    return Quote(
        user_id=user_id,
        text=_required(text, "Quote text"),
        author=(author or "").strip(),
        date=date or today(),
    )


def create_media_link(
    url: str, title: str = "", *, user_id: str = "", date: str | None = None
) -> MediaLink:
    """Build a media link; a blank title falls back to the url itself."""

    cleaned_url = _required(url, "Media URL")
    return MediaLink(
        user_id=user_id,
        url=cleaned_url,
        title=(title or "").strip() or cleaned_url,
        date=date or today(),
    )


def prepend(items: Iterable[T], item: T) -> list[T]:
    """Return a new newest-first list with ``item`` at the front."""

    return [item, *items]


def remove_by_id(items: Iterable[T], item_id: str) -> list[T]:
    return [item for item in items if item.id != item_id]


def public_thoughts(thoughts: Iterable[Thought]) -> list[Thought]:
    return [t for t in thoughts if t.visibility == Visibility.PUBLIC.value]


__all__ = [
    "create_media_link",
    "create_quote",
    "create_thought",
    "prepend",
    "public_thoughts",
    "remove_by_id",
]
