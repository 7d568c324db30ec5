"""Per-user aggregation for the dashboard and the public profile."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from ..models import DailyCard, Habit, MediaLink, Message, Quote, Thought, User
from .dates import today as today_key
from .dates import to_key
from .habits import compute_longest_streak, compute_streak, find_card
from .journal import public_thoughts
from .messages import public_inbox

RECENT_CARDS = 7


@dataclass(slots=True)
class UserSnapshot:
    """Everything loaded for one user, passed explicitly into aggregations."""

    user: User
    habits: list[Habit] = field(default_factory=list)
    cards: list[DailyCard] = field(default_factory=list)
    thoughts: list[Thought] = field(default_factory=list)
    quotes: list[Quote] = field(default_factory=list)
    media_links: list[MediaLink] = field(default_factory=list)
    messages: list[Message] = field(default_factory=list)


@dataclass(slots=True)
class DashboardSummary:
    streak: int
    longest_streak: int
    today_pct: int
    habit_count: int
    days_tracked: int
    average_sleep: float
    recent_cards: list[DailyCard]


@dataclass(slots=True)
class PublicProfile:
    username: str
    display_name: str
    streak: int
    today_pct: int
    habit_names: list[str]
    thoughts: list[Thought]
    quotes: list[Quote]
    media_links: list[MediaLink]
    messages: list[Message]
    recent_cards: list[DailyCard]


def _resolve_today(value: date | str | None) -> str:
    if value is None:
        return today_key()
    return value if isinstance(value, str) else to_key(value)


def _recent(cards: list[DailyCard], limit: int = RECENT_CARDS) -> list[DailyCard]:
    return sorted(cards, key=lambda c: c.date, reverse=True)[:limit]


def _today_pct(cards: list[DailyCard], day: str) -> int:
    card = find_card(cards, day)
    return card.completion_pct if card else 0


def build_dashboard(snapshot: UserSnapshot, *, today: date | str | None = None) -> DashboardSummary:
    """Summarize a user's habits and card history as of ``today``."""

    day = _resolve_today(today)
    cards = snapshot.cards
    sleep_values = [card.sleep_hours for card in cards if card.sleep_hours > 0]
    average_sleep = round(sum(sleep_values) / len(sleep_values), 1) if sleep_values else 0.0
    return DashboardSummary(
        streak=compute_streak(cards, today=day),
        longest_streak=compute_longest_streak(cards),
        today_pct=_today_pct(cards, day),
        habit_count=len(snapshot.habits),
        days_tracked=len({card.date for card in cards}),
        average_sleep=average_sleep,
        recent_cards=_recent(cards),
    )


def build_public_profile(snapshot: UserSnapshot, *, today: date | str | None = None) -> PublicProfile:
    """Return what other users may see: private thoughts and messages are left out."""

    day = _resolve_today(today)
    user = snapshot.user
    return PublicProfile(
        username=user.username,
        display_name=user.display_name or user.username,
        streak=compute_streak(snapshot.cards, today=day),
        today_pct=_today_pct(snapshot.cards, day),
        habit_names=[habit.name for habit in snapshot.habits],
        thoughts=public_thoughts(snapshot.thoughts),
        quotes=list(snapshot.quotes),
        media_links=list(snapshot.media_links),
        messages=public_inbox(snapshot.messages, user.username),
        recent_cards=_recent(snapshot.cards),
    )


__all__ = [
    "DashboardSummary",
    "PublicProfile",
    "UserSnapshot",
    "build_dashboard",
    "build_public_profile",
]
