"""Habit service helpers: streaks, daily card scoring and card history upserts."""

from __future__ import annotations

import math
import re
from datetime import date, timedelta
from typing import Iterable, Mapping, Sequence

from ..constants import NAMAZ_PRESETS, HabitCategory, coerce_choice
from ..logging_config import get_logger
from ..models.habit import DailyCard, Habit
from .dates import offset_days, parse_key
from .dates import today as today_key

logger = get_logger("services.habits")

# Leading decimal number, the way a browser's parseFloat reads "7.5h".
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def compute_streak(cards: Iterable[DailyCard], *, today: date | str | None = None) -> int:
    """Return the run of consecutive days, ending today, with completion above 0%.

    Cards are walked newest first; the walk stops at the first card whose date
    is not the expected day or whose completion is 0. A missing card for today
    therefore yields 0. Cards sharing a date are not deduplicated here: the
    duplicate lands on a slot whose expected day has already moved back, so the
    walk stops at it.
    """

    ordered = sorted(cards, key=lambda card: card.date, reverse=True)
    if not ordered:
        return 0

    anchor = today if today is not None else today_key()
    streak = 0
    for i, card in enumerate(ordered):
        expected = offset_days(anchor, i)
        if card.date == expected and card.completion_pct > 0:
            streak += 1
        else:
            break
    return streak


def compute_longest_streak(cards: Iterable[DailyCard]) -> int:
    """Return the longest run of consecutive days with completion above 0%."""

    days = sorted({parse_key(card.date) for card in cards if card.completion_pct > 0})
    longest = 0
    run = 0
    last_day: date | None = None
    for d in days:
        if last_day is not None and d == last_day + timedelta(days=1):
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        last_day = d
    return longest


def completion_percentage(completed: int, total: int) -> int:
    """Integer percentage rounded half up; 0 when there is nothing to complete."""

    if total <= 0:
        return 0
    return (200 * completed + total) // (2 * total)


def parse_sleep_hours(raw) -> float:
    """Coerce self-reported sleep into a non-negative float, 0.0 when unreadable."""

    if raw is None or isinstance(raw, bool):
        return 0.0
    if isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError:
            return 0.0
    else:
        match = _FLOAT_PREFIX.match(str(raw))
        if not match:
            return 0.0
        value = float(match.group(1))
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def build_card(
    date: str,
    habits: Sequence[Habit],
    checks: Mapping[str, bool],
    sleep_hours=None,
    notes: str = "",
    *,
    user_id: str = "",
) -> DailyCard:
    """Score the checklist for ``date`` and return the card to persist.

    Only habits the user currently has are counted; checks for unknown ids are
    dropped and missing checks count as not done.
    """

    parse_key(date)
    habit_checks = {habit.id: bool(checks.get(habit.id, False)) for habit in habits}
    completed = sum(1 for done in habit_checks.values() if done)
    total = len(habits)
    card = DailyCard(
        user_id=user_id,
        date=date,
        habit_checks=habit_checks,
        sleep_hours=parse_sleep_hours(sleep_hours),
        notes=notes or "",
        completed_habits=completed,
        total_habits=total,
        completion_pct=completion_percentage(completed, total),
    )
    logger.debug(
        "Built daily card",
        extra={"date": date, "completed": completed, "total": total, "pct": card.completion_pct},
    )
    return card


def upsert_daily_card(history: Iterable[DailyCard], card: DailyCard) -> list[DailyCard]:
    """Replace any card sharing ``card.date`` and return the history newest first.

    The input is left untouched.
    """

    updated = [existing for existing in history if existing.date != card.date]
    updated.insert(0, card)
    updated.sort(key=lambda c: c.date, reverse=True)
    return updated


def find_card(cards: Iterable[DailyCard], date: str) -> DailyCard | None:
    """Return the card saved for ``date`` if there is one."""

    return next((card for card in cards if card.date == date), None)


def create_habit(name: str, category: str = HabitCategory.CUSTOM, *, user_id: str = "") -> Habit:
    """Build a new habit with a fresh id; blank names are rejected."""

    cleaned = (name or "").strip()
    if not cleaned:
        raise ValueError("Habit name is required")
    return Habit(user_id=user_id, name=cleaned, category=coerce_choice(HabitCategory, category))


def add_preset_habits(
    existing: Sequence[Habit],
    names: Iterable[str] = NAMAZ_PRESETS,
    *,
    user_id: str = "",
) -> list[Habit]:
    """Return new spiritual habits for preset names the user does not track yet."""

    taken = {habit.name.lower() for habit in existing}
    created: list[Habit] = []
    for name in names:
        if name.lower() in taken:
            continue
        created.append(create_habit(name, HabitCategory.SPIRITUAL, user_id=user_id))
        taken.add(name.lower())
    return created


def remove_habit(habits: Iterable[Habit], habit_id: str) -> list[Habit]:
    return [habit for habit in habits if habit.id != habit_id]


__all__ = [
    "add_preset_habits",
    "build_card",
    "completion_percentage",
    "compute_longest_streak",
    "compute_streak",
    "create_habit",
    "find_card",
    "parse_sleep_hours",
    "remove_habit",
    "upsert_daily_card",
]
