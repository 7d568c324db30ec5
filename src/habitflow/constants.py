"""Closed enumerations and preset values shared across the app."""

from __future__ import annotations

from enum import Enum


class HabitCategory(str, Enum):
    SPIRITUAL = "spiritual"
    HEALTH = "health"
    PRODUCTIVITY = "productivity"
    CUSTOM = "custom"


class Visibility(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"


class MessageKind(str, Enum):
    MOTIVATION = "motivation"
    REMINDER = "reminder"
    FEEDBACK = "feedback"


# Daily prayers offered as one-click spiritual habits.
NAMAZ_PRESETS = ("Fajr", "Zuhr", "Asr", "Maghrib", "Isha")


def coerce_choice(enum_cls: type[Enum], value) -> str:
    """Return the string value of ``value`` if it belongs to ``enum_cls``.

    Raises ValueError for anything outside the enumeration.
    """

    if isinstance(value, enum_cls):
        return value.value
    normalized = str(value or "").strip().lower()
    try:
        return enum_cls(normalized).value
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValueError(f"Invalid {enum_cls.__name__}: {value!r} (expected one of {allowed})") from None


__all__ = ["HabitCategory", "MessageKind", "NAMAZ_PRESETS", "Visibility", "coerce_choice"]
