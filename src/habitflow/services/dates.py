"""Canonical date keys (``YYYY-MM-DD``) and display labels."""

from __future__ import annotations

from datetime import date, timedelta

# Fixed English labels so rendering never depends on the process locale.
_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def to_key(value: date) -> str:
    """Return the canonical key for a calendar date."""

    return value.isoformat()


def parse_key(key: str) -> date:
    """Parse a canonical key into a calendar date.

    Raises ValueError when the key is not a zero-padded ``YYYY-MM-DD`` date.
    """

    if not isinstance(key, str) or len(key) != 10:
        raise ValueError(f"Invalid date key: {key!r}")
    parsed = date.fromisoformat(key)
    # fromisoformat also takes week dates such as 2024-W03-1
    if to_key(parsed) != key:
        raise ValueError(f"Invalid date key: {key!r}")
    return parsed


def today() -> str:
    """Canonical key for the current local calendar day."""

    return to_key(date.today())


def format_date(key: str) -> str:
    """Render a key as ``Mon, Jan 15, 2024``.

    The key is read as a calendar date, never as an instant, so the label is
    the same whatever the host timezone or time of day.
    """

    day = parse_key(key)
    return f"{_WEEKDAYS[day.weekday()]}, {_MONTHS[day.month - 1]} {day.day}, {day.year}"


def offset_days(base: date | str, n: int) -> str:
    """Return the key for ``base`` shifted back by ``n`` days."""

    if n < 0:
        raise ValueError("offset must be non-negative")
    base_day = parse_key(base) if isinstance(base, str) else base
    return to_key(base_day - timedelta(days=n))


__all__ = ["format_date", "offset_days", "parse_key", "to_key", "today"]
