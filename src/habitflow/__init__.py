"""HabitFlow habit tracking core."""

from __future__ import annotations

from .config import BaseConfig, DevConfig, TestConfig
from .services.dates import format_date, offset_days, today
from .services.habits import build_card, compute_longest_streak, compute_streak, upsert_daily_card
from .services.ids import generate_id

__all__ = [
    "BaseConfig",
    "DevConfig",
    "TestConfig",
    "build_card",
    "compute_longest_streak",
    "compute_streak",
    "format_date",
    "generate_id",
    "offset_days",
    "today",
    "upsert_daily_card",
]
