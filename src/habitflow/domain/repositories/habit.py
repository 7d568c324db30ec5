"""Habit and daily card repository protocols."""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from ...models.habit import DailyCard, Habit


class HabitRepository(Protocol):
    """Repository for a user's habits."""

    def get_by_id(self, habit_id: str, *, user_id: str) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        ...

    def list_all(self, *, user_id: str) -> list[Habit]:
        """List habits in creation order."""
        ...

    def create(self, habit: Habit, *, user_id: str) -> Habit:
        """Create a new habit."""
        ...

    def create_many(self, habits: list[Habit], *, user_id: str) -> list[Habit]:
        """Create several habits in one transaction."""
        ...

    def delete(self, habit_id: str, *, user_id: str) -> bool:
        """Delete a habit by ID; False when it did not exist."""
        ...


class DailyCardRepository(Protocol):
    """Repository for daily cards, unique per user and date."""

    def get(self, card_date: str, *, user_id: str) -> Optional[DailyCard]:
        """Get the card for a date."""
        ...

    def list_all(self, *, user_id: str) -> list[DailyCard]:
        """List cards newest first."""
        ...

    def upsert_card(self, card: DailyCard, *, user_id: str) -> DailyCard:
        """Insert the card or replace the one saved for the same date."""
        ...

    def delete(self, card_date: str, *, user_id: str) -> bool:
        """Delete the card for a date."""
        ...

    def get_current_streak(self, *, user_id: str, today: date | str | None = None) -> int:
        """Calculate the current streak."""
        ...

    def get_longest_streak(self, *, user_id: str) -> int:
        """Calculate the longest streak."""
        ...
