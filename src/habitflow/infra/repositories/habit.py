"""SQLModel implementations of the habit and daily card repositories."""

from __future__ import annotations

from datetime import date
from typing import Callable, Optional

from sqlmodel import Session, select

from ...logging_config import get_logger
from ...models.habit import DailyCard, Habit
from ...services.habits import compute_longest_streak, compute_streak

logger = get_logger("infra.habit")


class SQLModelHabitRepository:
    """SQLModel-based habit repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, habit_id: str, *, user_id: str) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        with self.session_factory() as session:
            obj = session.exec(
                select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, *, user_id: str) -> list[Habit]:
        """List habits in creation order."""
        with self.session_factory() as session:
            statement = (
                select(Habit)
                .where(Habit.user_id == user_id)
                .order_by(Habit.created_at, Habit.id)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, habit: Habit, *, user_id: str) -> Habit:
        """Create a new habit."""
        with self.session_factory() as session:
            habit.user_id = user_id
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def create_many(self, habits: list[Habit], *, user_id: str) -> list[Habit]:
        """Create several habits in one transaction."""
        with self.session_factory() as session:
            for habit in habits:
                habit.user_id = user_id
                session.add(habit)
            session.commit()
            for habit in habits:
                session.refresh(habit)
            session.expunge_all()
            return habits

    def delete(self, habit_id: str, *, user_id: str) -> bool:
        """Delete a habit by ID.

        Saved cards keep their snapshot counts and their check for this id.
        """
        with self.session_factory() as session:
            habit = session.exec(
                select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id)
            ).first()
            if not habit:
                return False
            session.delete(habit)
            session.commit()
            return True


class SQLModelDailyCardRepository:
    """Daily cards keyed by (user_id, date)."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def _select_card(self, session: Session, card_date: str, user_id: str) -> Optional[DailyCard]:
        return session.exec(
            select(DailyCard)
            .where(DailyCard.user_id == user_id)
            .where(DailyCard.date == card_date)
        ).first()

    def get(self, card_date: str, *, user_id: str) -> Optional[DailyCard]:
        """Get the card for a date."""
        with self.session_factory() as session:
            obj = self._select_card(session, card_date, user_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, *, user_id: str) -> list[DailyCard]:
        """List cards newest first."""
        with self.session_factory() as session:
            statement = (
                select(DailyCard)
                .where(DailyCard.user_id == user_id)
                .order_by(DailyCard.date.desc())  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def upsert_card(self, card: DailyCard, *, user_id: str) -> DailyCard:
        """Insert the card or replace the one saved for the same date.

        The lookup and the write share one transaction.
        """
        with self.session_factory() as session:
            existing = self._select_card(session, card.date, user_id)

            if existing:
                existing.habit_checks = dict(card.habit_checks or {})
                existing.sleep_hours = card.sleep_hours
                existing.notes = card.notes
                existing.completed_habits = card.completed_habits
                existing.total_habits = card.total_habits
                existing.completion_pct = card.completion_pct
                target = existing
            else:
                card.user_id = user_id
                target = card

            session.add(target)
            session.commit()
            session.refresh(target)
            session.expunge(target)

        logger.info(
            "Saved daily card",
            extra={
                "user_id": user_id,
                "date": target.date,
                "completion_pct": target.completion_pct,
                "replaced": existing is not None,
            },
        )
        return target

    def delete(self, card_date: str, *, user_id: str) -> bool:
        """Delete the card for a date."""
        with self.session_factory() as session:
            card = self._select_card(session, card_date, user_id)
            if not card:
                return False
            session.delete(card)
            session.commit()
            return True

    def get_current_streak(self, *, user_id: str, today: date | str | None = None) -> int:
        """Calculate the current streak."""
        return compute_streak(self.list_all(user_id=user_id), today=today)

    def get_longest_streak(self, *, user_id: str) -> int:
        """Calculate the longest streak."""
        return compute_longest_streak(self.list_all(user_id=user_id))
