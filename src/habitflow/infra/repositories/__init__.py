"""Concrete repository implementations using SQLModel."""

from .habit import SQLModelDailyCardRepository, SQLModelHabitRepository
from .snapshot import load_snapshot
from .social import SQLModelJournalRepository, SQLModelMessageRepository, SQLModelUserRepository

__all__ = [
    "SQLModelDailyCardRepository",
    "SQLModelHabitRepository",
    "SQLModelJournalRepository",
    "SQLModelMessageRepository",
    "SQLModelUserRepository",
    "load_snapshot",
]
