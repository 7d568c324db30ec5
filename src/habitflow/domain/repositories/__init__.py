"""Repository protocol definitions for domain layer."""

from .habit import DailyCardRepository, HabitRepository
from .social import JournalRepository, MessageRepository, UserRepository

__all__ = [
    "DailyCardRepository",
    "HabitRepository",
    "JournalRepository",
    "MessageRepository",
    "UserRepository",
]
