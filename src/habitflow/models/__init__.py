"""SQLModel table exports."""

from .habit import DailyCard, Habit
from .journal import MediaLink, Quote, Thought
from .message import Message
from .user import User

__all__ = [
    "DailyCard",
    "Habit",
    "MediaLink",
    "Message",
    "Quote",
    "Thought",
    "User",
]
