"""Load a full ``UserSnapshot`` from the SQLModel repositories."""

from __future__ import annotations

from typing import Callable, Optional

from sqlmodel import Session

from ...services.profile import UserSnapshot
from .habit import SQLModelDailyCardRepository, SQLModelHabitRepository
from .social import SQLModelJournalRepository, SQLModelMessageRepository, SQLModelUserRepository


def load_snapshot(session_factory: Callable[[], Session], username: str) -> Optional[UserSnapshot]:
    """Return everything stored for ``username``, or ``None`` when no such user exists.

    Read-only: an unknown username never creates a user row.
    """

    user = SQLModelUserRepository(session_factory).get(username)
    if user is None:
        return None
    journal = SQLModelJournalRepository(session_factory)
    return UserSnapshot(
        user=user,
        habits=SQLModelHabitRepository(session_factory).list_all(user_id=user.username),
        cards=SQLModelDailyCardRepository(session_factory).list_all(user_id=user.username),
        thoughts=journal.list_thoughts(user_id=user.username),
        quotes=journal.list_quotes(user_id=user.username),
        media_links=journal.list_media_links(user_id=user.username),
        messages=SQLModelMessageRepository(session_factory).conversation_for(user.username),
    )
