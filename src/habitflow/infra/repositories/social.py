"""SQLModel implementations of the user, journal and message repositories."""

from __future__ import annotations

from typing import Callable, Optional, TypeVar

from sqlmodel import Session, or_, select

from ...models import MediaLink, Message, Quote, Thought, User
from ...services.messages import normalize_username

T = TypeVar("T", Thought, Quote, MediaLink)


class SQLModelUserRepository:
    """SQLModel-based user repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get(self, username: str) -> Optional[User]:
        """Retrieve a user by username."""
        with self.session_factory() as session:
            obj = session.get(User, normalize_username(username))
            if obj:
                session.expunge(obj)
            return obj

    def get_or_create(self, username: str, display_name: str = "") -> User:
        """Return the user, creating it on first use."""
        name = normalize_username(username)
        if not name:
            raise ValueError("Username is required")
        with self.session_factory() as session:
            user = session.get(User, name)
            if user is None:
                user = User(username=name, display_name=display_name.strip() or name)
                session.add(user)
                session.commit()
                session.refresh(user)
            session.expunge(user)
            return user

    def list_all(self) -> list[User]:
        """List users ordered by username."""
        with self.session_factory() as session:
            rows = list(session.exec(select(User).order_by(User.username)).all())
            session.expunge_all()
            return rows


class SQLModelJournalRepository:
    """Thoughts, quotes and media links; each list is newest first."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def _add(self, item: T, user_id: str) -> T:
        with self.session_factory() as session:
            item.user_id = user_id
            session.add(item)
            session.commit()
            session.refresh(item)
            session.expunge(item)
            return item

    def _list(self, model: type[T], user_id: str) -> list[T]:
        with self.session_factory() as session:
            statement = (
                select(model)
                .where(model.user_id == user_id)
                .order_by(model.created_at.desc(), model.id.desc())  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def _delete(self, model: type[T], item_id: str, user_id: str) -> bool:
        with self.session_factory() as session:
            item = session.exec(
                select(model).where(model.id == item_id, model.user_id == user_id)
            ).first()
            if not item:
                return False
            session.delete(item)
            session.commit()
            return True

    def add_thought(self, thought: Thought, *, user_id: str) -> Thought:
        return self._add(thought, user_id)

    def list_thoughts(self, *, user_id: str) -> list[Thought]:
        return self._list(Thought, user_id)

    def delete_thought(self, thought_id: str, *, user_id: str) -> bool:
        return self._delete(Thought, thought_id, user_id)

    def add_quote(self, quote: Quote, *, user_id: str) -> Quote:
        return self._add(quote, user_id)

    def list_quotes(self, *, user_id: str) -> list[Quote]:
        return self._list(Quote, user_id)

    def delete_quote(self, quote_id: str, *, user_id: str) -> bool:
        return self._delete(Quote, quote_id, user_id)

    def add_media_link(self, link: MediaLink, *, user_id: str) -> MediaLink:
        return self._add(link, user_id)

    def list_media_links(self, *, user_id: str) -> list[MediaLink]:
        return self._list(MediaLink, user_id)

    def delete_media_link(self, link_id: str, *, user_id: str) -> bool:
        return self._delete(MediaLink, link_id, user_id)


class SQLModelMessageRepository:
    """Messages stored once and read from either side."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def send(self, message: Message) -> Message:
        """Persist a message once for both participants."""
        with self.session_factory() as session:
            session.add(message)
            session.commit()
            session.refresh(message)
            session.expunge(message)
            return message

    def _list(self, condition) -> list[Message]:
        with self.session_factory() as session:
            statement = select(Message).where(condition).order_by(
                Message.created_at.desc(), Message.id.desc()  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def inbox(self, username: str) -> list[Message]:
        """Messages received by ``username``, newest first."""
        return self._list(Message.recipient == normalize_username(username))

    def outbox(self, username: str) -> list[Message]:
        """Messages sent by ``username``, newest first."""
        return self._list(Message.sender == normalize_username(username))

    def conversation_for(self, username: str) -> list[Message]:
        """Everything the user sent or received, newest first."""
        name = normalize_username(username)
        return self._list(or_(Message.sender == name, Message.recipient == name))

    def delete(self, message_id: str, *, username: str) -> bool:
        """Delete a message the user sent or received."""
        name = normalize_username(username)
        with self.session_factory() as session:
            message = session.exec(
                select(Message).where(
                    Message.id == message_id,
                    or_(Message.sender == name, Message.recipient == name),
                )
            ).first()
            if not message:
                return False
            session.delete(message)
            session.commit()
            return True
