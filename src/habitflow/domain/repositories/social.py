"""User, journal and message repository protocols."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models import MediaLink, Message, Quote, Thought, User


class UserRepository(Protocol):
    def get(self, username: str) -> Optional[User]:
        """Retrieve a user by username."""
        ...

    def get_or_create(self, username: str, display_name: str = "") -> User:
        """Return the user, creating it on first use."""
        ...

    def list_all(self) -> list[User]:
        """List users ordered by username."""
        ...


class JournalRepository(Protocol):
    """Thoughts, quotes and media links, each listed newest first."""

    def add_thought(self, thought: Thought, *, user_id: str) -> Thought: ...

    def list_thoughts(self, *, user_id: str) -> list[Thought]: ...

    def delete_thought(self, thought_id: str, *, user_id: str) -> bool: ...

    def add_quote(self, quote: Quote, *, user_id: str) -> Quote: ...

    def list_quotes(self, *, user_id: str) -> list[Quote]: ...

    def delete_quote(self, quote_id: str, *, user_id: str) -> bool: ...

    def add_media_link(self, link: MediaLink, *, user_id: str) -> MediaLink: ...

    def list_media_links(self, *, user_id: str) -> list[MediaLink]: ...

    def delete_media_link(self, link_id: str, *, user_id: str) -> bool: ...


class MessageRepository(Protocol):
    def send(self, message: Message) -> Message:
        """Persist a message once for both participants."""
        ...

    def inbox(self, username: str) -> list[Message]:
        """Messages received by ``username``, newest first."""
        ...

    def outbox(self, username: str) -> list[Message]:
        """Messages sent by ``username``, newest first."""
        ...

    def conversation_for(self, username: str) -> list[Message]:
        """Everything the user sent or received, newest first."""
        ...

    def delete(self, message_id: str, *, username: str) -> bool:
        """Delete a message the user sent or received."""
        ...
