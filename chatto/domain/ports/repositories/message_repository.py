"""
Message Repository Port - Interface for message persistence.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from chatto.domain.entities.message import Message
from chatto.domain.value_objects.conversation_id import ConversationId
from chatto.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class AppendedMessage:
    message: Message
    is_first_message: bool


class MessageRepository(ABC):
    @abstractmethod
    async def append(
        self, conversation_id: ConversationId, sender_id: UserId, content: str
    ) -> AppendedMessage:
        """
        Persist a message and, in the same transaction, move the conversation
        from `created` to `active` if it had no message yet. Exactly one call
        per conversation observes is_first_message=True.
        """

    @abstractmethod
    async def get_by_conversation(
        self, conversation_id: ConversationId, limit: int, offset: int = 0
    ) -> list[Message]:
        """Oldest first."""

    @abstractmethod
    async def get_latest_for(
        self, conversation_ids: list[ConversationId]
    ) -> dict[ConversationId, Message]: ...

    @abstractmethod
    async def search(self, user_id: UserId, query: str, limit: int) -> list[Message]:
        """Case-insensitive match over the user's conversations, newest first."""
