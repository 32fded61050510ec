"""
Conversation Repository Port - the Membership Store.

Durable record of which users participate in which conversations. Every
mutating method runs as one transaction: a concurrent reader never sees a
conversation without its participant edges.
"""

from abc import ABC, abstractmethod
from typing import Optional

from chatto.domain.entities.conversation import Conversation
from chatto.domain.value_objects.conversation_id import ConversationId
from chatto.domain.value_objects.user_id import UserId


class ConversationRepository(ABC):
    @abstractmethod
    async def get_by_id(
        self, conversation_id: ConversationId
    ) -> Optional[Conversation]: ...

    @abstractmethod
    async def get_direct(
        self, first: UserId, second: UserId
    ) -> Optional[Conversation]: ...

    @abstractmethod
    async def create_direct(
        self, first: UserId, second: UserId
    ) -> tuple[Conversation, bool]:
        """
        Create the direct conversation of an unordered pair.

        Serialized per pair: when another caller created it first, returns
        (existing, False) instead of a duplicate.
        """

    @abstractmethod
    async def create_group(
        self, name: str, participant_ids: list[UserId]
    ) -> Conversation: ...

    @abstractmethod
    async def list_for_user(self, user_id: UserId) -> list[Conversation]: ...

    @abstractmethod
    async def get_ids_for_user(self, user_id: UserId) -> list[ConversationId]: ...

    @abstractmethod
    async def is_participant(
        self, conversation_id: ConversationId, user_id: UserId
    ) -> bool: ...

    @abstractmethod
    async def add_participant(
        self, conversation_id: ConversationId, user_id: UserId
    ) -> Conversation:
        """Raises ConflictError if the edge already exists."""

    @abstractmethod
    async def remove_participant(
        self, conversation_id: ConversationId, user_id: UserId
    ) -> Conversation:
        """Raises EntityNotFoundError if the edge does not exist."""
