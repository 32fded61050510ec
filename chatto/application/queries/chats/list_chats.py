"""
ListChats Query - the requester's conversations for the sidebar.

Ordering:
- conversations with messages first, by latest message time descending
- then conversations without messages, newest created first
Ties are broken by conversation id descending so the order is stable.
"""

from dataclasses import dataclass
from typing import Optional

from chatto.application.common.interfaces import Query, QueryHandler
from chatto.domain.entities.conversation import Conversation
from chatto.domain.entities.message import Message
from chatto.domain.ports.repositories import ConversationRepository, MessageRepository
from chatto.domain.value_objects.user_id import UserId


@dataclass
class ChatSummary:
    conversation: Conversation
    last_message: Optional[Message] = None


@dataclass(frozen=True)
class ListChatsQuery(Query[list[ChatSummary]]):
    user_id: UserId


class ListChatsHandler(QueryHandler[list[ChatSummary]]):
    def __init__(
        self,
        conversation_repository: ConversationRepository,
        message_repository: MessageRepository,
    ):
        self._conversation_repository = conversation_repository
        self._message_repository = message_repository

    async def execute(self, query: ListChatsQuery) -> list[ChatSummary]:
        conversations = await self._conversation_repository.list_for_user(query.user_id)
        if not conversations:
            return []

        latest = await self._message_repository.get_latest_for(
            [c.id for c in conversations]
        )
        summaries = [ChatSummary(c, latest.get(c.id)) for c in conversations]

        with_messages = sorted(
            (s for s in summaries if s.last_message),
            key=lambda s: (s.last_message.sort_key, s.conversation.id.value),
            reverse=True,
        )
        without_messages = sorted(
            (s for s in summaries if not s.last_message),
            key=lambda s: (s.conversation.created_at, s.conversation.id.value),
            reverse=True,
        )
        return with_messages + without_messages
