"""GetChat Query - one conversation with its latest message."""

from dataclasses import dataclass

from chatto.application.common.interfaces import Query, QueryHandler
from chatto.application.queries.chats.list_chats import ChatSummary
from chatto.domain.exceptions import AccessDeniedError, EntityNotFoundError
from chatto.domain.ports.repositories import ConversationRepository, MessageRepository
from chatto.domain.value_objects.conversation_id import ConversationId
from chatto.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class GetChatQuery(Query[ChatSummary]):
    requester_id: UserId
    conversation_id: ConversationId


class GetChatHandler(QueryHandler[ChatSummary]):
    def __init__(
        self,
        conversation_repository: ConversationRepository,
        message_repository: MessageRepository,
    ):
        self._conversation_repository = conversation_repository
        self._message_repository = message_repository

    async def execute(self, query: GetChatQuery) -> ChatSummary:
        # Membership is checked first so a non-participant cannot learn which ids exist
        if not await self._conversation_repository.is_participant(
            query.conversation_id, query.requester_id
        ):
            raise AccessDeniedError("Not authorized to access this chat")

        conversation = await self._conversation_repository.get_by_id(
            query.conversation_id
        )
        if conversation is None:
            raise EntityNotFoundError("Chat not found")

        latest = await self._message_repository.get_latest_for([conversation.id])
        return ChatSummary(conversation, latest.get(conversation.id))
