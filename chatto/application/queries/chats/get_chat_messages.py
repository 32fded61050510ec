"""GetChatMessages Query - one page of history, oldest first."""

from dataclasses import dataclass

from chatto.application.common.interfaces import Query, QueryHandler
from chatto.domain.entities.message import Message
from chatto.domain.exceptions import AccessDeniedError, DomainValidationError
from chatto.domain.ports.repositories import ConversationRepository, MessageRepository
from chatto.domain.value_objects.conversation_id import ConversationId
from chatto.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class GetChatMessagesQuery(Query[list[Message]]):
    requester_id: UserId
    conversation_id: ConversationId
    page: int = 1
    limit: int = 50


class GetChatMessagesHandler(QueryHandler[list[Message]]):
    def __init__(
        self,
        conversation_repository: ConversationRepository,
        message_repository: MessageRepository,
        max_limit: int = 100,
    ):
        self._conversation_repository = conversation_repository
        self._message_repository = message_repository
        self._max_limit = max_limit

    async def execute(self, query: GetChatMessagesQuery) -> list[Message]:
        if not await self._conversation_repository.is_participant(
            query.conversation_id, query.requester_id
        ):
            raise AccessDeniedError("Not authorized to access this chat")

        if query.page < 1:
            raise DomainValidationError("page must be at least 1")
        if not 1 <= query.limit <= self._max_limit:
            raise DomainValidationError(
                f"limit must be between 1 and {self._max_limit}"
            )

        return await self._message_repository.get_by_conversation(
            query.conversation_id,
            limit=query.limit,
            offset=(query.page - 1) * query.limit,
        )
