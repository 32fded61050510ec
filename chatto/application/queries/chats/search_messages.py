"""SearchMessages Query - substring search across the requester's chats."""

from dataclasses import dataclass

from chatto.application.common.interfaces import Query, QueryHandler
from chatto.domain.entities.message import Message
from chatto.domain.ports.repositories import MessageRepository
from chatto.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class SearchMessagesQuery(Query[list[Message]]):
    requester_id: UserId
    query: str


class SearchMessagesHandler(QueryHandler[list[Message]]):
    def __init__(self, message_repository: MessageRepository, limit: int = 50):
        self._message_repository = message_repository
        self._limit = limit

    async def execute(self, query: SearchMessagesQuery) -> list[Message]:
        return await self._message_repository.search(
            query.requester_id, query.query or "", self._limit
        )
