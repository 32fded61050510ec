"""SearchUsers Query - find people to start a chat with."""

from dataclasses import dataclass

from chatto.application.common.interfaces import Query, QueryHandler
from chatto.domain.entities.user import User
from chatto.domain.ports.repositories import UserRepository
from chatto.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class SearchUsersQuery(Query[list[User]]):
    requester_id: UserId
    query: str


class SearchUsersHandler(QueryHandler[list[User]]):
    def __init__(self, user_repository: UserRepository, limit: int = 10):
        self._user_repository = user_repository
        self._limit = limit

    async def execute(self, query: SearchUsersQuery) -> list[User]:
        return await self._user_repository.search_by_email(
            query.query or "", exclude=query.requester_id, limit=self._limit
        )
