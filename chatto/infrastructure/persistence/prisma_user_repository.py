"""
Prisma User Repository Implementation.
"""

from typing import Optional

from prisma import Prisma
from prisma.errors import UniqueViolationError

from chatto.domain.entities.user import User
from chatto.domain.exceptions import ConflictError
from chatto.domain.ports.repositories import UserRepository
from chatto.domain.value_objects.user_email import UserEmail
from chatto.domain.value_objects.user_id import UserId
from chatto.infrastructure.persistence.errors import store_operation
from chatto.infrastructure.persistence.mappers import to_user


class PrismaUserRepository(UserRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    async def get_by_id(self, user_id: UserId) -> Optional[User]:
        async with store_operation("load user"):
            record = await self._prisma.user.find_unique(where={"id": user_id.value})
        return to_user(record) if record else None

    async def get_by_email(self, email: UserEmail) -> Optional[User]:
        async with store_operation("load user by email"):
            record = await self._prisma.user.find_unique(where={"email": email.value})
        return to_user(record) if record else None

    async def get_many(self, user_ids: list[UserId]) -> list[User]:
        if not user_ids:
            return []
        async with store_operation("load users"):
            records = await self._prisma.user.find_many(
                where={"id": {"in": [u.value for u in user_ids]}}
            )
        return [to_user(r) for r in records]

    async def create(self, email: UserEmail, password_hash: str) -> User:
        async with store_operation("create user"):
            try:
                record = await self._prisma.user.create(
                    data={"email": email.value, "password": password_hash}
                )
            except UniqueViolationError as e:
                raise ConflictError("Email already registered") from e
        return to_user(record)

    async def search_by_email(
        self, query: str, exclude: UserId, limit: int
    ) -> list[User]:
        async with store_operation("search users"):
            records = await self._prisma.user.find_many(
                where={
                    "email": {"contains": query, "mode": "insensitive"},
                    "NOT": [{"id": exclude.value}],
                },
                order={"id": "asc"},
                take=limit,
            )
        return [to_user(r) for r in records]
