"""
Prisma Session Repository Implementation.
"""

from typing import Optional

from prisma import Prisma

from chatto.domain.entities.session import Session
from chatto.domain.ports.repositories import SessionRepository
from chatto.infrastructure.persistence.errors import store_operation
from chatto.infrastructure.persistence.mappers import to_session


class PrismaSessionRepository(SessionRepository):
    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    async def save(self, session: Session) -> None:
        async with store_operation("save session"):
            await self._prisma.session.create(
                data={
                    "user_id": session.user_id.value,
                    "token": session.token,
                    "created_at": session.created_at,
                    "expires_at": session.expires_at,
                }
            )

    async def get_by_token(self, token: str) -> Optional[Session]:
        async with store_operation("load session"):
            record = await self._prisma.session.find_unique(where={"token": token})
        return to_session(record) if record else None

    async def delete(self, token: str) -> bool:
        async with store_operation("delete session"):
            deleted = await self._prisma.session.delete_many(where={"token": token})
        return deleted > 0
