"""Repository bindings for PostgreSQL through Prisma (CHAT_STORE=prisma)."""

from typing import AsyncIterable

from dishka import Provider, Scope, provide
from prisma import Prisma

from chatto.domain.ports.repositories import (
    ConversationRepository,
    MessageRepository,
    SessionRepository,
    UserRepository,
)
from chatto.infrastructure.persistence import (
    PrismaConversationRepository,
    PrismaMessageRepository,
    PrismaSessionRepository,
    PrismaUserRepository,
)


class PrismaStoreProvider(Provider):
    @provide(scope=Scope.APP)
    async def get_prisma(self) -> AsyncIterable[Prisma]:
        """
        Provide Prisma client (singleton, app-scoped).

        Connected on first use, disconnected when the container closes.
        """
        prisma = Prisma()
        await prisma.connect()
        yield prisma
        await prisma.disconnect()

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, prisma: Prisma) -> UserRepository:
        return PrismaUserRepository(prisma)

    @provide(scope=Scope.REQUEST)
    def get_session_repository(self, prisma: Prisma) -> SessionRepository:
        return PrismaSessionRepository(prisma)

    @provide(scope=Scope.REQUEST)
    def get_conversation_repository(self, prisma: Prisma) -> ConversationRepository:
        return PrismaConversationRepository(prisma)

    @provide(scope=Scope.REQUEST)
    def get_message_repository(self, prisma: Prisma) -> MessageRepository:
        return PrismaMessageRepository(prisma)
