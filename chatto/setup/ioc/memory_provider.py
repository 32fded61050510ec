"""Repository bindings for the in-process memory store (CHAT_STORE=memory)."""

from dishka import Provider, Scope, provide

from chatto.domain.ports.repositories import (
    ConversationRepository,
    MessageRepository,
    SessionRepository,
    UserRepository,
)
from chatto.infrastructure.memory import (
    MemoryConversationRepository,
    MemoryDatabase,
    MemoryMessageRepository,
    MemorySessionRepository,
    MemoryUserRepository,
)


class MemoryStoreProvider(Provider):
    @provide(scope=Scope.APP)
    def get_database(self) -> MemoryDatabase:
        return MemoryDatabase()

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, db: MemoryDatabase) -> UserRepository:
        return MemoryUserRepository(db)

    @provide(scope=Scope.REQUEST)
    def get_session_repository(self, db: MemoryDatabase) -> SessionRepository:
        return MemorySessionRepository(db)

    @provide(scope=Scope.REQUEST)
    def get_conversation_repository(self, db: MemoryDatabase) -> ConversationRepository:
        return MemoryConversationRepository(db)

    @provide(scope=Scope.REQUEST)
    def get_message_repository(self, db: MemoryDatabase) -> MessageRepository:
        return MemoryMessageRepository(db)
