"""
Dishka DI Container Setup.

- AppProvider: realtime core, security services and use-case handlers
- A store provider (memory_provider / prisma_provider) binds the repository
  ports to one storage backend, chosen by Config.CHAT_STORE

Scopes:
- Scope.APP     = one instance for the process (registry, dispatcher, typing
                  monitor, hasher, token service, store connection)
- Scope.REQUEST = per HTTP request, or per WebSocket event batch
                  (repositories, handlers, room synchronizer)

Flow:
  Container → MemoryConversationRepository / PrismaConversationRepository
                        ↓ as ConversationRepository
              SendMessageHandler ← FanoutDispatcher (as EventPublisher)
"""

from datetime import timedelta

from dishka import AsyncContainer, Provider, Scope, make_async_container, provide

from chatto.application.commands.auth import (
    LoginUserHandler,
    LogoutUserHandler,
    RegisterUserHandler,
)
from chatto.application.commands.chats import (
    AddGroupMemberHandler,
    CreateDirectChatHandler,
    CreateGroupChatHandler,
    RemoveGroupMemberHandler,
    SendMessageHandler,
)
from chatto.application.queries.auth import VerifySessionHandler
from chatto.application.queries.chats import (
    GetChatHandler,
    GetChatMessagesHandler,
    ListChatsHandler,
    SearchMessagesHandler,
    SearchUsersHandler,
)
from chatto.config.settings import Config
from chatto.domain.ports.event_publisher import EventPublisher
from chatto.domain.ports.password_hasher import PasswordHasher
from chatto.domain.ports.repositories import (
    ConversationRepository,
    MessageRepository,
    SessionRepository,
    UserRepository,
)
from chatto.domain.ports.token_service import TokenService
from chatto.infrastructure.realtime import (
    ConnectionRegistry,
    FanoutDispatcher,
    RoomSynchronizer,
    TypingMonitor,
)
from chatto.infrastructure.security import BcryptPasswordHasher, JwtTokenService


class AppProvider(Provider):
    """
    Application dependency provider.

    Store-independent: repositories come from the store provider passed
    alongside it to make_async_container().
    """

    # ==================== REALTIME ====================

    @provide(scope=Scope.APP)
    def get_connection_registry(self) -> ConnectionRegistry:
        return ConnectionRegistry()

    @provide(scope=Scope.APP)
    def get_fanout_dispatcher(self, registry: ConnectionRegistry) -> FanoutDispatcher:
        return FanoutDispatcher(registry)

    @provide(scope=Scope.APP)
    def get_event_publisher(self, dispatcher: FanoutDispatcher) -> EventPublisher:
        """Handlers publish through the port; the dispatcher is the only implementation."""
        return dispatcher

    @provide(scope=Scope.APP)
    def get_typing_monitor(
        self, registry: ConnectionRegistry, dispatcher: FanoutDispatcher
    ) -> TypingMonitor:
        return TypingMonitor(
            registry, dispatcher, timeout_seconds=Config.TYPING_TIMEOUT_SECONDS
        )

    @provide(scope=Scope.REQUEST)
    def get_room_synchronizer(
        self,
        registry: ConnectionRegistry,
        conversation_repository: ConversationRepository,
    ) -> RoomSynchronizer:
        return RoomSynchronizer(registry, conversation_repository)

    # ==================== SECURITY ====================

    @provide(scope=Scope.APP)
    def get_password_hasher(self) -> PasswordHasher:
        return BcryptPasswordHasher(rounds=Config.BCRYPT_ROUNDS)

    @provide(scope=Scope.APP)
    def get_token_service(self) -> TokenService:
        return JwtTokenService(
            secret=Config.JWT_SECRET,
            issuer=Config.JWT_ISSUER,
            audience=Config.JWT_AUDIENCE,
        )

    # ==================== AUTH HANDLERS ====================

    @provide(scope=Scope.REQUEST)
    def get_register_user_handler(
        self, user_repository: UserRepository, password_hasher: PasswordHasher
    ) -> RegisterUserHandler:
        return RegisterUserHandler(user_repository, password_hasher)

    @provide(scope=Scope.REQUEST)
    def get_login_user_handler(
        self,
        user_repository: UserRepository,
        session_repository: SessionRepository,
        password_hasher: PasswordHasher,
        token_service: TokenService,
    ) -> LoginUserHandler:
        return LoginUserHandler(
            user_repository=user_repository,
            session_repository=session_repository,
            password_hasher=password_hasher,
            token_service=token_service,
            session_ttl=timedelta(hours=Config.SESSION_TTL_HOURS),
        )

    @provide(scope=Scope.REQUEST)
    def get_logout_user_handler(
        self, session_repository: SessionRepository
    ) -> LogoutUserHandler:
        return LogoutUserHandler(session_repository)

    @provide(scope=Scope.REQUEST)
    def get_verify_session_handler(
        self,
        token_service: TokenService,
        session_repository: SessionRepository,
        user_repository: UserRepository,
    ) -> VerifySessionHandler:
        return VerifySessionHandler(token_service, session_repository, user_repository)

    # ==================== CHAT HANDLERS ====================

    @provide(scope=Scope.REQUEST)
    def get_create_direct_chat_handler(
        self,
        conversation_repository: ConversationRepository,
        user_repository: UserRepository,
    ) -> CreateDirectChatHandler:
        return CreateDirectChatHandler(conversation_repository, user_repository)

    @provide(scope=Scope.REQUEST)
    def get_create_group_chat_handler(
        self,
        conversation_repository: ConversationRepository,
        user_repository: UserRepository,
    ) -> CreateGroupChatHandler:
        return CreateGroupChatHandler(conversation_repository, user_repository)

    @provide(scope=Scope.REQUEST)
    def get_send_message_handler(
        self,
        conversation_repository: ConversationRepository,
        message_repository: MessageRepository,
        publisher: EventPublisher,
    ) -> SendMessageHandler:
        return SendMessageHandler(conversation_repository, message_repository, publisher)

    @provide(scope=Scope.REQUEST)
    def get_add_group_member_handler(
        self,
        conversation_repository: ConversationRepository,
        user_repository: UserRepository,
        message_repository: MessageRepository,
        publisher: EventPublisher,
    ) -> AddGroupMemberHandler:
        return AddGroupMemberHandler(
            conversation_repository, user_repository, message_repository, publisher
        )

    @provide(scope=Scope.REQUEST)
    def get_remove_group_member_handler(
        self,
        conversation_repository: ConversationRepository,
        message_repository: MessageRepository,
        publisher: EventPublisher,
    ) -> RemoveGroupMemberHandler:
        return RemoveGroupMemberHandler(
            conversation_repository, message_repository, publisher
        )

    # ==================== CHAT QUERIES ====================

    @provide(scope=Scope.REQUEST)
    def get_list_chats_handler(
        self,
        conversation_repository: ConversationRepository,
        message_repository: MessageRepository,
    ) -> ListChatsHandler:
        return ListChatsHandler(conversation_repository, message_repository)

    @provide(scope=Scope.REQUEST)
    def get_chat_handler(
        self,
        conversation_repository: ConversationRepository,
        message_repository: MessageRepository,
    ) -> GetChatHandler:
        return GetChatHandler(conversation_repository, message_repository)

    @provide(scope=Scope.REQUEST)
    def get_chat_messages_handler(
        self,
        conversation_repository: ConversationRepository,
        message_repository: MessageRepository,
    ) -> GetChatMessagesHandler:
        return GetChatMessagesHandler(
            conversation_repository,
            message_repository,
            max_limit=Config.MESSAGE_PAGE_MAX,
        )

    @provide(scope=Scope.REQUEST)
    def get_search_messages_handler(
        self, message_repository: MessageRepository
    ) -> SearchMessagesHandler:
        return SearchMessagesHandler(
            message_repository, limit=Config.SEARCH_MESSAGES_LIMIT
        )

    @provide(scope=Scope.REQUEST)
    def get_search_users_handler(
        self, user_repository: UserRepository
    ) -> SearchUsersHandler:
        return SearchUsersHandler(user_repository, limit=Config.SEARCH_USERS_LIMIT)


def create_container(store: str | None = None) -> AsyncContainer:
    """
    Create the DI container for the configured store.

    The Prisma provider is imported only when selected, so the memory store
    runs without a generated Prisma client.
    """
    store = (store or Config.CHAT_STORE).lower()
    if store == "memory":
        from chatto.setup.ioc.memory_provider import MemoryStoreProvider

        return make_async_container(AppProvider(), MemoryStoreProvider())
    if store == "prisma":
        from chatto.setup.ioc.prisma_provider import PrismaStoreProvider

        return make_async_container(AppProvider(), PrismaStoreProvider())
    raise ValueError(f"Unknown CHAT_STORE: {store!r}")
