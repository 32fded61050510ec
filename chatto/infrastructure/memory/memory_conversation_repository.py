from typing import Optional

from chatto.domain.entities.conversation import Conversation
from chatto.domain.exceptions import ConflictError, EntityNotFoundError
from chatto.domain.ports.repositories import ConversationRepository
from chatto.domain.value_objects.conversation_id import ConversationId
from chatto.domain.value_objects.user_id import UserId
from chatto.infrastructure.memory.database import ChatRow, MemoryDatabase, ParticipantRow


class MemoryConversationRepository(ConversationRepository):
    def __init__(self, db: MemoryDatabase):
        self._db = db

    async def get_by_id(
        self, conversation_id: ConversationId
    ) -> Optional[Conversation]:
        chat = self._db.chats.get(conversation_id.value)
        return self._db.build_conversation(chat) if chat else None

    def _find_direct(self, key: str) -> Optional[ChatRow]:
        return next(
            (c for c in self._db.chats.values() if c.direct_key == key), None
        )

    async def get_direct(
        self, first: UserId, second: UserId
    ) -> Optional[Conversation]:
        chat = self._find_direct(Conversation.direct_key(first, second))
        return self._db.build_conversation(chat) if chat else None

    async def create_direct(
        self, first: UserId, second: UserId
    ) -> tuple[Conversation, bool]:
        key = Conversation.direct_key(first, second)
        async with self._db.lock:
            existing = self._find_direct(key)
            if existing:
                return self._db.build_conversation(existing), False

            now = self._db.clock()
            chat = ChatRow(
                id=self._db.next_chat_id(),
                is_group=False,
                created_at=now,
                direct_key=key,
            )
            self._db.chats[chat.id] = chat
            for user_id in (first, second):
                self._db.participants[(chat.id, user_id.value)] = ParticipantRow(
                    chat.id, user_id.value, now
                )
            return self._db.build_conversation(chat), True

    async def create_group(
        self, name: str, participant_ids: list[UserId]
    ) -> Conversation:
        async with self._db.lock:
            now = self._db.clock()
            chat = ChatRow(
                id=self._db.next_chat_id(),
                is_group=True,
                created_at=now,
                name=name,
            )
            self._db.chats[chat.id] = chat
            for user_id in participant_ids:
                self._db.participants[(chat.id, user_id.value)] = ParticipantRow(
                    chat.id, user_id.value, now
                )
            return self._db.build_conversation(chat)

    async def list_for_user(self, user_id: UserId) -> list[Conversation]:
        return [
            self._db.build_conversation(self._db.chats[cid.value])
            for cid in await self.get_ids_for_user(user_id)
        ]

    async def get_ids_for_user(self, user_id: UserId) -> list[ConversationId]:
        return [
            ConversationId(chat_id)
            for (chat_id, uid) in self._db.participants
            if uid == user_id.value and chat_id in self._db.chats
        ]

    async def is_participant(
        self, conversation_id: ConversationId, user_id: UserId
    ) -> bool:
        return (conversation_id.value, user_id.value) in self._db.participants

    async def add_participant(
        self, conversation_id: ConversationId, user_id: UserId
    ) -> Conversation:
        key = (conversation_id.value, user_id.value)
        async with self._db.lock:
            chat = self._db.chats.get(conversation_id.value)
            if chat is None:
                raise EntityNotFoundError(f"Chat {conversation_id} not found")
            if key in self._db.participants:
                raise ConflictError("User is already a member")
            self._db.participants[key] = ParticipantRow(
                chat.id, user_id.value, self._db.clock()
            )
            return self._db.build_conversation(chat)

    async def remove_participant(
        self, conversation_id: ConversationId, user_id: UserId
    ) -> Conversation:
        key = (conversation_id.value, user_id.value)
        async with self._db.lock:
            chat = self._db.chats.get(conversation_id.value)
            if chat is None or key not in self._db.participants:
                raise EntityNotFoundError("User is not a member of this chat")
            del self._db.participants[key]
            return self._db.build_conversation(chat)
