from chatto.domain.entities.message import Message
from chatto.domain.exceptions import EntityNotFoundError
from chatto.domain.ports.repositories import AppendedMessage, MessageRepository
from chatto.domain.value_objects.conversation_id import ConversationId
from chatto.domain.value_objects.message_id import MessageId
from chatto.domain.value_objects.user_id import UserId
from chatto.infrastructure.memory.database import MemoryDatabase


class MemoryMessageRepository(MessageRepository):
    def __init__(self, db: MemoryDatabase):
        self._db = db

    def _ordered(self, conversation_id: ConversationId) -> list[Message]:
        return sorted(
            (m for m in self._db.messages if m.conversation_id == conversation_id),
            key=lambda m: m.sort_key,
        )

    async def append(
        self, conversation_id: ConversationId, sender_id: UserId, content: str
    ) -> AppendedMessage:
        async with self._db.lock:
            chat = self._db.chats.get(conversation_id.value)
            sender = self._db.users.get(sender_id.value)
            if chat is None or sender is None:
                raise EntityNotFoundError("Chat or sender not found")

            now = self._db.clock()
            message = Message(
                id=MessageId(self._db.next_message_id()),
                conversation_id=conversation_id,
                sender_id=sender.id,
                sender_email=sender.email,
                content=content,
                created_at=now,
            )
            self._db.messages.append(message)

            is_first = chat.activated_at is None
            if is_first:
                chat.activated_at = now
            return AppendedMessage(message=message, is_first_message=is_first)

    async def get_by_conversation(
        self, conversation_id: ConversationId, limit: int, offset: int = 0
    ) -> list[Message]:
        return self._ordered(conversation_id)[offset : offset + limit]

    async def get_latest_for(
        self, conversation_ids: list[ConversationId]
    ) -> dict[ConversationId, Message]:
        latest: dict[ConversationId, Message] = {}
        wanted = set(conversation_ids)
        for message in self._db.messages:
            if message.conversation_id not in wanted:
                continue
            current = latest.get(message.conversation_id)
            if current is None or message.sort_key > current.sort_key:
                latest[message.conversation_id] = message
        return latest

    async def search(self, user_id: UserId, query: str, limit: int) -> list[Message]:
        needle = query.lower()
        chat_ids = {cid for (cid, uid) in self._db.participants if uid == user_id.value}
        matches = [
            m
            for m in self._db.messages
            if m.conversation_id.value in chat_ids and needle in m.content.lower()
        ]
        matches.sort(key=lambda m: m.sort_key, reverse=True)
        return matches[:limit]
