"""
Prisma Message Repository Implementation.

append() inserts the message and flips chats.activated_at from null in the
same transaction. The conditional update_many matches the chat row only
while activated_at is still null, so of two concurrent first messages only
one sees a row count of 1 and reports is_first_message=True.
"""

from prisma import Prisma

from chatto.domain.entities.message import Message
from chatto.domain.ports.repositories import AppendedMessage, MessageRepository
from chatto.domain.value_objects.conversation_id import ConversationId
from chatto.domain.value_objects.user_id import UserId
from chatto.infrastructure.persistence.errors import store_operation
from chatto.infrastructure.persistence.mappers import to_message

NEWEST_FIRST = [{"created_at": "desc"}, {"id": "desc"}]
OLDEST_FIRST = [{"created_at": "asc"}, {"id": "asc"}]


class PrismaMessageRepository(MessageRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    async def append(
        self, conversation_id: ConversationId, sender_id: UserId, content: str
    ) -> AppendedMessage:
        async with store_operation("save message"):
            async with self._prisma.tx() as tx:
                record = await tx.message.create(
                    data={
                        "chat_id": conversation_id.value,
                        "sender_id": sender_id.value,
                        "content": content,
                    },
                    include={"sender": True},
                )
                activated = await tx.chat.update_many(
                    where={"id": conversation_id.value, "activated_at": None},
                    data={"activated_at": record.created_at},
                )
        return AppendedMessage(message=to_message(record), is_first_message=activated == 1)

    async def get_by_conversation(
        self, conversation_id: ConversationId, limit: int, offset: int = 0
    ) -> list[Message]:
        async with store_operation("load messages"):
            records = await self._prisma.message.find_many(
                where={"chat_id": conversation_id.value},
                include={"sender": True},
                order=OLDEST_FIRST,
                skip=offset,
                take=limit,
            )
        return [to_message(r) for r in records]

    async def get_latest_for(
        self, conversation_ids: list[ConversationId]
    ) -> dict[ConversationId, Message]:
        if not conversation_ids:
            return {}
        async with store_operation("load latest messages"):
            records = await self._prisma.message.find_many(
                where={"chat_id": {"in": [c.value for c in conversation_ids]}},
                include={"sender": True},
                order=NEWEST_FIRST,
                distinct=["chat_id"],
            )
        messages = [to_message(r) for r in records]
        return {m.conversation_id: m for m in messages}

    async def search(self, user_id: UserId, query: str, limit: int) -> list[Message]:
        async with store_operation("search messages"):
            records = await self._prisma.message.find_many(
                where={
                    "content": {"contains": query, "mode": "insensitive"},
                    "chat": {
                        "is": {"participants": {"some": {"user_id": user_id.value}}}
                    },
                },
                include={"sender": True},
                order=NEWEST_FIRST,
                take=limit,
            )
        return [to_message(r) for r in records]
