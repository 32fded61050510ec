"""
Prisma Conversation Repository - the Membership Store over PostgreSQL.

Mapping:
- chats                → Conversation (is_group → ConversationKind)
- chat_participants    → Participant edges, unique per (chat_id, user_id)
- chats.direct_key     → unique "<low>:<high>" user pair of a direct chat

Atomicity:
- create_direct / create_group write the chat row and its edges in one
  interactive transaction (`prisma.tx()`), so readers never see a chat
  without participants.
- The unique direct_key serializes concurrent create_direct calls for the
  same pair; the losing transaction rolls back and re-reads the winner.
- The unique (chat_id, user_id) edge turns a concurrent duplicate
  add_participant into ConflictError.
"""

import logging
from typing import Optional

from prisma import Prisma
from prisma.errors import UniqueViolationError

from chatto.domain.entities.conversation import Conversation
from chatto.domain.exceptions import ConflictError, EntityNotFoundError
from chatto.domain.ports.repositories import ConversationRepository
from chatto.domain.value_objects.conversation_id import ConversationId
from chatto.domain.value_objects.user_id import UserId
from chatto.infrastructure.persistence.errors import store_operation
from chatto.infrastructure.persistence.mappers import CHAT_INCLUDE, to_conversation

logger = logging.getLogger(__name__)


class PrismaConversationRepository(ConversationRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    async def get_by_id(
        self, conversation_id: ConversationId
    ) -> Optional[Conversation]:
        async with store_operation("load chat"):
            record = await self._prisma.chat.find_unique(
                where={"id": conversation_id.value}, include=CHAT_INCLUDE
            )
        return to_conversation(record) if record else None

    async def get_direct(
        self, first: UserId, second: UserId
    ) -> Optional[Conversation]:
        async with store_operation("load direct chat"):
            record = await self._prisma.chat.find_unique(
                where={"direct_key": Conversation.direct_key(first, second)},
                include=CHAT_INCLUDE,
            )
        return to_conversation(record) if record else None

    async def create_direct(
        self, first: UserId, second: UserId
    ) -> tuple[Conversation, bool]:
        key = Conversation.direct_key(first, second)
        async with store_operation("create direct chat"):
            try:
                async with self._prisma.tx() as tx:
                    chat = await tx.chat.create(
                        data={"is_group": False, "direct_key": key}
                    )
                    await tx.chatparticipant.create_many(
                        data=[
                            {"chat_id": chat.id, "user_id": first.value},
                            {"chat_id": chat.id, "user_id": second.value},
                        ]
                    )
                created = True
            except UniqueViolationError:
                logger.info(f"[Chats] Direct chat {key} created concurrently, reusing it")
                created = False

            record = await self._prisma.chat.find_unique(
                where={"direct_key": key}, include=CHAT_INCLUDE
            )
        if record is None:
            raise EntityNotFoundError(f"Direct chat {key} vanished after creation")
        return to_conversation(record), created

    async def create_group(
        self, name: str, participant_ids: list[UserId]
    ) -> Conversation:
        async with store_operation("create group chat"):
            async with self._prisma.tx() as tx:
                chat = await tx.chat.create(data={"is_group": True, "name": name})
                await tx.chatparticipant.create_many(
                    data=[
                        {"chat_id": chat.id, "user_id": user_id.value}
                        for user_id in participant_ids
                    ]
                )
                record = await tx.chat.find_unique(
                    where={"id": chat.id}, include=CHAT_INCLUDE
                )
        return to_conversation(record)

    async def list_for_user(self, user_id: UserId) -> list[Conversation]:
        async with store_operation("list chats"):
            records = await self._prisma.chat.find_many(
                where={"participants": {"some": {"user_id": user_id.value}}},
                include=CHAT_INCLUDE,
                order={"id": "asc"},
            )
        return [to_conversation(r) for r in records]

    async def get_ids_for_user(self, user_id: UserId) -> list[ConversationId]:
        async with store_operation("list chat memberships"):
            rows = await self._prisma.chatparticipant.find_many(
                where={"user_id": user_id.value}, order={"chat_id": "asc"}
            )
        return [ConversationId(row.chat_id) for row in rows]

    async def is_participant(
        self, conversation_id: ConversationId, user_id: UserId
    ) -> bool:
        async with store_operation("check chat membership"):
            count = await self._prisma.chatparticipant.count(
                where={"chat_id": conversation_id.value, "user_id": user_id.value}
            )
        return count > 0

    async def add_participant(
        self, conversation_id: ConversationId, user_id: UserId
    ) -> Conversation:
        async with store_operation("add chat member"):
            try:
                async with self._prisma.tx() as tx:
                    await tx.chatparticipant.create(
                        data={
                            "chat_id": conversation_id.value,
                            "user_id": user_id.value,
                        }
                    )
                    record = await tx.chat.find_unique(
                        where={"id": conversation_id.value}, include=CHAT_INCLUDE
                    )
            except UniqueViolationError as e:
                raise ConflictError("User is already a member") from e
        return to_conversation(record)

    async def remove_participant(
        self, conversation_id: ConversationId, user_id: UserId
    ) -> Conversation:
        async with store_operation("remove chat member"):
            async with self._prisma.tx() as tx:
                # delete() answers None when no edge matched
                deleted = await tx.chatparticipant.delete(
                    where={
                        "chat_id_user_id": {
                            "chat_id": conversation_id.value,
                            "user_id": user_id.value,
                        }
                    }
                )
                if deleted is None:
                    raise EntityNotFoundError("User is not a member of this chat")
                record = await tx.chat.find_unique(
                    where={"id": conversation_id.value}, include=CHAT_INCLUDE
                )
        return to_conversation(record)
