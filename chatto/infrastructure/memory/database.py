"""Shared tables of the memory store."""

import asyncio
import itertools
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

from chatto.domain.entities.conversation import (
    Conversation,
    ConversationKind,
    Participant,
)
from chatto.domain.entities.message import Message
from chatto.domain.entities.session import Session
from chatto.domain.entities.user import User
from chatto.domain.value_objects.conversation_id import ConversationId


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ChatRow:
    id: int
    is_group: bool
    created_at: datetime
    name: Optional[str] = None
    direct_key: Optional[str] = None
    activated_at: Optional[datetime] = None


@dataclass(frozen=True)
class ParticipantRow:
    chat_id: int
    user_id: int
    joined_at: datetime


class MemoryDatabase:
    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self.clock = clock
        self.lock = asyncio.Lock()
        self.users: dict[int, User] = {}
        self.sessions: dict[str, Session] = {}
        self.chats: dict[int, ChatRow] = {}
        # (chat_id, user_id) -> edge, kept in insertion order
        self.participants: dict[tuple[int, int], ParticipantRow] = {}
        self.messages: list[Message] = []
        self._user_ids = itertools.count(1)
        self._chat_ids = itertools.count(1)
        self._message_ids = itertools.count(1)

    def next_user_id(self) -> int:
        return next(self._user_ids)

    def next_chat_id(self) -> int:
        return next(self._chat_ids)

    def next_message_id(self) -> int:
        return next(self._message_ids)

    def participant_rows(self, chat_id: int) -> list[ParticipantRow]:
        return [row for (cid, _), row in self.participants.items() if cid == chat_id]

    def build_conversation(self, chat: ChatRow) -> Conversation:
        participants = [
            Participant(
                user_id=self.users[row.user_id].id,
                email=self.users[row.user_id].email,
                joined_at=row.joined_at,
            )
            for row in self.participant_rows(chat.id)
            if row.user_id in self.users
        ]
        return Conversation(
            id=ConversationId(chat.id),
            kind=ConversationKind.GROUP if chat.is_group else ConversationKind.DIRECT,
            name=chat.name,
            created_at=chat.created_at,
            activated_at=chat.activated_at,
            participants=participants,
        )
