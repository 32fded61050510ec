"""
Mapping between Prisma records and domain entities.

Prisma models (prisma/schema.prisma): User, Session, Chat, ChatParticipant, Message.
"""

from prisma import models

from chatto.domain.entities.conversation import (
    Conversation,
    ConversationKind,
    Participant,
)
from chatto.domain.entities.message import Message
from chatto.domain.entities.session import Session
from chatto.domain.entities.user import User
from chatto.domain.value_objects.conversation_id import ConversationId
from chatto.domain.value_objects.message_id import MessageId
from chatto.domain.value_objects.user_email import UserEmail
from chatto.domain.value_objects.user_id import UserId

# Chat include that loads the participant set with user emails
CHAT_INCLUDE = {
    "participants": {
        "include": {"user": True},
        "order_by": {"id": "asc"},
    }
}


def to_user(record: models.User) -> User:
    return User(
        id=UserId(record.id),
        email=UserEmail(record.email),
        password_hash=record.password,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


def to_session(record: models.Session) -> Session:
    return Session(
        user_id=UserId(record.user_id),
        token=record.token,
        created_at=record.created_at,
        expires_at=record.expires_at,
    )


def to_conversation(record: models.Chat) -> Conversation:
    participants = [
        Participant(
            user_id=UserId(p.user_id),
            email=UserEmail(p.user.email),
            joined_at=p.created_at,
        )
        for p in (record.participants or [])
        if p.user is not None
    ]
    return Conversation(
        id=ConversationId(record.id),
        kind=ConversationKind.GROUP if record.is_group else ConversationKind.DIRECT,
        name=record.name,
        created_at=record.created_at,
        activated_at=record.activated_at,
        participants=participants,
    )


def to_message(record: models.Message) -> Message:
    return Message(
        id=MessageId(record.id),
        conversation_id=ConversationId(record.chat_id),
        sender_id=UserId(record.sender_id),
        sender_email=UserEmail(record.sender.email),
        content=record.content,
        created_at=record.created_at,
    )
