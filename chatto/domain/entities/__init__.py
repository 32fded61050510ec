"""
ENTITIES - Business objects with identity

Each entity:
- Has a unique identifier (issued by the store)
- Has behavior (methods)
- Pure Python dataclasses (no ORM, no Pydantic)
"""

from chatto.domain.entities.user import User
from chatto.domain.entities.session import Session
from chatto.domain.entities.conversation import (
    Conversation,
    ConversationKind,
    Participant,
)
from chatto.domain.entities.message import Message

__all__ = [
    "User",
    "Session",
    "Conversation",
    "ConversationKind",
    "Participant",
    "Message",
]
