"""
VALUE OBJECTS - Immutable domain types

Each value object:
- Has no identity (compared by value, not by ID)
- Is immutable (frozen dataclass)
- Validates itself on creation
"""

from chatto.domain.value_objects.user_id import UserId
from chatto.domain.value_objects.user_email import UserEmail
from chatto.domain.value_objects.conversation_id import ConversationId
from chatto.domain.value_objects.message_id import MessageId
from chatto.domain.value_objects.room import ConversationRoom, UserRoom, Room
from chatto.domain.value_objects.auth_identity import AuthIdentity

__all__ = [
    "UserId",
    "UserEmail",
    "ConversationId",
    "MessageId",
    "ConversationRoom",
    "UserRoom",
    "Room",
    "AuthIdentity",
]
