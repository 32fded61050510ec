"""
Message Entity - A single immutable message in a conversation.
"""

from dataclasses import dataclass
from datetime import datetime

from chatto.domain.value_objects.conversation_id import ConversationId
from chatto.domain.value_objects.message_id import MessageId
from chatto.domain.value_objects.user_email import UserEmail
from chatto.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class Message:
    id: MessageId
    conversation_id: ConversationId
    sender_id: UserId
    sender_email: UserEmail
    content: str
    created_at: datetime

    @property
    def sort_key(self) -> tuple[datetime, int]:
        """Creation time, ties broken by insertion order."""
        return (self.created_at, self.id.value)
