"""
ConversationId Value Object - identity of a direct or group conversation.
"""

from dataclasses import dataclass

from chatto.domain.value_objects._int_id import validate_positive_id


@dataclass(frozen=True)
class ConversationId:
    value: int  # chats.id

    def __post_init__(self):
        validate_positive_id("ConversationId", self.value)

    def __str__(self) -> str:
        return str(self.value)
