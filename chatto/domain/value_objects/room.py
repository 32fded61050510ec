"""
Room identifiers - runtime broadcast groups.

A room is either conversation-scoped or user-scoped. The two are distinct
types, so a conversation room and a user room never compare equal even when
their numeric ids match.
"""

from dataclasses import dataclass
from typing import Union

from chatto.domain.value_objects.conversation_id import ConversationId
from chatto.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class ConversationRoom:
    conversation_id: ConversationId

    def __str__(self) -> str:
        return f"chat:{self.conversation_id.value}"


@dataclass(frozen=True)
class UserRoom:
    user_id: UserId

    def __str__(self) -> str:
        return f"user:{self.user_id.value}"


Room = Union[ConversationRoom, UserRoom]
