"""
Conversation Entity - A direct or group chat and its participant set.

A conversation owns its participants. Direct conversations always have
exactly two participants and no name; group conversations carry a
non-blank name. A conversation starts in the `created` state and becomes
`active` once its first message exists.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional

from chatto.domain.value_objects.conversation_id import ConversationId
from chatto.domain.value_objects.user_email import UserEmail
from chatto.domain.value_objects.user_id import UserId


class ConversationKind(str, Enum):
    DIRECT = "direct"
    GROUP = "group"


@dataclass(frozen=True)
class Participant:
    user_id: UserId
    email: UserEmail
    joined_at: datetime


@dataclass
class Conversation:
    id: ConversationId
    kind: ConversationKind
    created_at: datetime
    participants: list[Participant] = field(default_factory=list)
    name: Optional[str] = None
    activated_at: Optional[datetime] = None

    def __post_init__(self):
        if self.kind == ConversationKind.GROUP:
            if not self.name or not self.name.strip():
                raise ValueError("Group conversation requires a name")
        elif self.name:
            raise ValueError("Direct conversation cannot have a name")

    @property
    def is_group(self) -> bool:
        return self.kind == ConversationKind.GROUP

    @property
    def is_active(self) -> bool:
        return self.activated_at is not None

    @property
    def participant_ids(self) -> list[UserId]:
        return [p.user_id for p in self.participants]

    def has_participant(self, user_id: UserId) -> bool:
        return any(p.user_id == user_id for p in self.participants)

    def other_participants(self, user_id: UserId) -> list[Participant]:
        return [p for p in self.participants if p.user_id != user_id]

    def display_name_for(self, viewer_id: UserId) -> str:
        """Group name, or the other participant's email for direct chats."""
        if self.is_group:
            return self.name or ""
        others = self.other_participants(viewer_id)
        return others[0].email.value if others else ""

    @staticmethod
    def direct_key(first: UserId, second: UserId) -> str:
        """Order-independent key identifying the direct chat of a user pair."""
        low, high = sorted((first.value, second.value))
        return f"{low}:{high}"

    @staticmethod
    def normalize_group_name(name: Optional[str]) -> str:
        return (name or "").strip()

    @staticmethod
    def unique_user_ids(user_ids: Iterable[UserId]) -> list[UserId]:
        seen: list[UserId] = []
        for user_id in user_ids:
            if user_id not in seen:
                seen.append(user_id)
        return seen
