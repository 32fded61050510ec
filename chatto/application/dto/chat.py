"""Chat DTOs for API responses and realtime event payloads."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel

from chatto.domain.entities.conversation import Conversation
from chatto.domain.entities.message import Message
from chatto.domain.value_objects.user_id import UserId


class ParticipantDTO(BaseModel):
    id: int
    email: str


class LastMessageDTO(BaseModel):
    content: str
    created_at: datetime
    sender_email: str


class MessageDTO(BaseModel):
    id: int
    chat_id: int
    sender_id: int
    sender_email: str
    content: str
    created_at: datetime

    @classmethod
    def from_entity(cls, message: Message) -> "MessageDTO":
        return cls(
            id=message.id.value,
            chat_id=message.conversation_id.value,
            sender_id=message.sender_id.value,
            sender_email=message.sender_email.value,
            content=message.content,
            created_at=message.created_at,
        )


class ConversationDTO(BaseModel):
    """
    A conversation as seen by one viewer.

    {
        "id": 1,
        "name": null,
        "is_group": false,
        "created_at": "...",
        "display_name": "bob@example.com",
        "participants": [{"id": 1, "email": "..."}, ...],
        "last_message": {"content": "...", "created_at": "...", "sender_email": "..."}
    }
    """

    id: int
    name: Optional[str] = None
    is_group: bool
    created_at: datetime
    display_name: str
    participants: list[ParticipantDTO]
    last_message: Optional[LastMessageDTO] = None

    @classmethod
    def from_entity(
        cls,
        conversation: Conversation,
        viewer_id: UserId,
        last_message: Optional[Message] = None,
    ) -> "ConversationDTO":
        return cls(
            id=conversation.id.value,
            name=conversation.name,
            is_group=conversation.is_group,
            created_at=conversation.created_at,
            display_name=conversation.display_name_for(viewer_id),
            participants=[
                ParticipantDTO(id=p.user_id.value, email=p.email.value)
                for p in conversation.participants
            ],
            last_message=(
                LastMessageDTO(
                    content=last_message.content,
                    created_at=last_message.created_at,
                    sender_email=last_message.sender_email.value,
                )
                if last_message
                else None
            ),
        )

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json")
