"""
DTOs - Data Transfer Objects

- chat.py → ParticipantDTO, LastMessageDTO, ConversationDTO, MessageDTO
- auth.py → UserDTO

DTOs are the JSON shape shared by HTTP responses and realtime event payloads;
entities are for business logic.
"""

from chatto.application.dto.auth import UserDTO
from chatto.application.dto.chat import (
    ConversationDTO,
    LastMessageDTO,
    MessageDTO,
    ParticipantDTO,
)

__all__ = [
    "UserDTO",
    "ConversationDTO",
    "LastMessageDTO",
    "MessageDTO",
    "ParticipantDTO",
]
