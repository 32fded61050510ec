"""
Realtime events pushed to live connections.

Wire format: {"event": <kind>, "data": {...}}
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class EventKind(str, Enum):
    NEW_MESSAGE = "new_message"
    NEW_CONVERSATION = "new_conversation"
    JOIN_ROOM_INSTRUCTION = "join_room_instruction"  # a command, not a domain event
    CONVERSATION_UPDATED = "conversation_updated"
    REMOVED_FROM_CONVERSATION = "removed_from_conversation"
    TYPING_STARTED = "typing_started"
    TYPING_STOPPED = "typing_stopped"
    ROOMS_SYNCED = "rooms_synced"
    ERROR = "error"


@dataclass(frozen=True)
class RealtimeEvent:
    kind: EventKind
    data: dict[str, Any] = field(default_factory=dict)

    def to_wire(self) -> dict[str, Any]:
        return {"event": self.kind.value, "data": self.data}

    @classmethod
    def error(cls, message: str) -> "RealtimeEvent":
        return cls(EventKind.ERROR, {"message": message})
