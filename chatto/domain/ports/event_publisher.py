"""
Event Publisher Port - realtime fan-out as seen by the application layer.
Implementation: chatto/infrastructure/realtime/fanout_dispatcher.py
"""

from abc import ABC, abstractmethod

from chatto.domain.events.realtime_event import RealtimeEvent
from chatto.domain.value_objects.room import Room
from chatto.domain.value_objects.user_id import UserId


class EventPublisher(ABC):
    @abstractmethod
    def broadcast_to_room(self, room: Room, event: RealtimeEvent) -> int:
        """Deliver to every connection subscribed to the room; returns delivered count."""

    @abstractmethod
    def broadcast_to_user(self, user_id: UserId, event: RealtimeEvent) -> int:
        """Deliver to every live connection of the user (all devices)."""
