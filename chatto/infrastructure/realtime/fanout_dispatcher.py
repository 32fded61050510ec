"""
Fan-out Dispatcher - delivers one event to every live connection of a room.

Guarantees per call:
- The member set is a snapshot taken atomically at broadcast time.
- Each connection in the snapshot gets the event at most once.
- A connection that fails (closed, outbox full) is skipped and logged;
  delivery to the others continues and nothing is retried.
"""

import logging
from typing import Iterable, Optional

from chatto.domain.events.realtime_event import RealtimeEvent
from chatto.domain.ports.event_publisher import EventPublisher
from chatto.domain.value_objects.room import Room, UserRoom
from chatto.domain.value_objects.user_id import UserId
from chatto.infrastructure.realtime.connection import LiveConnection
from chatto.infrastructure.realtime.connection_registry import ConnectionRegistry
from chatto.observability.metrics import increment_delivered, increment_dropped

logger = logging.getLogger(__name__)


class FanoutDispatcher(EventPublisher):
    def __init__(self, registry: ConnectionRegistry):
        self._registry = registry

    def broadcast_to_room(
        self,
        room: Room,
        event: RealtimeEvent,
        exclude: Optional[LiveConnection] = None,
    ) -> int:
        members = self._registry.members_of(room)
        delivered = self._deliver(
            (c for c in members if exclude is None or c.id != exclude.id), event
        )
        logger.debug(
            f"[Fanout] {event.kind.value} -> {room}: {delivered}/{len(members)} delivered"
        )
        return delivered

    def broadcast_to_user(self, user_id: UserId, event: RealtimeEvent) -> int:
        return self.broadcast_to_room(UserRoom(user_id), event)

    def unicast(self, connection: LiveConnection, event: RealtimeEvent) -> bool:
        return self._deliver([connection], event) == 1

    def _deliver(self, connections: Iterable[LiveConnection], event: RealtimeEvent) -> int:
        delivered = 0
        for connection in connections:
            if connection.send(event):
                delivered += 1
                increment_delivered(event.kind.value)
            else:
                increment_dropped(event.kind.value)
                logger.info(f"[Fanout] Dropped {event.kind.value} for {connection!r}")
        return delivered
