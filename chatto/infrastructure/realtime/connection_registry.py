"""
Connection Registry - which live connections exist and which rooms they
are subscribed to.

State:
- connections:    connection id -> LiveConnection
- room members:   Room -> {connection id}
- subscriptions:  connection id -> {Room}

Every registered connection is a member of its own UserRoom for its whole
lifetime; conversation rooms come and go through subscribe/unsubscribe or
sync_conversation_rooms. All methods run under one lock and never await,
so a broadcast snapshot never sees a half-registered or half-removed
connection.
"""

import logging
import threading
from collections import defaultdict
from typing import Iterable

from chatto.domain.value_objects.room import ConversationRoom, Room, UserRoom
from chatto.domain.value_objects.user_id import UserId
from chatto.infrastructure.realtime.connection import LiveConnection
from chatto.observability.metrics import set_live_connections

logger = logging.getLogger(__name__)


class ConnectionRegistry:
    def __init__(self):
        self._lock = threading.RLock()
        self._connections: dict[str, LiveConnection] = {}
        self._members: dict[Room, set[str]] = defaultdict(set)
        self._subscriptions: dict[str, set[Room]] = {}

    # ==================== LIFECYCLE ====================

    def register(self, connection: LiveConnection) -> None:
        with self._lock:
            if connection.id in self._connections:
                return
            self._connections[connection.id] = connection
            self._subscriptions[connection.id] = set()
            self._add(connection.id, UserRoom(connection.user_id))
            set_live_connections(len(self._connections))
        logger.info(f"[Registry] Registered {connection!r}")

    def unregister(self, connection: LiveConnection) -> None:
        """
        Close the connection and drop it from every room. Once this returns,
        no broadcast can reach the connection.
        """
        with self._lock:
            connection.close()
            if self._connections.pop(connection.id, None) is None:
                return
            for room in self._subscriptions.pop(connection.id, set()):
                self._discard_member(room, connection.id)
            set_live_connections(len(self._connections))
        logger.info(f"[Registry] Unregistered {connection!r}")

    # ==================== SUBSCRIPTIONS ====================

    def subscribe(self, connection: LiveConnection, room: Room) -> bool:
        with self._lock:
            if connection.id not in self._connections:
                return False
            if room in self._subscriptions[connection.id]:
                return False
            self._add(connection.id, room)
            return True

    def unsubscribe(self, connection: LiveConnection, room: Room) -> bool:
        with self._lock:
            if room == UserRoom(connection.user_id):
                return False
            subscriptions = self._subscriptions.get(connection.id)
            if not subscriptions or room not in subscriptions:
                return False
            subscriptions.discard(room)
            self._discard_member(room, connection.id)
            return True

    def sync_conversation_rooms(
        self, connection: LiveConnection, rooms: Iterable[ConversationRoom]
    ) -> tuple[set[ConversationRoom], set[ConversationRoom]]:
        """
        Make the connection's conversation rooms exactly `rooms`.

        Returns (added, removed). Applied atomically; the user room is untouched.
        """
        target = set(rooms)
        with self._lock:
            subscriptions = self._subscriptions.get(connection.id)
            if subscriptions is None:
                return set(), set()
            current = {r for r in subscriptions if isinstance(r, ConversationRoom)}
            added = target - current
            removed = current - target
            for room in removed:
                subscriptions.discard(room)
                self._discard_member(room, connection.id)
            for room in added:
                self._add(connection.id, room)
            return added, removed

    # ==================== READS ====================

    def members_of(self, room: Room) -> frozenset[LiveConnection]:
        with self._lock:
            return frozenset(
                self._connections[cid] for cid in self._members.get(room, ())
            )

    def connections_of(self, user_id: UserId) -> frozenset[LiveConnection]:
        return self.members_of(UserRoom(user_id))

    def rooms_of(self, connection: LiveConnection) -> frozenset[Room]:
        with self._lock:
            return frozenset(self._subscriptions.get(connection.id, ()))

    def is_subscribed(self, connection: LiveConnection, room: Room) -> bool:
        with self._lock:
            return room in self._subscriptions.get(connection.id, ())

    def is_registered(self, connection: LiveConnection) -> bool:
        with self._lock:
            return connection.id in self._connections

    @property
    def connection_count(self) -> int:
        with self._lock:
            return len(self._connections)

    # ==================== INTERNALS (lock held) ====================

    def _add(self, connection_id: str, room: Room) -> None:
        self._subscriptions[connection_id].add(room)
        self._members[room].add(connection_id)

    def _discard_member(self, room: Room, connection_id: str) -> None:
        members = self._members.get(room)
        if members is None:
            return
        members.discard(connection_id)
        if not members:
            del self._members[room]
