"""
Typing Monitor - relays typing indicators for conversation rooms.

Typing signals are best-effort: no persistence, no retry. A connection that
keeps sending `typing` only produces one `typing_started`; silence for
`timeout_seconds`, an explicit `stop_typing`, or a disconnect produces the
matching `typing_stopped`.
"""

import asyncio
import logging

from chatto.domain.events.realtime_event import EventKind, RealtimeEvent
from chatto.domain.value_objects.conversation_id import ConversationId
from chatto.domain.value_objects.room import ConversationRoom
from chatto.infrastructure.realtime.connection import LiveConnection
from chatto.infrastructure.realtime.connection_registry import ConnectionRegistry
from chatto.infrastructure.realtime.fanout_dispatcher import FanoutDispatcher

logger = logging.getLogger(__name__)


class TypingMonitor:
    def __init__(
        self,
        registry: ConnectionRegistry,
        dispatcher: FanoutDispatcher,
        timeout_seconds: float = 2.0,
    ):
        self._registry = registry
        self._dispatcher = dispatcher
        self._timeout = timeout_seconds
        self._timers: dict[tuple[str, ConversationId], asyncio.TimerHandle] = {}

    def started(self, connection: LiveConnection, conversation_id: ConversationId) -> bool:
        """False when the connection is not subscribed to the conversation room."""
        room = ConversationRoom(conversation_id)
        if not self._registry.is_subscribed(connection, room):
            return False

        key = (connection.id, conversation_id)
        previous = self._timers.pop(key, None)
        if previous is not None:
            previous.cancel()
        else:
            self._broadcast(EventKind.TYPING_STARTED, connection, conversation_id)

        loop = asyncio.get_running_loop()
        self._timers[key] = loop.call_later(
            self._timeout, self._expire, connection, conversation_id
        )
        return True

    def stopped(self, connection: LiveConnection, conversation_id: ConversationId) -> bool:
        handle = self._timers.pop((connection.id, conversation_id), None)
        if handle is None:
            return False
        handle.cancel()
        self._broadcast(EventKind.TYPING_STOPPED, connection, conversation_id)
        return True

    def clear(self, connection: LiveConnection) -> None:
        """Stop every indicator of a disconnecting connection."""
        for key in [k for k in self._timers if k[0] == connection.id]:
            self.stopped(connection, key[1])

    def is_typing(self, connection: LiveConnection, conversation_id: ConversationId) -> bool:
        return (connection.id, conversation_id) in self._timers

    def _expire(self, connection: LiveConnection, conversation_id: ConversationId) -> None:
        if self._timers.pop((connection.id, conversation_id), None) is None:
            return
        logger.debug(f"[Typing] {connection!r} idle in chat {conversation_id}")
        self._broadcast(EventKind.TYPING_STOPPED, connection, conversation_id)

    def _broadcast(
        self, kind: EventKind, connection: LiveConnection, conversation_id: ConversationId
    ) -> None:
        self._dispatcher.broadcast_to_room(
            ConversationRoom(conversation_id),
            RealtimeEvent(
                kind,
                {
                    "chat_id": conversation_id.value,
                    "user": connection.identity.to_dict(),
                },
            ),
            exclude=connection,
        )
