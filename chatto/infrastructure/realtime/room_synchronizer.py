"""
Room Synchronizer - keeps a connection's conversation rooms equal to the
Membership Store's truth.

Runs on connection establishment, on the client's `join_chats` request, and
(for a single room) when the client follows a `join_room_instruction`.
"""

import logging

from chatto.domain.events.realtime_event import EventKind, RealtimeEvent
from chatto.domain.ports.repositories import ConversationRepository
from chatto.domain.value_objects.conversation_id import ConversationId
from chatto.domain.value_objects.room import ConversationRoom
from chatto.infrastructure.realtime.connection import LiveConnection
from chatto.infrastructure.realtime.connection_registry import ConnectionRegistry

logger = logging.getLogger(__name__)


class RoomSynchronizer:
    def __init__(
        self,
        registry: ConnectionRegistry,
        conversation_repository: ConversationRepository,
    ):
        self._registry = registry
        self._conversation_repository = conversation_repository

    async def resync(self, connection: LiveConnection) -> frozenset[ConversationId]:
        """
        Subscribe to every conversation the user participates in and drop the
        rest. Idempotent; ends with a `rooms_synced` event to the connection.
        """
        conversation_ids = await self._conversation_repository.get_ids_for_user(
            connection.user_id
        )
        added, removed = self._registry.sync_conversation_rooms(
            connection, (ConversationRoom(cid) for cid in conversation_ids)
        )
        if added or removed:
            logger.info(
                f"[Rooms] Resynced {connection!r}: +{len(added)} -{len(removed)}"
            )

        synced = frozenset(conversation_ids)
        connection.send(
            RealtimeEvent(
                EventKind.ROOMS_SYNCED,
                {"chat_ids": sorted(cid.value for cid in synced)},
            )
        )
        return synced

    async def join(
        self, connection: LiveConnection, conversation_id: ConversationId
    ) -> bool:
        """Subscribe to one conversation room after verifying membership."""
        if not await self._conversation_repository.is_participant(
            conversation_id, connection.user_id
        ):
            return False
        self._registry.subscribe(connection, ConversationRoom(conversation_id))
        return True
