"""
Realtime WebSocket endpoint.

Handshake:
    GET /ws?token=<jwt>   (or Authorization: Bearer <jwt>)
    The credential is verified before the socket is accepted; a bad one
    closes the handshake with 1008 (policy violation) and nothing else happens.

After accept:
    1. LiveConnection registered (joins its own user room)
    2. Initial resync: subscribed to every conversation room of the user,
       acknowledged with `rooms_synced`

Client → Server: {"event": ..., "data": {...}}
    join_chats                       full resync
    join_chat     {"chat_id": 3}     subscribe one room after join_room_instruction
    send_message  {"chat_id": 3, "content": "hi"}
                                     same as POST /chats/3/messages; the sender
                                     sees it as new_message on the chat room
    typing        {"chat_id": 3}     relayed only while still a participant
    stop_typing   {"chat_id": 3}

Anything else, or a frame that is not valid JSON of that shape, gets an
`error` event back on this connection only.
"""

from logging import getLogger
from typing import Any, Optional

from dishka import AsyncContainer
from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status
from pydantic import BaseModel, PositiveInt, ValidationError

from chatto.application.commands.chats import SendMessageCommand, SendMessageHandler
from chatto.config.logging_config import correlation_id_var
from chatto.config.settings import Config
from chatto.domain.events.realtime_event import RealtimeEvent
from chatto.domain.exceptions import (
    AccessDeniedError,
    DomainValidationError,
    StoreError,
    UnauthenticatedError,
)
from chatto.domain.ports.repositories import ConversationRepository
from chatto.domain.value_objects.auth_identity import AuthIdentity
from chatto.domain.value_objects.conversation_id import ConversationId
from chatto.infrastructure.realtime import (
    ConnectionRegistry,
    LiveConnection,
    RoomSynchronizer,
    TypingMonitor,
)
from chatto.observability.metrics import MetricsErrorType, increment_error
from chatto.presentation.dependencies.auth import authenticate_token

logger = getLogger(__name__)

router = APIRouter(tags=["realtime"])


# ==================== CLIENT EVENTS ====================


class ClientEvent(BaseModel):
    event: str
    data: dict[str, Any] = {}


class ChatRef(BaseModel):
    chat_id: PositiveInt


class OutgoingMessage(ChatRef):
    content: str


def _extract_token(websocket: WebSocket) -> Optional[str]:
    token = websocket.query_params.get("token")
    if token:
        return token
    header = websocket.headers.get("authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return None


async def _authenticate(container: AsyncContainer, websocket: WebSocket) -> Optional[AuthIdentity]:
    token = _extract_token(websocket)
    if not token:
        return None
    async with container() as request_container:
        try:
            return await authenticate_token(request_container, token)
        except UnauthenticatedError as e:
            logger.info(f"[WS] Handshake rejected: {e}")
            return None


class SocketSession:
    """Per-connection dispatch of client events."""

    def __init__(self, connection: LiveConnection, container: AsyncContainer):
        self.connection = connection
        self._container = container

    async def resync(self) -> None:
        async with self._container() as request_container:
            synchronizer = await request_container.get(RoomSynchronizer)
            await synchronizer.resync(self.connection)

    async def handle(self, raw: Any) -> None:
        try:
            event = ClientEvent.model_validate(raw)
        except ValidationError:
            self.reject("Malformed event")
            return

        if event.event == "join_chats":
            await self.resync()
            return

        if event.event == "send_message":
            try:
                outgoing = OutgoingMessage.model_validate(event.data)
            except ValidationError:
                self.reject("send_message requires a chat_id and content")
                return
            await self._send_message(ConversationId(outgoing.chat_id), outgoing.content)
            return

        if event.event not in ("join_chat", "typing", "stop_typing"):
            self.reject(f"Unknown event: {event.event}")
            return

        try:
            conversation_id = ConversationId(ChatRef.model_validate(event.data).chat_id)
        except ValidationError:
            self.reject(f"{event.event} requires a chat_id")
            return

        if event.event == "join_chat":
            await self._join(conversation_id)
        elif event.event == "typing":
            await self._typing(conversation_id)
        else:
            typing = await self._container.get(TypingMonitor)
            typing.stopped(self.connection, conversation_id)

    async def _send_message(self, conversation_id: ConversationId, content: str) -> None:
        async with self._container() as request_container:
            handler = await request_container.get(SendMessageHandler)
            try:
                await handler.execute(
                    SendMessageCommand(
                        requester_id=self.connection.identity.user_id,
                        conversation_id=conversation_id,
                        content=content,
                    )
                )
            except (AccessDeniedError, DomainValidationError) as e:
                self.reject(str(e))
            except StoreError as e:
                logger.error(f"[WS] send_message from {self.connection!r} failed: {e}")
                increment_error(MetricsErrorType.STORE_FAILED)
                self.reject("Failed to send message")

    async def _typing(self, conversation_id: ConversationId) -> None:
        typing = await self._container.get(TypingMonitor)
        # Removal leaves the room subscribed until the next resync
        async with self._container() as request_container:
            conversations = await request_container.get(ConversationRepository)
            is_participant = await conversations.is_participant(
                conversation_id, self.connection.identity.user_id
            )
        if not is_participant:
            typing.stopped(self.connection, conversation_id)
            self.reject(f"Not a participant of chat {conversation_id.value}")
        elif not typing.started(self.connection, conversation_id):
            self.reject(f"Not subscribed to chat {conversation_id.value}")

    async def _join(self, conversation_id: ConversationId) -> None:
        async with self._container() as request_container:
            synchronizer = await request_container.get(RoomSynchronizer)
            if not await synchronizer.join(self.connection, conversation_id):
                self.reject(f"Not a participant of chat {conversation_id.value}")

    def reject(self, message: str) -> None:
        self.connection.send(RealtimeEvent.error(message))


# ==================== ENDPOINT ====================


@router.websocket("/ws")
async def realtime_socket(websocket: WebSocket):
    container: AsyncContainer = websocket.app.state.dishka_container
    correlation_id_var.set(websocket.headers.get("X-Correlation-ID", "websocket"))

    identity = await _authenticate(container, websocket)
    if identity is None:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()

    registry = await container.get(ConnectionRegistry)
    typing = await container.get(TypingMonitor)
    connection = LiveConnection(
        websocket, identity, outbox_size=Config.CONNECTION_OUTBOX_SIZE
    )
    connection.start()
    registry.register(connection)
    session = SocketSession(connection, container)
    logger.info(f"[WS] User {identity.user_id} connected as {connection!r}")

    try:
        await session.resync()
        while not connection.closed:
            try:
                raw = await websocket.receive_json()
            except (ValueError, KeyError):
                # Not JSON, or a binary frame
                session.reject("Malformed event")
                continue
            await session.handle(raw)
    except WebSocketDisconnect:
        pass
    except Exception as e:
        logger.error(f"[WS] Handler for {connection!r} failed: {type(e).__name__}: {e}")
        increment_error(MetricsErrorType.SOCKET_HANDLER_FAILED)
    finally:
        typing.clear(connection)
        registry.unregister(connection)
        await connection.wait_closed()
        logger.info(f"[WS] {connection!r} disconnected")
