"""
LiveConnection - one authenticated WebSocket link.

Outbound events go through a bounded outbox drained by a dedicated writer
task, so a slow or dead peer never blocks the code that broadcasts to it.
Once closed, the connection accepts nothing and anything still queued is
discarded.
"""

import asyncio
import logging
from typing import Any, Optional, Protocol
from uuid import uuid4

from chatto.domain.events.realtime_event import RealtimeEvent
from chatto.domain.value_objects.auth_identity import AuthIdentity
from chatto.domain.value_objects.user_id import UserId
from chatto.observability.metrics import MetricsErrorType, increment_error

logger = logging.getLogger(__name__)


class JsonSink(Protocol):
    async def send_json(self, data: Any) -> None: ...


class LiveConnection:
    def __init__(self, sink: JsonSink, identity: AuthIdentity, outbox_size: int = 256):
        self.id = uuid4().hex
        self.identity = identity
        self._sink = sink
        self._outbox: asyncio.Queue[dict] = asyncio.Queue(maxsize=outbox_size)
        self._closed = False
        self._writer: Optional[asyncio.Task] = None

    def __repr__(self) -> str:
        return f"LiveConnection(id={self.id[:8]}, user={self.identity.user_id})"

    @property
    def user_id(self) -> UserId:
        return self.identity.user_id

    @property
    def closed(self) -> bool:
        return self._closed

    def start(self) -> None:
        if self._writer is None and not self._closed:
            self._writer = asyncio.create_task(
                self._write_loop(), name=f"ws-writer-{self.id[:8]}"
            )

    def send(self, event: RealtimeEvent) -> bool:
        """Queue an event without blocking. False when closed or saturated."""
        if self._closed:
            return False
        try:
            self._outbox.put_nowait(event.to_wire())
        except asyncio.QueueFull:
            logger.warning(f"[Realtime] Outbox full for {self!r}, dropping {event.kind.value}")
            return False
        return True

    async def _write_loop(self) -> None:
        while True:
            payload = await self._outbox.get()
            try:
                await self._sink.send_json(payload)
            except Exception as e:
                # Transport failure only ends this connection
                logger.info(f"[Realtime] Send to {self!r} failed: {type(e).__name__}: {e}")
                increment_error(MetricsErrorType.SEND_FAILED)
                self._closed = True
                return

    def close(self) -> None:
        """Stop accepting events, discard the backlog and cancel the writer."""
        self._closed = True
        while not self._outbox.empty():
            self._outbox.get_nowait()
        if self._writer is not None and not self._writer.done():
            if self._writer is not asyncio.current_task():
                self._writer.cancel()

    async def wait_closed(self) -> None:
        if self._writer is None:
            return
        try:
            await self._writer
        except asyncio.CancelledError:
            pass
