import asyncio

import pytest

from chatto.domain.value_objects.conversation_id import ConversationId
from chatto.domain.value_objects.room import ConversationRoom
from chatto.infrastructure.realtime import (
    ConnectionRegistry,
    FanoutDispatcher,
    LiveConnection,
    TypingMonitor,
)
from fakes import RecordingSink, identity, settle

CHAT = ConversationId(1)


def _setup(timeout: float = 0.05):
    registry = ConnectionRegistry()
    dispatcher = FanoutDispatcher(registry)
    monitor = TypingMonitor(registry, dispatcher, timeout_seconds=timeout)
    connections = []
    for user_id in (1, 2):
        sink = RecordingSink()
        connection = LiveConnection(sink, identity(user_id))
        connection.start()
        registry.register(connection)
        registry.subscribe(connection, ConversationRoom(CHAT))
        connections.append((connection, sink))
    return registry, monitor, connections


@pytest.mark.anyio
async def test_typing_started_goes_to_everyone_but_the_typist():
    _, monitor, [(typist, typist_sink), (_, peer_sink)] = _setup()

    assert monitor.started(typist, CHAT) is True
    await settle()

    assert typist_sink.sent == []
    assert peer_sink.events("typing_started") == [
        {
            "event": "typing_started",
            "data": {"chat_id": 1, "user": {"id": 1, "email": "user1@example.com"}},
        }
    ]


@pytest.mark.anyio
async def test_repeated_typing_signals_start_once():
    _, monitor, [(typist, _), (_, peer_sink)] = _setup(timeout=1.0)

    monitor.started(typist, CHAT)
    monitor.started(typist, CHAT)
    monitor.started(typist, CHAT)
    await settle()

    assert len(peer_sink.events("typing_started")) == 1
    monitor.clear(typist)


@pytest.mark.anyio
async def test_explicit_stop_emits_typing_stopped():
    _, monitor, [(typist, _), (_, peer_sink)] = _setup(timeout=1.0)

    monitor.started(typist, CHAT)
    assert monitor.stopped(typist, CHAT) is True
    assert monitor.stopped(typist, CHAT) is False
    await settle()

    assert [f["event"] for f in peer_sink.sent] == ["typing_started", "typing_stopped"]
    assert not monitor.is_typing(typist, CHAT)


@pytest.mark.anyio
async def test_silence_expires_into_typing_stopped():
    _, monitor, [(typist, _), (_, peer_sink)] = _setup(timeout=0.05)

    monitor.started(typist, CHAT)
    await asyncio.sleep(0.15)
    await settle()

    assert [f["event"] for f in peer_sink.sent] == ["typing_started", "typing_stopped"]
    assert not monitor.is_typing(typist, CHAT)


@pytest.mark.anyio
async def test_clear_on_disconnect_stops_all_indicators():
    registry, monitor, [(typist, _), (_, peer_sink)] = _setup(timeout=1.0)
    other_chat = ConversationId(2)
    registry.subscribe(typist, ConversationRoom(other_chat))

    monitor.started(typist, CHAT)
    monitor.started(typist, other_chat)
    monitor.clear(typist)
    await settle()

    assert not monitor.is_typing(typist, CHAT)
    assert not monitor.is_typing(typist, other_chat)
    assert peer_sink.events("typing_stopped") == [
        {
            "event": "typing_stopped",
            "data": {"chat_id": 1, "user": {"id": 1, "email": "user1@example.com"}},
        }
    ]


@pytest.mark.anyio
async def test_typing_requires_room_subscription():
    registry, monitor, [(typist, _), (_, peer_sink)] = _setup()
    registry.unsubscribe(typist, ConversationRoom(CHAT))

    assert monitor.started(typist, CHAT) is False
    await settle()

    assert peer_sink.sent == []
