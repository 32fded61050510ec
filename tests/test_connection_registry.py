import pytest

from chatto.domain.events.realtime_event import RealtimeEvent
from chatto.domain.value_objects.conversation_id import ConversationId
from chatto.domain.value_objects.room import ConversationRoom, UserRoom
from chatto.domain.value_objects.user_id import UserId
from chatto.infrastructure.realtime import ConnectionRegistry, LiveConnection
from fakes import RecordingSink, identity

CHAT_1 = ConversationRoom(ConversationId(1))
CHAT_2 = ConversationRoom(ConversationId(2))
CHAT_3 = ConversationRoom(ConversationId(3))


def _connection(user_id: int = 1) -> LiveConnection:
    return LiveConnection(RecordingSink(), identity(user_id))


def test_register_joins_own_user_room():
    registry = ConnectionRegistry()
    connection = _connection(7)

    registry.register(connection)

    assert registry.is_registered(connection)
    assert registry.rooms_of(connection) == {UserRoom(UserId(7))}
    assert registry.connections_of(UserId(7)) == {connection}
    assert registry.connection_count == 1


def test_subscribe_and_unsubscribe_are_idempotent():
    registry = ConnectionRegistry()
    connection = _connection()
    registry.register(connection)

    assert registry.subscribe(connection, CHAT_1) is True
    assert registry.subscribe(connection, CHAT_1) is False
    assert registry.members_of(CHAT_1) == {connection}

    assert registry.unsubscribe(connection, CHAT_1) is True
    assert registry.unsubscribe(connection, CHAT_1) is False
    assert registry.members_of(CHAT_1) == frozenset()


def test_own_user_room_cannot_be_left():
    registry = ConnectionRegistry()
    connection = _connection(3)
    registry.register(connection)

    assert registry.unsubscribe(connection, UserRoom(UserId(3))) is False
    assert registry.is_subscribed(connection, UserRoom(UserId(3)))


def test_subscribe_unknown_connection_is_refused():
    registry = ConnectionRegistry()
    assert registry.subscribe(_connection(), CHAT_1) is False
    assert registry.members_of(CHAT_1) == frozenset()


def test_conversation_and_user_rooms_with_same_number_are_distinct():
    registry = ConnectionRegistry()
    connection = _connection(1)
    registry.register(connection)

    assert ConversationRoom(ConversationId(1)) != UserRoom(UserId(1))
    assert registry.members_of(ConversationRoom(ConversationId(1))) == frozenset()


def test_sync_conversation_rooms_reports_changes():
    registry = ConnectionRegistry()
    connection = _connection(1)
    registry.register(connection)
    registry.subscribe(connection, CHAT_1)
    registry.subscribe(connection, CHAT_2)

    added, removed = registry.sync_conversation_rooms(connection, [CHAT_2, CHAT_3])

    assert added == {CHAT_3}
    assert removed == {CHAT_1}
    assert registry.rooms_of(connection) == {UserRoom(UserId(1)), CHAT_2, CHAT_3}

    added, removed = registry.sync_conversation_rooms(connection, [CHAT_2, CHAT_3])
    assert (added, removed) == (set(), set())


def test_unregister_removes_every_membership_and_closes():
    registry = ConnectionRegistry()
    connection = _connection(1)
    other = _connection(1)
    registry.register(connection)
    registry.register(other)
    registry.subscribe(connection, CHAT_1)

    registry.unregister(connection)

    assert not registry.is_registered(connection)
    assert connection.closed
    assert registry.members_of(CHAT_1) == frozenset()
    assert registry.connections_of(UserId(1)) == {other}
    assert connection.send(RealtimeEvent.error("late")) is False


def test_unregister_twice_is_harmless():
    registry = ConnectionRegistry()
    connection = _connection()
    registry.register(connection)

    registry.unregister(connection)
    registry.unregister(connection)

    assert registry.connection_count == 0


@pytest.mark.parametrize("count", [1, 3])
def test_all_devices_of_a_user_share_the_user_room(count):
    registry = ConnectionRegistry()
    connections = [_connection(5) for _ in range(count)]
    for connection in connections:
        registry.register(connection)

    assert registry.connections_of(UserId(5)) == set(connections)
