from datetime import datetime, timedelta, timezone

import pytest

from chatto.domain.entities.conversation import Conversation, ConversationKind, Participant
from chatto.domain.entities.session import Session
from chatto.domain.events.realtime_event import EventKind, RealtimeEvent
from chatto.domain.value_objects import (
    ConversationId,
    ConversationRoom,
    UserEmail,
    UserId,
    UserRoom,
)

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _participant(user_id: int, email: str) -> Participant:
    return Participant(UserId(user_id), UserEmail(email), NOW)


def test_direct_key_ignores_order():
    assert Conversation.direct_key(UserId(9), UserId(2)) == "2:9"
    assert Conversation.direct_key(UserId(2), UserId(9)) == "2:9"


def test_display_name_depends_on_viewer():
    direct = Conversation(
        id=ConversationId(1),
        kind=ConversationKind.DIRECT,
        created_at=NOW,
        participants=[_participant(1, "a@x.io"), _participant(2, "b@x.io")],
    )
    group = Conversation(
        id=ConversationId(2), kind=ConversationKind.GROUP, created_at=NOW, name="Team"
    )

    assert direct.display_name_for(UserId(1)) == "b@x.io"
    assert direct.display_name_for(UserId(2)) == "a@x.io"
    assert group.display_name_for(UserId(1)) == "Team"


def test_conversation_kind_and_name_must_agree():
    with pytest.raises(ValueError):
        Conversation(id=ConversationId(1), kind=ConversationKind.GROUP, created_at=NOW, name=" ")
    with pytest.raises(ValueError):
        Conversation(id=ConversationId(1), kind=ConversationKind.DIRECT, created_at=NOW, name="x")


def test_unique_user_ids_keeps_first_occurrence():
    ids = [UserId(3), UserId(1), UserId(3), UserId(2), UserId(1)]
    assert Conversation.unique_user_ids(ids) == [UserId(3), UserId(1), UserId(2)]


@pytest.mark.parametrize("raw", ["", "nobody", "@x.io", "a@", "a b@x.io"])
def test_invalid_emails(raw):
    with pytest.raises(ValueError):
        UserEmail(raw)


def test_email_is_normalized():
    assert UserEmail("  Alice@Example.COM ") == UserEmail("alice@example.com")


@pytest.mark.parametrize("value", [0, -1, True, "3"])
def test_ids_must_be_positive_integers(value):
    with pytest.raises(ValueError):
        UserId(value)


def test_rooms_render_and_never_collide():
    assert str(ConversationRoom(ConversationId(4))) == "chat:4"
    assert str(UserRoom(UserId(4))) == "user:4"
    assert ConversationRoom(ConversationId(4)) != UserRoom(UserId(4))


def test_session_expiry():
    session = Session(UserId(1), "tok", NOW, NOW + timedelta(hours=1))
    assert session.is_valid_at(NOW + timedelta(minutes=59))
    assert not session.is_valid_at(NOW + timedelta(hours=1))
    with pytest.raises(ValueError):
        Session(UserId(1), "tok", NOW, NOW)


def test_event_wire_format():
    event = RealtimeEvent(EventKind.JOIN_ROOM_INSTRUCTION, {"chat_id": 3})
    assert event.to_wire() == {"event": "join_room_instruction", "data": {"chat_id": 3}}
    assert RealtimeEvent.error("nope").to_wire() == {"event": "error", "data": {"message": "nope"}}
