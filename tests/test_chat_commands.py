import asyncio

import pytest

from chatto.application.commands.chats import (
    AddGroupMemberCommand,
    AddGroupMemberHandler,
    CreateDirectChatCommand,
    CreateDirectChatHandler,
    CreateGroupChatCommand,
    CreateGroupChatHandler,
    RemoveGroupMemberCommand,
    RemoveGroupMemberHandler,
    SendMessageCommand,
    SendMessageHandler,
)
from chatto.domain.exceptions import (
    AccessDeniedError,
    ConflictError,
    DomainValidationError,
    EntityNotFoundError,
)
from chatto.domain.value_objects.conversation_id import ConversationId
from chatto.domain.value_objects.room import ConversationRoom
from chatto.domain.value_objects.user_id import UserId
from fakes import RecordingPublisher, Store


@pytest.fixture()
async def world():
    store = Store()
    users = {
        name: await store.add_user(f"{name}@example.com")
        for name in ("alice", "bob", "carol", "dave")
    }
    publisher = RecordingPublisher()
    return store, publisher, users


def _direct(store):
    return CreateDirectChatHandler(store.conversations, store.users)


def _group(store):
    return CreateGroupChatHandler(store.conversations, store.users)


def _send(store, publisher):
    return SendMessageHandler(store.conversations, store.messages, publisher)


def _add(store, publisher):
    return AddGroupMemberHandler(store.conversations, store.users, store.messages, publisher)


def _remove(store, publisher):
    return RemoveGroupMemberHandler(store.conversations, store.messages, publisher)


# ==================== DIRECT CHATS ====================


@pytest.mark.anyio
async def test_direct_chat_is_idempotent_in_either_order(world):
    store, _, users = world
    alice, bob = users["alice"], users["bob"]

    first = await _direct(store).execute(CreateDirectChatCommand(alice.id, bob.id))
    again = await _direct(store).execute(CreateDirectChatCommand(alice.id, bob.id))
    reversed_ = await _direct(store).execute(CreateDirectChatCommand(bob.id, alice.id))

    assert first.id == again.id == reversed_.id
    assert not first.is_group
    assert set(first.participant_ids) == {alice.id, bob.id}


@pytest.mark.anyio
async def test_concurrent_direct_creation_yields_one_chat(world):
    store, _, users = world
    alice, bob = users["alice"], users["bob"]

    results = await asyncio.gather(
        _direct(store).execute(CreateDirectChatCommand(alice.id, bob.id)),
        _direct(store).execute(CreateDirectChatCommand(bob.id, alice.id)),
    )

    assert results[0].id == results[1].id
    assert len(store.db.chats) == 1


@pytest.mark.anyio
async def test_direct_chat_rejects_self_and_unknown_users(world):
    store, _, users = world
    alice = users["alice"]

    with pytest.raises(DomainValidationError):
        await _direct(store).execute(CreateDirectChatCommand(alice.id, alice.id))
    with pytest.raises(EntityNotFoundError):
        await _direct(store).execute(CreateDirectChatCommand(alice.id, UserId(999)))


@pytest.mark.anyio
async def test_creating_a_chat_notifies_nobody(world):
    store, publisher, users = world

    await _direct(store).execute(CreateDirectChatCommand(users["alice"].id, users["bob"].id))
    await _group(store).execute(
        CreateGroupChatCommand(users["alice"].id, "Team", (users["bob"].id,))
    )

    assert publisher.calls == []


# ==================== GROUP CHATS ====================


@pytest.mark.anyio
async def test_group_includes_requester_and_deduplicates(world):
    store, _, users = world
    alice, bob, carol = users["alice"], users["bob"], users["carol"]

    group = await _group(store).execute(
        CreateGroupChatCommand(alice.id, "  Team  ", (bob.id, carol.id, bob.id, alice.id))
    )

    assert group.is_group
    assert group.name == "Team"
    assert group.participant_ids == [alice.id, bob.id, carol.id]


@pytest.mark.anyio
@pytest.mark.parametrize(
    "name, others, error",
    [
        ("   ", "bob", DomainValidationError),
        ("Team", "", DomainValidationError),
        ("Team", "self", DomainValidationError),
        ("Team", "missing", EntityNotFoundError),
    ],
)
async def test_group_validation(world, name, others, error):
    store, _, users = world
    alice = users["alice"]
    participant_ids = {
        "bob": (users["bob"].id,),
        "": (),
        "self": (alice.id,),
        "missing": (users["bob"].id, UserId(999)),
    }[others]

    with pytest.raises(error):
        await _group(store).execute(CreateGroupChatCommand(alice.id, name, participant_ids))
    assert store.db.chats == {}


# ==================== SEND MESSAGE ====================


@pytest.mark.anyio
async def test_first_message_announces_chat_then_broadcasts(world):
    store, publisher, users = world
    alice, bob, carol = users["alice"], users["bob"], users["carol"]
    group = await _group(store).execute(
        CreateGroupChatCommand(alice.id, "Team", (bob.id, carol.id))
    )

    result = await _send(store, publisher).execute(
        SendMessageCommand(alice.id, group.id, "hello")
    )

    assert result.is_first_message
    assert [(target, event.kind.value) for target, event in publisher.calls] == [
        (bob.id, "new_conversation"),
        (bob.id, "join_room_instruction"),
        (carol.id, "new_conversation"),
        (carol.id, "join_room_instruction"),
        (ConversationRoom(group.id), "new_message"),
    ]
    announced = publisher.calls[0][1].data
    assert announced["id"] == group.id.value
    assert announced["display_name"] == "Team"
    assert announced["last_message"]["content"] == "hello"
    assert announced["last_message"]["sender_email"] == "alice@example.com"
    assert publisher.calls[1][1].data == {"chat_id": group.id.value}
    assert publisher.calls[-1][1].data["is_first_message"] is True


@pytest.mark.anyio
async def test_direct_announcement_uses_senders_email_as_display_name(world):
    store, publisher, users = world
    alice, bob = users["alice"], users["bob"]
    direct = await _direct(store).execute(CreateDirectChatCommand(alice.id, bob.id))

    await _send(store, publisher).execute(SendMessageCommand(alice.id, direct.id, "hi"))

    assert publisher.calls[0][1].data["display_name"] == "alice@example.com"


@pytest.mark.anyio
async def test_later_messages_only_go_to_the_room(world):
    store, publisher, users = world
    alice, bob = users["alice"], users["bob"]
    direct = await _direct(store).execute(CreateDirectChatCommand(alice.id, bob.id))
    handler = _send(store, publisher)
    await handler.execute(SendMessageCommand(alice.id, direct.id, "one"))
    publisher.calls.clear()

    result = await handler.execute(SendMessageCommand(bob.id, direct.id, "two"))

    assert not result.is_first_message
    assert publisher.for_target(alice.id) == []
    assert publisher.for_target(bob.id) == []
    assert publisher.for_target(ConversationRoom(direct.id)) == ["new_message"]
    assert publisher.calls[0][1].data["is_first_message"] is False


@pytest.mark.anyio
async def test_concurrent_first_messages_announce_exactly_once(world):
    store, publisher, users = world
    alice, bob = users["alice"], users["bob"]
    direct = await _direct(store).execute(CreateDirectChatCommand(alice.id, bob.id))
    handler = _send(store, publisher)

    results = await asyncio.gather(
        handler.execute(SendMessageCommand(alice.id, direct.id, "from alice")),
        handler.execute(SendMessageCommand(bob.id, direct.id, "from bob")),
    )

    assert sorted(r.is_first_message for r in results) == [False, True]
    kinds = [event.kind.value for _, event in publisher.calls]
    assert kinds.count("new_conversation") == 1
    assert kinds.count("join_room_instruction") == 1
    assert kinds.count("new_message") == 2


@pytest.mark.anyio
async def test_non_participant_cannot_send(world):
    store, publisher, users = world
    direct = await _direct(store).execute(
        CreateDirectChatCommand(users["alice"].id, users["bob"].id)
    )

    with pytest.raises(AccessDeniedError):
        await _send(store, publisher).execute(
            SendMessageCommand(users["carol"].id, direct.id, "let me in")
        )
    # Membership is checked before content
    with pytest.raises(AccessDeniedError):
        await _send(store, publisher).execute(
            SendMessageCommand(users["carol"].id, direct.id, "   ")
        )
    assert store.db.messages == []
    assert publisher.calls == []


@pytest.mark.anyio
async def test_blank_message_is_rejected(world):
    store, publisher, users = world
    direct = await _direct(store).execute(
        CreateDirectChatCommand(users["alice"].id, users["bob"].id)
    )

    with pytest.raises(DomainValidationError):
        await _send(store, publisher).execute(
            SendMessageCommand(users["alice"].id, direct.id, " \n ")
        )
    assert not (await store.conversations.get_by_id(direct.id)).is_active


# ==================== MEMBERSHIP ====================


@pytest.mark.anyio
async def test_add_member_notifies_everyone_and_invites_newcomer(world):
    store, publisher, users = world
    alice, bob, carol = users["alice"], users["bob"], users["carol"]
    group = await _group(store).execute(CreateGroupChatCommand(alice.id, "Team", (bob.id,)))
    await _send(store, publisher).execute(SendMessageCommand(alice.id, group.id, "welcome"))
    publisher.calls.clear()

    updated = await _add(store, publisher).execute(
        AddGroupMemberCommand(alice.id, group.id, carol.id)
    )

    assert updated.participant_ids == [alice.id, bob.id, carol.id]
    assert publisher.for_target(alice.id) == ["conversation_updated"]
    assert publisher.for_target(bob.id) == ["conversation_updated"]
    assert publisher.for_target(carol.id) == [
        "conversation_updated",
        "new_conversation",
        "join_room_instruction",
    ]
    invitation = [e for t, e in publisher.calls if t == carol.id][1].data
    assert invitation["last_message"]["content"] == "welcome"


@pytest.mark.anyio
async def test_add_member_error_order(world):
    store, publisher, users = world
    alice, bob, carol, dave = (users[n] for n in ("alice", "bob", "carol", "dave"))
    group = await _group(store).execute(CreateGroupChatCommand(alice.id, "Team", (bob.id,)))
    direct = await _direct(store).execute(CreateDirectChatCommand(alice.id, bob.id))
    handler = _add(store, publisher)

    with pytest.raises(EntityNotFoundError):
        await handler.execute(AddGroupMemberCommand(alice.id, ConversationId(999), carol.id))
    with pytest.raises(AccessDeniedError):
        await handler.execute(AddGroupMemberCommand(dave.id, group.id, carol.id))
    with pytest.raises(DomainValidationError):
        await handler.execute(AddGroupMemberCommand(alice.id, direct.id, carol.id))
    with pytest.raises(EntityNotFoundError):
        await handler.execute(AddGroupMemberCommand(alice.id, group.id, UserId(999)))
    with pytest.raises(ConflictError):
        await handler.execute(AddGroupMemberCommand(alice.id, group.id, bob.id))
    assert publisher.calls == []


@pytest.mark.anyio
async def test_concurrent_duplicate_add_produces_one_edge(world):
    store, publisher, users = world
    alice, bob, carol = users["alice"], users["bob"], users["carol"]
    group = await _group(store).execute(CreateGroupChatCommand(alice.id, "Team", (bob.id,)))
    handler = _add(store, publisher)

    results = await asyncio.gather(
        handler.execute(AddGroupMemberCommand(alice.id, group.id, carol.id)),
        handler.execute(AddGroupMemberCommand(bob.id, group.id, carol.id)),
        return_exceptions=True,
    )

    conflicts = [r for r in results if isinstance(r, ConflictError)]
    assert len(conflicts) == 1
    current = await store.conversations.get_by_id(group.id)
    assert current.participant_ids.count(carol.id) == 1


@pytest.mark.anyio
async def test_add_then_remove_restores_participants(world):
    store, publisher, users = world
    alice, bob, carol = users["alice"], users["bob"], users["carol"]
    group = await _group(store).execute(CreateGroupChatCommand(alice.id, "Team", (bob.id,)))
    before = set(group.participant_ids)

    await _add(store, publisher).execute(AddGroupMemberCommand(alice.id, group.id, carol.id))
    publisher.calls.clear()
    after = await _remove(store, publisher).execute(
        RemoveGroupMemberCommand(bob.id, group.id, carol.id)
    )

    assert set(after.participant_ids) == before
    assert publisher.for_target(alice.id) == ["conversation_updated"]
    assert publisher.for_target(bob.id) == ["conversation_updated"]
    assert publisher.for_target(carol.id) == ["removed_from_conversation"]
    assert publisher.calls[-1][1].data == {"chat_id": group.id.value}


@pytest.mark.anyio
async def test_remove_member_error_order(world):
    store, publisher, users = world
    alice, bob, carol, dave = (users[n] for n in ("alice", "bob", "carol", "dave"))
    group = await _group(store).execute(CreateGroupChatCommand(alice.id, "Team", (bob.id,)))
    direct = await _direct(store).execute(CreateDirectChatCommand(alice.id, bob.id))
    handler = _remove(store, publisher)

    with pytest.raises(EntityNotFoundError):
        await handler.execute(RemoveGroupMemberCommand(alice.id, ConversationId(999), bob.id))
    with pytest.raises(AccessDeniedError):
        await handler.execute(RemoveGroupMemberCommand(dave.id, group.id, bob.id))
    with pytest.raises(DomainValidationError):
        await handler.execute(RemoveGroupMemberCommand(alice.id, direct.id, bob.id))
    with pytest.raises(EntityNotFoundError):
        await handler.execute(RemoveGroupMemberCommand(alice.id, group.id, carol.id))
    assert publisher.calls == []


@pytest.mark.anyio
async def test_member_may_leave_a_group(world):
    store, publisher, users = world
    alice, bob, carol = users["alice"], users["bob"], users["carol"]
    group = await _group(store).execute(
        CreateGroupChatCommand(alice.id, "Team", (bob.id, carol.id))
    )

    updated = await _remove(store, publisher).execute(
        RemoveGroupMemberCommand(carol.id, group.id, carol.id)
    )

    assert carol.id not in updated.participant_ids
    assert not await store.conversations.is_participant(group.id, carol.id)
