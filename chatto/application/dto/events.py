"""Builders for the realtime events emitted by chat use cases."""

from chatto.application.dto.chat import ConversationDTO, MessageDTO
from chatto.domain.events.realtime_event import EventKind, RealtimeEvent
from chatto.domain.value_objects.conversation_id import ConversationId


def new_message_event(message: MessageDTO, is_first_message: bool) -> RealtimeEvent:
    payload = message.model_dump(mode="json")
    payload["is_first_message"] = is_first_message
    return RealtimeEvent(EventKind.NEW_MESSAGE, payload)


def new_conversation_event(conversation: ConversationDTO) -> RealtimeEvent:
    return RealtimeEvent(EventKind.NEW_CONVERSATION, conversation.to_payload())


def join_room_instruction(conversation_id: ConversationId) -> RealtimeEvent:
    return RealtimeEvent(
        EventKind.JOIN_ROOM_INSTRUCTION, {"chat_id": conversation_id.value}
    )


def conversation_updated_event(conversation: ConversationDTO) -> RealtimeEvent:
    return RealtimeEvent(EventKind.CONVERSATION_UPDATED, conversation.to_payload())


def removed_from_conversation_event(conversation_id: ConversationId) -> RealtimeEvent:
    return RealtimeEvent(
        EventKind.REMOVED_FROM_CONVERSATION, {"chat_id": conversation_id.value}
    )
