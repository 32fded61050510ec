"""
SendMessage Command - persist a message and fan it out.

First-message handshake:
    A participant who has never heard of a chat has no subscription to its
    room. When the message that activates the chat is stored, every other
    participant gets, on their personal user room and in this order:
        1. new_conversation       (full chat, this message as last_message)
        2. join_room_instruction  (their connections subscribe to the room)
    Only then is new_message broadcast to the conversation room. Clients
    de-duplicate a message they may see both optimistically and via the room.

Every later message goes only to the conversation room.
"""

import logging
from dataclasses import dataclass

from chatto.application.common.interfaces import Command, CommandHandler
from chatto.application.dto.chat import ConversationDTO, MessageDTO
from chatto.application.dto.events import (
    join_room_instruction,
    new_conversation_event,
    new_message_event,
)
from chatto.domain.entities.message import Message
from chatto.domain.exceptions import AccessDeniedError, DomainValidationError
from chatto.domain.ports.event_publisher import EventPublisher
from chatto.domain.ports.repositories import ConversationRepository, MessageRepository
from chatto.domain.value_objects.conversation_id import ConversationId
from chatto.domain.value_objects.room import ConversationRoom
from chatto.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


@dataclass
class SendMessageResult:
    message: Message
    is_first_message: bool


@dataclass(frozen=True)
class SendMessageCommand(Command[SendMessageResult]):
    requester_id: UserId
    conversation_id: ConversationId
    content: str


class SendMessageHandler(CommandHandler[SendMessageResult]):
    def __init__(
        self,
        conversation_repository: ConversationRepository,
        message_repository: MessageRepository,
        publisher: EventPublisher,
    ):
        self._conversation_repository = conversation_repository
        self._message_repository = message_repository
        self._publisher = publisher

    async def execute(self, command: SendMessageCommand) -> SendMessageResult:
        if not await self._conversation_repository.is_participant(
            command.conversation_id, command.requester_id
        ):
            raise AccessDeniedError("Not authorized to send message to this chat")

        if not command.content or not command.content.strip():
            raise DomainValidationError("Message content is required")

        appended = await self._message_repository.append(
            command.conversation_id, command.requester_id, command.content
        )
        message = appended.message

        if appended.is_first_message:
            await self._announce_conversation(message)

        self._publisher.broadcast_to_room(
            ConversationRoom(command.conversation_id),
            new_message_event(MessageDTO.from_entity(message), appended.is_first_message),
        )
        return SendMessageResult(
            message=message, is_first_message=appended.is_first_message
        )

    async def _announce_conversation(self, message: Message) -> None:
        conversation = await self._conversation_repository.get_by_id(
            message.conversation_id
        )
        if conversation is None:
            return

        recipients = conversation.other_participants(message.sender_id)
        logger.info(
            f"[Chats] First message in chat {conversation.id}, "
            f"notifying {len(recipients)} participant(s)"
        )
        for participant in recipients:
            chat = ConversationDTO.from_entity(conversation, participant.user_id, message)
            self._publisher.broadcast_to_user(
                participant.user_id, new_conversation_event(chat)
            )
            self._publisher.broadcast_to_user(
                participant.user_id, join_room_instruction(conversation.id)
            )
