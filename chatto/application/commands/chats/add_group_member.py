"""
Add Group Member Command.

Order of checks: chat exists, requester participates, chat is a group,
target user exists, target is not already a member.

Notifications after the edge is stored:
- conversation_updated to every participant's user room (new member included)
- new_conversation + join_room_instruction to the new member, so any of their
  live connections subscribe to the room without reconnecting
"""

import logging
from dataclasses import dataclass

from chatto.application.common.interfaces import Command, CommandHandler
from chatto.application.dto.chat import ConversationDTO
from chatto.application.dto.events import (
    conversation_updated_event,
    join_room_instruction,
    new_conversation_event,
)
from chatto.domain.entities.conversation import Conversation
from chatto.domain.exceptions import (
    AccessDeniedError,
    DomainValidationError,
    EntityNotFoundError,
)
from chatto.domain.ports.event_publisher import EventPublisher
from chatto.domain.ports.repositories import (
    ConversationRepository,
    MessageRepository,
    UserRepository,
)
from chatto.domain.value_objects.conversation_id import ConversationId
from chatto.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AddGroupMemberCommand(Command[Conversation]):
    requester_id: UserId
    conversation_id: ConversationId
    user_id: UserId


class AddGroupMemberHandler(CommandHandler[Conversation]):
    def __init__(
        self,
        conversation_repository: ConversationRepository,
        user_repository: UserRepository,
        message_repository: MessageRepository,
        publisher: EventPublisher,
    ):
        self._conversation_repository = conversation_repository
        self._user_repository = user_repository
        self._message_repository = message_repository
        self._publisher = publisher

    async def execute(self, command: AddGroupMemberCommand) -> Conversation:
        conversation = await self._conversation_repository.get_by_id(
            command.conversation_id
        )
        if conversation is None:
            raise EntityNotFoundError("Chat not found")
        if not conversation.has_participant(command.requester_id):
            raise AccessDeniedError("Not authorized to modify this chat")
        if not conversation.is_group:
            raise DomainValidationError("Members can only be added to group chats")
        if await self._user_repository.get_by_id(command.user_id) is None:
            raise EntityNotFoundError("User not found")

        # Raises ConflictError when the user is already a member
        updated = await self._conversation_repository.add_participant(
            command.conversation_id, command.user_id
        )
        logger.info(
            f"[Chats] User {command.requester_id} added {command.user_id} "
            f"to chat {updated.id}"
        )

        latest = await self._message_repository.get_latest_for([updated.id])
        last_message = latest.get(updated.id)

        for participant_id in updated.participant_ids:
            dto = ConversationDTO.from_entity(updated, participant_id, last_message)
            self._publisher.broadcast_to_user(
                participant_id, conversation_updated_event(dto)
            )

        dto = ConversationDTO.from_entity(updated, command.user_id, last_message)
        self._publisher.broadcast_to_user(command.user_id, new_conversation_event(dto))
        self._publisher.broadcast_to_user(
            command.user_id, join_room_instruction(updated.id)
        )
        return updated
