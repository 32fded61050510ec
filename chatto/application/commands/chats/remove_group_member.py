"""
Remove Group Member Command.

Any participant may remove any other participant (or themselves).
Remaining participants receive conversation_updated; the removed user
receives removed_from_conversation and drops the room on every device.
"""

import logging
from dataclasses import dataclass

from chatto.application.common.interfaces import Command, CommandHandler
from chatto.application.dto.chat import ConversationDTO
from chatto.application.dto.events import (
    conversation_updated_event,
    removed_from_conversation_event,
)
from chatto.domain.entities.conversation import Conversation
from chatto.domain.exceptions import (
    AccessDeniedError,
    DomainValidationError,
    EntityNotFoundError,
)
from chatto.domain.ports.event_publisher import EventPublisher
from chatto.domain.ports.repositories import ConversationRepository, MessageRepository
from chatto.domain.value_objects.conversation_id import ConversationId
from chatto.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemoveGroupMemberCommand(Command[Conversation]):
    requester_id: UserId
    conversation_id: ConversationId
    user_id: UserId


class RemoveGroupMemberHandler(CommandHandler[Conversation]):
    def __init__(
        self,
        conversation_repository: ConversationRepository,
        message_repository: MessageRepository,
        publisher: EventPublisher,
    ):
        self._conversation_repository = conversation_repository
        self._message_repository = message_repository
        self._publisher = publisher

    async def execute(self, command: RemoveGroupMemberCommand) -> Conversation:
        conversation = await self._conversation_repository.get_by_id(
            command.conversation_id
        )
        if conversation is None:
            raise EntityNotFoundError("Chat not found")
        if not conversation.has_participant(command.requester_id):
            raise AccessDeniedError("Not authorized to modify this chat")
        if not conversation.is_group:
            raise DomainValidationError(
                "Members can only be removed from group chats"
            )
        if not conversation.has_participant(command.user_id):
            raise EntityNotFoundError("User is not a member of this chat")

        updated = await self._conversation_repository.remove_participant(
            command.conversation_id, command.user_id
        )
        logger.info(
            f"[Chats] User {command.requester_id} removed {command.user_id} "
            f"from chat {updated.id}"
        )

        latest = await self._message_repository.get_latest_for([updated.id])
        last_message = latest.get(updated.id)

        for participant_id in updated.participant_ids:
            dto = ConversationDTO.from_entity(updated, participant_id, last_message)
            self._publisher.broadcast_to_user(
                participant_id, conversation_updated_event(dto)
            )
        self._publisher.broadcast_to_user(
            command.user_id, removed_from_conversation_event(updated.id)
        )
        return updated
