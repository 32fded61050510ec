"""
Create Group Chat Command.

The requester is always a participant; `participant_ids` are the others.
No one is notified until the first message.
"""

import logging
from dataclasses import dataclass

from chatto.application.common.interfaces import Command, CommandHandler
from chatto.domain.entities.conversation import Conversation
from chatto.domain.exceptions import DomainValidationError, EntityNotFoundError
from chatto.domain.ports.repositories import ConversationRepository, UserRepository
from chatto.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateGroupChatCommand(Command[Conversation]):
    requester_id: UserId
    name: str
    participant_ids: tuple[UserId, ...]


class CreateGroupChatHandler(CommandHandler[Conversation]):
    def __init__(
        self,
        conversation_repository: ConversationRepository,
        user_repository: UserRepository,
    ):
        self._conversation_repository = conversation_repository
        self._user_repository = user_repository

    async def execute(self, command: CreateGroupChatCommand) -> Conversation:
        name = Conversation.normalize_group_name(command.name)
        if not name:
            raise DomainValidationError("Group name is required")

        others = [
            user_id
            for user_id in Conversation.unique_user_ids(command.participant_ids)
            if user_id != command.requester_id
        ]
        if not others:
            raise DomainValidationError("At least one participant is required")

        found = await self._user_repository.get_many(others)
        if len(found) != len(others):
            raise EntityNotFoundError("One or more participants not found")

        conversation = await self._conversation_repository.create_group(
            name, [command.requester_id, *others]
        )
        logger.info(
            f"[Chats] Created group chat {conversation.id} with "
            f"{len(conversation.participants)} participants"
        )
        return conversation
