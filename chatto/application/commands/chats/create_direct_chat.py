"""
Create Direct Chat Command.

Idempotent: the unordered pair {requester, other} has at most one direct
chat, and asking again (in either order) returns the same one. The other
participant is not notified here; they learn about the chat from its first
message (see send_message.py).
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
class CreateDirectChatCommand(Command[Conversation]):
    requester_id: UserId
    other_user_id: UserId


class CreateDirectChatHandler(CommandHandler[Conversation]):
    def __init__(
        self,
        conversation_repository: ConversationRepository,
        user_repository: UserRepository,
    ):
        self._conversation_repository = conversation_repository
        self._user_repository = user_repository

    async def execute(self, command: CreateDirectChatCommand) -> Conversation:
        if command.other_user_id == command.requester_id:
            raise DomainValidationError("Cannot start a direct chat with yourself")

        if await self._user_repository.get_by_id(command.other_user_id) is None:
            raise EntityNotFoundError("Participant not found")

        existing = await self._conversation_repository.get_direct(
            command.requester_id, command.other_user_id
        )
        if existing:
            return existing

        conversation, created = await self._conversation_repository.create_direct(
            command.requester_id, command.other_user_id
        )
        if created:
            logger.info(
                f"[Chats] Created direct chat {conversation.id} for users "
                f"{command.requester_id}, {command.other_user_id}"
            )
        return conversation
