"""Logout User Command - revokes the session of a token."""

from dataclasses import dataclass

from chatto.application.common.interfaces import Command, CommandHandler
from chatto.domain.ports.repositories import SessionRepository


@dataclass(frozen=True)
class LogoutUserCommand(Command[bool]):
    token: str


class LogoutUserHandler(CommandHandler[bool]):
    def __init__(self, session_repository: SessionRepository):
        self._session_repository = session_repository

    async def execute(self, command: LogoutUserCommand) -> bool:
        return await self._session_repository.delete(command.token)
