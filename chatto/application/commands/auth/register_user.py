"""Register User Command."""

import logging
from dataclasses import dataclass

from chatto.application.common.interfaces import Command, CommandHandler
from chatto.domain.entities.user import User
from chatto.domain.exceptions import DomainValidationError
from chatto.domain.ports.password_hasher import PasswordHasher
from chatto.domain.ports.repositories import UserRepository
from chatto.domain.value_objects.user_email import UserEmail

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegisterUserCommand(Command[User]):
    email: str
    password: str


class RegisterUserHandler(CommandHandler[User]):
    def __init__(self, user_repository: UserRepository, password_hasher: PasswordHasher):
        self._user_repository = user_repository
        self._password_hasher = password_hasher

    async def execute(self, command: RegisterUserCommand) -> User:
        try:
            email = UserEmail(command.email)
        except ValueError as e:
            raise DomainValidationError("A valid email is required") from e
        if not command.password or not command.password.strip():
            raise DomainValidationError("Password is required")
        if not self._password_hasher.accepts(command.password):
            raise DomainValidationError(
                f"Password must be at most {self._password_hasher.max_password_bytes} bytes"
            )

        password_hash = await self._password_hasher.hash(command.password)
        # ConflictError from the store when the email is taken
        user = await self._user_repository.create(email, password_hash)
        logger.info(f"[Auth] Registered user {user.id}")
        return user
