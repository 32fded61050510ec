"""
Login User Command.

Verifies the credential, issues a bearer token and stores a session for it.
Every login creates a new session, so several devices stay signed in.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

from chatto.application.common.interfaces import Command, CommandHandler
from chatto.domain.entities.session import Session
from chatto.domain.entities.user import User
from chatto.domain.exceptions import DomainValidationError
from chatto.domain.ports.password_hasher import PasswordHasher
from chatto.domain.ports.repositories import SessionRepository, UserRepository
from chatto.domain.ports.token_service import TokenService
from chatto.domain.value_objects.user_email import UserEmail

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


@dataclass
class LoginResult:
    token: str
    user: User
    session: Session


@dataclass(frozen=True)
class LoginUserCommand(Command[LoginResult]):
    email: str
    password: str


class LoginUserHandler(CommandHandler[LoginResult]):
    def __init__(
        self,
        user_repository: UserRepository,
        session_repository: SessionRepository,
        password_hasher: PasswordHasher,
        token_service: TokenService,
        session_ttl: timedelta,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self._user_repository = user_repository
        self._session_repository = session_repository
        self._password_hasher = password_hasher
        self._token_service = token_service
        self._session_ttl = session_ttl
        self._clock = clock

    async def execute(self, command: LoginUserCommand) -> LoginResult:
        try:
            email = UserEmail(command.email)
        except ValueError as e:
            raise DomainValidationError(INVALID_CREDENTIALS) from e

        user = await self._user_repository.get_by_email(email)
        if user is None or not await self._password_hasher.verify(
            command.password or "", user.password_hash
        ):
            raise DomainValidationError(INVALID_CREDENTIALS)

        issued_at = self._clock()
        expires_at = issued_at + self._session_ttl
        token = self._token_service.issue(user.id, user.email, issued_at, expires_at)
        session = Session(
            user_id=user.id, token=token, created_at=issued_at, expires_at=expires_at
        )
        await self._session_repository.save(session)

        logger.info(f"[Auth] User {user.id} logged in")
        return LoginResult(token=token, user=user, session=session)
