"""
VerifySession Query - resolve a bearer token to an identity.

Used by every authenticated HTTP endpoint and by the WebSocket handshake.
A token is accepted only when:
1. The JWT signature and claims are valid and unexpired
2. Its session exists in the store and is unexpired (logout revokes it)
3. The user still exists
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from chatto.application.common.interfaces import Query, QueryHandler
from chatto.domain.exceptions import UnauthenticatedError
from chatto.domain.ports.repositories import SessionRepository, UserRepository
from chatto.domain.ports.token_service import TokenService
from chatto.domain.value_objects.auth_identity import AuthIdentity


@dataclass(frozen=True)
class VerifySessionQuery(Query[AuthIdentity]):
    token: str


class VerifySessionHandler(QueryHandler[AuthIdentity]):
    def __init__(
        self,
        token_service: TokenService,
        session_repository: SessionRepository,
        user_repository: UserRepository,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self._token_service = token_service
        self._session_repository = session_repository
        self._user_repository = user_repository
        self._clock = clock

    async def execute(self, query: VerifySessionQuery) -> AuthIdentity:
        if not query.token:
            raise UnauthenticatedError("No token provided")

        claims = self._token_service.decode(query.token)

        session = await self._session_repository.get_by_token(query.token)
        if (
            session is None
            or session.user_id != claims.user_id
            or not session.is_valid_at(self._clock())
        ):
            raise UnauthenticatedError("Invalid or expired session")

        user = await self._user_repository.get_by_id(claims.user_id)
        if user is None:
            raise UnauthenticatedError("User not found")

        return AuthIdentity(user_id=user.id, email=user.email)
