"""
Authentication Dependency for FastAPI.

- Extracts the bearer token from the Authorization header
- Resolves it through VerifySessionHandler (JWT + stored session + user)
- Returns the caller's identity and raw token for route handlers
- Raises HTTPException 401 if unauthenticated
"""

from dataclasses import dataclass

from dishka import AsyncContainer
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from chatto.application.queries.auth import VerifySessionHandler, VerifySessionQuery
from chatto.domain.exceptions import UnauthenticatedError
from chatto.domain.value_objects.auth_identity import AuthIdentity
from chatto.domain.value_objects.user_id import UserId


@dataclass
class AuthUser:
    identity: AuthIdentity
    token: str

    @property
    def id(self) -> UserId:
        return self.identity.user_id


security = HTTPBearer(auto_error=False)


async def authenticate_token(container: AsyncContainer, token: str) -> AuthIdentity:
    """Shared by HTTP routes and the WebSocket handshake."""
    handler = await container.get(VerifySessionHandler)
    return await handler.execute(VerifySessionQuery(token=token))


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> AuthUser:
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No token provided",
        )

    token = credentials.credentials
    try:
        identity = await authenticate_token(request.state.dishka_container, token)
    except UnauthenticatedError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
        ) from e

    return AuthUser(identity=identity, token=token)
