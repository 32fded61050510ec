"""
Auth API Router - registration, login, token verification and logout.

Responses keep the `{"success": ..., ...}` envelope the web client expects.
"""

from logging import getLogger

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from chatto.application.commands.auth import (
    LoginUserCommand,
    LoginUserHandler,
    LogoutUserCommand,
    LogoutUserHandler,
    RegisterUserCommand,
    RegisterUserHandler,
)
from chatto.application.dto.auth import UserDTO
from chatto.domain.exceptions import ConflictError
from chatto.presentation.dependencies.auth import AuthUser, get_current_user

logger = getLogger(__name__)


# ==================== REQUEST/RESPONSE MODELS ====================


class CredentialsRequest(BaseModel):
    email: str
    password: str


class StatusResponse(BaseModel):
    success: bool
    message: str


class LoginResponse(BaseModel):
    """
    {
        "success": true,
        "token": "<jwt>",
        "user": {"id": 1, "email": "alice@example.com"}
    }
    """

    success: bool
    token: str
    user: UserDTO


class VerifyResponse(BaseModel):
    success: bool
    user: UserDTO


# ==================== ROUTER ====================

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=StatusResponse)
@inject
async def register(
    request: CredentialsRequest,
    handler: FromDishka[RegisterUserHandler],
):
    try:
        await handler.execute(
            RegisterUserCommand(email=request.email, password=request.password)
        )
    except ConflictError as e:
        # Duplicate registration is a client error, not a 409
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    return StatusResponse(success=True, message="Registration successful")


@router.post("/login", response_model=LoginResponse)
@inject
async def login(
    request: CredentialsRequest,
    handler: FromDishka[LoginUserHandler],
):
    result = await handler.execute(
        LoginUserCommand(email=request.email, password=request.password)
    )
    return LoginResponse(
        success=True, token=result.token, user=UserDTO.from_entity(result.user)
    )


@router.get("/verify", response_model=VerifyResponse)
async def verify(current_user: AuthUser = Depends(get_current_user)):
    identity = current_user.identity
    return VerifyResponse(
        success=True,
        user=UserDTO(id=identity.user_id.value, email=identity.email.value),
    )


@router.post("/logout", response_model=StatusResponse)
@inject
async def logout(
    handler: FromDishka[LogoutUserHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    await handler.execute(LogoutUserCommand(token=current_user.token))
    logger.info(f"[Auth] User {current_user.id} logged out")
    return StatusResponse(success=True, message="Logged out")
