"""Auth commands."""

from .register_user import RegisterUserCommand, RegisterUserHandler
from .login_user import LoginUserCommand, LoginUserHandler, LoginResult
from .logout_user import LogoutUserCommand, LogoutUserHandler

__all__ = [
    "RegisterUserCommand",
    "RegisterUserHandler",
    "LoginUserCommand",
    "LoginUserHandler",
    "LoginResult",
    "LogoutUserCommand",
    "LogoutUserHandler",
]
