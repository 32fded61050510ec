"""
Token Service Port - issues and decodes bearer credentials.
Implementation: chatto/infrastructure/security/jwt_token_service.py
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from chatto.domain.value_objects.user_email import UserEmail
from chatto.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class TokenClaims:
    user_id: UserId
    email: UserEmail
    expires_at: datetime


class TokenService(ABC):
    @abstractmethod
    def issue(
        self, user_id: UserId, email: UserEmail, issued_at: datetime, expires_at: datetime
    ) -> str: ...

    @abstractmethod
    def decode(self, token: str) -> TokenClaims:
        """Raises UnauthenticatedError for malformed, tampered or expired tokens."""
