"""
User Repository Port - Interface for user persistence.
"""

from abc import ABC, abstractmethod
from typing import Optional

from chatto.domain.entities.user import User
from chatto.domain.value_objects.user_email import UserEmail
from chatto.domain.value_objects.user_id import UserId


class UserRepository(ABC):
    @abstractmethod
    async def get_by_id(self, user_id: UserId) -> Optional[User]: ...

    @abstractmethod
    async def get_by_email(self, email: UserEmail) -> Optional[User]: ...

    @abstractmethod
    async def get_many(self, user_ids: list[UserId]) -> list[User]: ...

    @abstractmethod
    async def create(self, email: UserEmail, password_hash: str) -> User:
        """Raises ConflictError if the email is already registered."""

    @abstractmethod
    async def search_by_email(
        self, query: str, exclude: UserId, limit: int
    ) -> list[User]: ...
