from typing import Optional

from chatto.domain.entities.user import User
from chatto.domain.exceptions import ConflictError
from chatto.domain.ports.repositories import UserRepository
from chatto.domain.value_objects.user_email import UserEmail
from chatto.domain.value_objects.user_id import UserId
from chatto.infrastructure.memory.database import MemoryDatabase


class MemoryUserRepository(UserRepository):
    def __init__(self, db: MemoryDatabase):
        self._db = db

    async def get_by_id(self, user_id: UserId) -> Optional[User]:
        return self._db.users.get(user_id.value)

    async def get_by_email(self, email: UserEmail) -> Optional[User]:
        return next((u for u in self._db.users.values() if u.email == email), None)

    async def get_many(self, user_ids: list[UserId]) -> list[User]:
        return [self._db.users[u.value] for u in user_ids if u.value in self._db.users]

    async def create(self, email: UserEmail, password_hash: str) -> User:
        async with self._db.lock:
            if any(u.email == email for u in self._db.users.values()):
                raise ConflictError("Email already registered")
            now = self._db.clock()
            user = User(
                id=UserId(self._db.next_user_id()),
                email=email,
                password_hash=password_hash,
                created_at=now,
                updated_at=now,
            )
            self._db.users[user.id.value] = user
            return user

    async def search_by_email(
        self, query: str, exclude: UserId, limit: int
    ) -> list[User]:
        needle = query.lower()
        matches = [
            u
            for u in self._db.users.values()
            if u.id != exclude and needle in u.email.value
        ]
        return matches[:limit]
