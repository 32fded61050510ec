from typing import Optional

from chatto.domain.entities.session import Session
from chatto.domain.ports.repositories import SessionRepository
from chatto.infrastructure.memory.database import MemoryDatabase


class MemorySessionRepository(SessionRepository):
    def __init__(self, db: MemoryDatabase):
        self._db = db

    async def save(self, session: Session) -> None:
        self._db.sessions[session.token] = session

    async def get_by_token(self, token: str) -> Optional[Session]:
        return self._db.sessions.get(token)

    async def delete(self, token: str) -> bool:
        return self._db.sessions.pop(token, None) is not None
