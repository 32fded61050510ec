"""
Session Repository Port - issued sessions (multi-device).
"""

from abc import ABC, abstractmethod
from typing import Optional

from chatto.domain.entities.session import Session


class SessionRepository(ABC):
    @abstractmethod
    async def save(self, session: Session) -> None: ...

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[Session]: ...

    @abstractmethod
    async def delete(self, token: str) -> bool: ...
