"""
bcrypt implementation of PasswordHasher.

Hashing is CPU bound, so it runs in a worker thread to keep the event loop
(and therefore realtime delivery) responsive.
"""

import asyncio

import bcrypt

from chatto.domain.ports.password_hasher import PasswordHasher


class BcryptPasswordHasher(PasswordHasher):
    def __init__(self, rounds: int = 10):
        self._rounds = rounds

    async def hash(self, password: str) -> str:
        if not self.accepts(password):
            raise ValueError(f"Password exceeds {self.max_password_bytes} bytes")
        salt = bcrypt.gensalt(rounds=self._rounds)
        hashed = await asyncio.to_thread(bcrypt.hashpw, password.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    async def verify(self, password: str, password_hash: str) -> bool:
        if not self.accepts(password):
            # Never registered; older bcrypt releases would truncate it instead
            return False
        try:
            return await asyncio.to_thread(
                bcrypt.checkpw, password.encode("utf-8"), password_hash.encode("utf-8")
            )
        except ValueError:
            # Stored value is not a bcrypt hash
            return False
