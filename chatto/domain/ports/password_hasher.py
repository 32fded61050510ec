"""
Password Hasher Port.
Implementation: chatto/infrastructure/security/bcrypt_password_hasher.py
"""

from abc import ABC, abstractmethod


class PasswordHasher(ABC):
    # Longest password, in UTF-8 bytes, the scheme hashes without truncation
    max_password_bytes: int = 72

    def accepts(self, password: str) -> bool:
        return len(password.encode("utf-8")) <= self.max_password_bytes

    @abstractmethod
    async def hash(self, password: str) -> str: ...

    @abstractmethod
    async def verify(self, password: str, password_hash: str) -> bool: ...
