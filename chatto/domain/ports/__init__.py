"""
PORTS - Interfaces that infrastructure implements

A "port" is an abstract interface that defines WHAT the domain needs,
without specifying HOW it's done.

Subfolders:
- repositories/      → Durable store interfaces (users, sessions, membership, messages)
- (root files)       → Password hashing, token issuance, realtime event publishing
"""

from chatto.domain.ports.event_publisher import EventPublisher
from chatto.domain.ports.password_hasher import PasswordHasher
from chatto.domain.ports.token_service import TokenClaims, TokenService

__all__ = [
    "EventPublisher",
    "PasswordHasher",
    "TokenClaims",
    "TokenService",
]
