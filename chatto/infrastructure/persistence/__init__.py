"""
Persistence Layer - Prisma (PostgreSQL) implementations of the repository ports.

Requires a generated client: `prisma generate --schema prisma/schema.prisma`.
"""

from chatto.infrastructure.persistence.prisma_user_repository import (
    PrismaUserRepository,
)
from chatto.infrastructure.persistence.prisma_session_repository import (
    PrismaSessionRepository,
)
from chatto.infrastructure.persistence.prisma_conversation_repository import (
    PrismaConversationRepository,
)
from chatto.infrastructure.persistence.prisma_message_repository import (
    PrismaMessageRepository,
)

__all__ = [
    "PrismaUserRepository",
    "PrismaSessionRepository",
    "PrismaConversationRepository",
    "PrismaMessageRepository",
]
