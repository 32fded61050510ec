"""
REPOSITORY PORTS - Durable store interfaces

Each repository port:
- Is an abstract base class (ABC)
- Defines methods the application layer needs
- Makes every conversation-mutating method a single atomic transaction

Infrastructure layer provides implementations (Prisma, memory).
"""

from chatto.domain.ports.repositories.user_repository import UserRepository
from chatto.domain.ports.repositories.session_repository import SessionRepository
from chatto.domain.ports.repositories.conversation_repository import (
    ConversationRepository,
)
from chatto.domain.ports.repositories.message_repository import (
    AppendedMessage,
    MessageRepository,
)

__all__ = [
    "UserRepository",
    "SessionRepository",
    "ConversationRepository",
    "MessageRepository",
    "AppendedMessage",
]
