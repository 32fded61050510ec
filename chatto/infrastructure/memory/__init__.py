"""
Memory Store - in-process implementations of the repository ports.

Selected with CHAT_STORE=memory. All repositories of one container share a
single MemoryDatabase; mutations run under its lock and are applied only
after every check passed, so no partial state is ever visible.
"""

from chatto.infrastructure.memory.database import MemoryDatabase
from chatto.infrastructure.memory.memory_user_repository import MemoryUserRepository
from chatto.infrastructure.memory.memory_session_repository import (
    MemorySessionRepository,
)
from chatto.infrastructure.memory.memory_conversation_repository import (
    MemoryConversationRepository,
)
from chatto.infrastructure.memory.memory_message_repository import (
    MemoryMessageRepository,
)

__all__ = [
    "MemoryDatabase",
    "MemoryUserRepository",
    "MemorySessionRepository",
    "MemoryConversationRepository",
    "MemoryMessageRepository",
]
