"""Chat queries."""

from .list_chats import ListChatsQuery, ListChatsHandler, ChatSummary
from .get_chat import GetChatQuery, GetChatHandler
from .get_chat_messages import GetChatMessagesQuery, GetChatMessagesHandler
from .search_messages import SearchMessagesQuery, SearchMessagesHandler
from .search_users import SearchUsersQuery, SearchUsersHandler

__all__ = [
    "ListChatsQuery",
    "ListChatsHandler",
    "ChatSummary",
    "GetChatQuery",
    "GetChatHandler",
    "GetChatMessagesQuery",
    "GetChatMessagesHandler",
    "SearchMessagesQuery",
    "SearchMessagesHandler",
    "SearchUsersQuery",
    "SearchUsersHandler",
]
