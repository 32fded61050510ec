"""Chat commands - the conversation lifecycle."""

from .create_direct_chat import CreateDirectChatCommand, CreateDirectChatHandler
from .create_group_chat import CreateGroupChatCommand, CreateGroupChatHandler
from .send_message import SendMessageCommand, SendMessageHandler, SendMessageResult
from .add_group_member import AddGroupMemberCommand, AddGroupMemberHandler
from .remove_group_member import RemoveGroupMemberCommand, RemoveGroupMemberHandler

__all__ = [
    "CreateDirectChatCommand",
    "CreateDirectChatHandler",
    "CreateGroupChatCommand",
    "CreateGroupChatHandler",
    "SendMessageCommand",
    "SendMessageHandler",
    "SendMessageResult",
    "AddGroupMemberCommand",
    "AddGroupMemberHandler",
    "RemoveGroupMemberCommand",
    "RemoveGroupMemberHandler",
]
