"""
Chats API Router - conversations, history, search and group membership.

Thin layer: builds Commands/Queries, delegates to handlers resolved by
Dishka, and renders DTOs. Domain errors propagate to the exception
handlers registered in fastapi_app.py.

Flow:
  HTTP Request → Router → Command → Handler → Repository → Store
                                       ↓
                                 EventPublisher → live connections
"""

from logging import getLogger
from typing import Annotated

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, Path
from pydantic import BaseModel, ConfigDict, Field, PositiveInt

from chatto.application.commands.chats import (
    AddGroupMemberCommand,
    AddGroupMemberHandler,
    CreateDirectChatCommand,
    CreateDirectChatHandler,
    CreateGroupChatCommand,
    CreateGroupChatHandler,
    RemoveGroupMemberCommand,
    RemoveGroupMemberHandler,
    SendMessageCommand,
    SendMessageHandler,
)
from chatto.application.dto.auth import UserDTO
from chatto.application.dto.chat import ConversationDTO, MessageDTO
from chatto.application.queries.chats import (
    GetChatHandler,
    GetChatMessagesHandler,
    GetChatMessagesQuery,
    GetChatQuery,
    ListChatsHandler,
    ListChatsQuery,
    SearchMessagesHandler,
    SearchMessagesQuery,
    SearchUsersHandler,
    SearchUsersQuery,
)
from chatto.config.settings import Config
from chatto.domain.value_objects.conversation_id import ConversationId
from chatto.domain.value_objects.user_id import UserId
from chatto.presentation.dependencies.auth import AuthUser, get_current_user

logger = getLogger(__name__)

ChatIdPath = Annotated[int, Path(gt=0)]
UserIdPath = Annotated[int, Path(gt=0)]


# ==================== REQUEST/RESPONSE MODELS ====================


class CreateDirectChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    participant_id: PositiveInt = Field(alias="participantId")


class CreateGroupChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    participant_ids: list[PositiveInt] = Field(default_factory=list, alias="participantIds")


class SendMessageRequest(BaseModel):
    content: str


class AddMemberRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: PositiveInt = Field(alias="userId")


class MessagesResponse(BaseModel):
    messages: list[MessageDTO]


# ==================== ROUTER ====================

router = APIRouter(prefix="/chats", tags=["chats"])


@router.get("", response_model=list[ConversationDTO])
@inject
async def list_chats(
    handler: FromDishka[ListChatsHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    summaries = await handler.execute(ListChatsQuery(user_id=current_user.id))
    return [
        ConversationDTO.from_entity(s.conversation, current_user.id, s.last_message)
        for s in summaries
    ]


# Search routes are registered before /{chat_id} so "search" is never read as an id


@router.get("/search/messages", response_model=list[MessageDTO])
@inject
async def search_messages(
    handler: FromDishka[SearchMessagesHandler],
    query: str = "",
    current_user: AuthUser = Depends(get_current_user),
):
    messages = await handler.execute(
        SearchMessagesQuery(requester_id=current_user.id, query=query)
    )
    return [MessageDTO.from_entity(m) for m in messages]


@router.get("/search/users", response_model=list[UserDTO])
@inject
async def search_users(
    handler: FromDishka[SearchUsersHandler],
    query: str = "",
    current_user: AuthUser = Depends(get_current_user),
):
    users = await handler.execute(
        SearchUsersQuery(requester_id=current_user.id, query=query)
    )
    return [UserDTO.from_entity(u) for u in users]


@router.post("/direct", response_model=ConversationDTO)
@inject
async def create_direct_chat(
    request: CreateDirectChatRequest,
    handler: FromDishka[CreateDirectChatHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    conversation = await handler.execute(
        CreateDirectChatCommand(
            requester_id=current_user.id,
            other_user_id=UserId(request.participant_id),
        )
    )
    return ConversationDTO.from_entity(conversation, current_user.id)


@router.post("/group", response_model=ConversationDTO)
@inject
async def create_group_chat(
    request: CreateGroupChatRequest,
    handler: FromDishka[CreateGroupChatHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    conversation = await handler.execute(
        CreateGroupChatCommand(
            requester_id=current_user.id,
            name=request.name,
            participant_ids=tuple(UserId(pid) for pid in request.participant_ids),
        )
    )
    return ConversationDTO.from_entity(conversation, current_user.id)


@router.post("/group/{chat_id}/members", response_model=ConversationDTO)
@inject
async def add_group_member(
    chat_id: ChatIdPath,
    request: AddMemberRequest,
    handler: FromDishka[AddGroupMemberHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    conversation = await handler.execute(
        AddGroupMemberCommand(
            requester_id=current_user.id,
            conversation_id=ConversationId(chat_id),
            user_id=UserId(request.user_id),
        )
    )
    return ConversationDTO.from_entity(conversation, current_user.id)


@router.delete("/group/{chat_id}/members/{user_id}", response_model=ConversationDTO)
@inject
async def remove_group_member(
    chat_id: ChatIdPath,
    user_id: UserIdPath,
    handler: FromDishka[RemoveGroupMemberHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    conversation = await handler.execute(
        RemoveGroupMemberCommand(
            requester_id=current_user.id,
            conversation_id=ConversationId(chat_id),
            user_id=UserId(user_id),
        )
    )
    return ConversationDTO.from_entity(conversation, current_user.id)


@router.get("/{chat_id}", response_model=ConversationDTO)
@inject
async def get_chat(
    chat_id: ChatIdPath,
    handler: FromDishka[GetChatHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    summary = await handler.execute(
        GetChatQuery(
            requester_id=current_user.id, conversation_id=ConversationId(chat_id)
        )
    )
    return ConversationDTO.from_entity(
        summary.conversation, current_user.id, summary.last_message
    )


@router.get("/{chat_id}/messages", response_model=MessagesResponse)
@inject
async def get_chat_messages(
    chat_id: ChatIdPath,
    handler: FromDishka[GetChatMessagesHandler],
    current_user: AuthUser = Depends(get_current_user),
    page: int = 1,
    limit: int = Config.MESSAGE_PAGE_LIMIT,
):
    """
    One page of history, oldest first.

    Response: {"messages": [{"id": 1, "chat_id": 3, "sender_id": 1, ...}, ...]}
    """
    messages = await handler.execute(
        GetChatMessagesQuery(
            requester_id=current_user.id,
            conversation_id=ConversationId(chat_id),
            page=page,
            limit=limit,
        )
    )
    return MessagesResponse(messages=[MessageDTO.from_entity(m) for m in messages])


@router.post("/{chat_id}/messages", response_model=MessageDTO)
@inject
async def send_message(
    chat_id: ChatIdPath,
    request: SendMessageRequest,
    handler: FromDishka[SendMessageHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    result = await handler.execute(
        SendMessageCommand(
            requester_id=current_user.id,
            conversation_id=ConversationId(chat_id),
            content=request.content,
        )
    )
    return MessageDTO.from_entity(result.message)
