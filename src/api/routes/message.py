"""Conversation routes.

This module handles HTTP endpoints for request conversations. Any
authenticated user may use them; visibility is enforced by MessageManager.
"""

from fastapi import APIRouter, Depends

from api.routes.auth import get_current_user
from core.dependencies import MessageManagerDep
from schemas.message import (
    ConversationListResponse,
    MarkReadResponse,
    MessageListResponse,
    MessageResponse,
    SendMessageRequest,
)
from schemas.user import User

router = APIRouter(prefix="/api", tags=["Message"])


@router.post("/messages", response_model=MessageResponse, summary="Send a message")
def send_message(
    req: SendMessageRequest,
    message_manager: MessageManagerDep,
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    """Post a message to a request's conversation.

    Fails with 404 for unknown or foreign conversations and with 400 once
    the request is completed.
    """
    message = message_manager.send_message(
        req.conversation_id, current_user, req.text, req.file_url
    )
    return MessageResponse(message=message)


@router.get(
    "/messages/{conversation_id}",
    response_model=MessageListResponse,
    summary="List the messages of a conversation",
)
def list_messages(
    conversation_id: str,
    message_manager: MessageManagerDep,
    current_user: User = Depends(get_current_user),
) -> MessageListResponse:
    return MessageListResponse(
        messages=message_manager.list_messages(conversation_id, current_user)
    )


@router.put(
    "/messages/{conversation_id}/read",
    response_model=MarkReadResponse,
    summary="Mark a conversation as read",
)
def mark_conversation_read(
    conversation_id: str,
    message_manager: MessageManagerDep,
    current_user: User = Depends(get_current_user),
) -> MarkReadResponse:
    updated = message_manager.mark_read(conversation_id, current_user)
    return MarkReadResponse(updated=updated)


@router.get(
    "/conversations",
    response_model=ConversationListResponse,
    summary="List conversations with last message and unread count",
)
def list_conversations(
    message_manager: MessageManagerDep,
    current_user: User = Depends(get_current_user),
) -> ConversationListResponse:
    return ConversationListResponse(
        conversations=message_manager.list_conversations(current_user)
    )
