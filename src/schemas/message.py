"""Message and conversation schema definitions."""

from typing import List, Optional

from schemas.base import CamelModel
from schemas.document_request import DocumentRequest


class Message(CamelModel):
    id: str
    conversation_id: str
    sender_id: str
    sender_name: str
    sender_role: str
    text: str
    file_url: Optional[str] = None
    timestamp: str
    read: bool = False


class SendMessageRequest(CamelModel):
    conversation_id: Optional[str] = None
    text: Optional[str] = None
    file_url: Optional[str] = None


class MessageResponse(CamelModel):
    success: bool = True
    message: Message


class MessageListResponse(CamelModel):
    messages: List[Message]


class Conversation(DocumentRequest):
    """A request together with the state of its message thread."""
    last_message: Optional[Message] = None
    unread_count: int = 0


class ConversationListResponse(CamelModel):
    conversations: List[Conversation]


class MarkReadResponse(CamelModel):
    success: bool = True
    updated: int


class RequestCreateResponse(CamelModel):
    success: bool = True
    request: DocumentRequest
    message: Message
