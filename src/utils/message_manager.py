"""Conversation and message management.

Every document request owns exactly one conversation, identified by the
request id. A conversation is append-only and is closed for new messages once
its request is completed.
"""

import logging
import uuid
from collections import defaultdict
from datetime import datetime
from typing import Dict, List, Optional

import pytz
from sqlalchemy.orm import Session

from config import (
    REQUEST_STATUS_COMPLETED,
    ROLE_ADMIN,
    SYSTEM_SENDER_ID,
    SYSTEM_SENDER_NAME,
)
from core.database import commit_or_raise
from core.exceptions import (
    ConversationLockedError,
    ConversationNotFoundError,
    ValidationError,
)
from models.document_request import DocumentRequestModel
from models.message import MessageModel
from schemas.message import Conversation, Message
from schemas.user import User
from utils.converters import model_to_message, model_to_request

logger = logging.getLogger(__name__)


def build_system_message(conversation_id: str, text: str) -> MessageModel:
    """Build an unsaved message authored by the system sender."""
    return MessageModel(
        id=str(uuid.uuid4()),
        conversation_id=conversation_id,
        sender_id=SYSTEM_SENDER_ID,
        sender_name=SYSTEM_SENDER_NAME,
        sender_role=SYSTEM_SENDER_ID,
        text=text,
        file_url=None,
        timestamp=datetime.now(pytz.utc).isoformat(),
        read=False,
    )


class MessageManager:
    """Manages request conversations using SQLAlchemy."""

    def __init__(self, db: Session):
        """Initialize MessageManager.

        Args:
            db: SQLAlchemy Session.
        """
        self.db = db

    def _get_conversation(self, conversation_id: str, actor: User) -> DocumentRequestModel:
        """Load the request backing a conversation, enforcing visibility.

        Students only see conversations of their own requests; a foreign
        conversation is reported as missing.
        """
        model = (
            self.db.query(DocumentRequestModel)
            .filter(DocumentRequestModel.id == conversation_id)
            .first()
        )
        if not model:
            raise ConversationNotFoundError(conversation_id)
        if actor.role != ROLE_ADMIN and model.student_id != actor.id:
            logger.warning(
                "User %s tried to access conversation %s", actor.id, conversation_id
            )
            raise ConversationNotFoundError(conversation_id)
        return model

    def send_message(
        self,
        conversation_id: Optional[str],
        sender: User,
        text: Optional[str],
        file_url: Optional[str] = None,
    ) -> Message:
        """Append a message to a conversation.

        Args:
            conversation_id: The request id of the conversation.
            sender: The authenticated sender.
            text: Message body.
            file_url: Optional link to an uploaded attachment.

        Returns:
            The stored message (unread).

        Raises:
            ValidationError: If there is no conversation id, or neither text
                nor file_url is given.
            ConversationNotFoundError: If the conversation is unknown or not
                visible to the sender.
            ConversationLockedError: If the request is completed.
        """
        if not conversation_id:
            raise ValidationError("Conversation ID is required")
        request = self._get_conversation(conversation_id, sender)
        if request.status == REQUEST_STATUS_COMPLETED:
            raise ConversationLockedError(conversation_id)
        if not text and not file_url:
            raise ValidationError("Message text is required")

        model = MessageModel(
            id=str(uuid.uuid4()),
            conversation_id=conversation_id,
            sender_id=sender.id,
            sender_name=sender.full_name,
            sender_role=sender.role,
            text=text or "",
            file_url=file_url,
            timestamp=datetime.now(pytz.utc).isoformat(),
            read=False,
        )
        self.db.add(model)
        commit_or_raise(self.db, "Failed to send message")

        logger.info("User %s posted to conversation %s", sender.id, conversation_id)
        return model_to_message(model)

    def list_messages(self, conversation_id: str, actor: User) -> List[Message]:
        """Return the whole thread, oldest first."""
        self._get_conversation(conversation_id, actor)
        models = (
            self.db.query(MessageModel)
            .filter(MessageModel.conversation_id == conversation_id)
            .order_by(MessageModel.timestamp.asc())
            .all()
        )
        return [model_to_message(m) for m in models]

    def list_conversations(self, actor: User) -> List[Conversation]:
        """Summarize every conversation visible to the actor.

        Each entry carries the request fields, its most recent message and
        the number of unread messages not sent by the actor. Entries are
        ordered by most recent message, newest first; conversations without
        messages come last.
        """
        query = self.db.query(DocumentRequestModel)
        if actor.role != ROLE_ADMIN:
            query = query.filter(DocumentRequestModel.student_id == actor.id)
        requests = query.order_by(DocumentRequestModel.created_at.desc()).all()
        if not requests:
            return []

        threads: Dict[str, List[MessageModel]] = defaultdict(list)
        messages = (
            self.db.query(MessageModel)
            .filter(MessageModel.conversation_id.in_([r.id for r in requests]))
            .order_by(MessageModel.timestamp.asc())
            .all()
        )
        for message in messages:
            threads[message.conversation_id].append(message)

        conversations = []
        for request in requests:
            thread = threads.get(request.id, [])
            last = thread[-1] if thread else None
            conversations.append(
                Conversation(
                    **model_to_request(request).model_dump(),
                    last_message=model_to_message(last) if last else None,
                    unread_count=sum(
                        1 for m in thread if not m.read and m.sender_id != actor.id
                    ),
                )
            )

        # ISO-8601 UTC timestamps sort lexically; "" puts empty threads last
        conversations.sort(
            key=lambda c: c.last_message.timestamp if c.last_message else "",
            reverse=True,
        )
        return conversations

    def mark_read(self, conversation_id: str, actor: User) -> int:
        """Mark messages from other participants as read.

        Returns:
            Number of messages that changed state.
        """
        self._get_conversation(conversation_id, actor)
        updated = (
            self.db.query(MessageModel)
            .filter(
                MessageModel.conversation_id == conversation_id,
                MessageModel.sender_id != actor.id,
                MessageModel.read.is_(False),
            )
            .update({MessageModel.read: True}, synchronize_session=False)
        )
        commit_or_raise(self.db, "Failed to update messages")
        logger.debug("Marked %d messages read in %s for %s", updated, conversation_id, actor.id)
        return updated
