"""Document request management.

This module implements the request lifecycle: creation under the per-student
active-request cap, status changes with their system messages, and
role-scoped listings.
"""

import logging
import uuid
from datetime import datetime
from typing import Dict, List, Optional, Tuple

import pytz
from sqlalchemy import func
from sqlalchemy.orm import Session

from config import (
    DOCUMENT_TYPES,
    MAX_ACTIVE_REQUESTS,
    MAX_COPIES_PER_REQUEST,
    PRICE_PER_COPY,
    REQUEST_RECEIVED_MESSAGE,
    REQUEST_STATUS_COMPLETED,
    REQUEST_STATUS_PENDING,
    REQUEST_STATUSES,
    ROLE_ADMIN,
    STATUS_CHANGE_MESSAGES,
)
from core.database import commit_or_raise
from core.exceptions import (
    LimitExceededError,
    RequestNotFoundError,
    ValidationError,
)
from models.document_request import DocumentRequestModel
from models.user import UserModel
from schemas.document_request import DocumentRequest
from schemas.message import Message
from schemas.user import User
from utils.converters import model_to_message, model_to_request
from utils.message_manager import build_system_message

logger = logging.getLogger(__name__)


class RequestManager:
    """Manages document requests using SQLAlchemy."""

    def __init__(self, db: Session):
        """Initialize RequestManager.

        Args:
            db: SQLAlchemy Session.
        """
        self.db = db

    def _get_model(self, request_id: str) -> DocumentRequestModel:
        model = (
            self.db.query(DocumentRequestModel)
            .filter(DocumentRequestModel.id == request_id)
            .first()
        )
        if not model:
            raise RequestNotFoundError(request_id)
        return model

    def count_active_requests(self, student_id: str) -> int:
        """Count the student's requests whose status is not completed."""
        return (
            self.db.query(func.count(DocumentRequestModel.id))
            .filter(
                DocumentRequestModel.student_id == student_id,
                DocumentRequestModel.status != REQUEST_STATUS_COMPLETED,
            )
            .scalar()
        )

    def create_request(
        self,
        student: User,
        document_type: Optional[str],
        quantity: Optional[int],
    ) -> Tuple[DocumentRequest, Message]:
        """Create a document request and its opening system message.

        Args:
            student: The requesting student.
            document_type: Catalog code of the requested document.
            quantity: Number of copies (1 to MAX_COPIES_PER_REQUEST).

        Returns:
            The created request and the initial system message.

        Raises:
            ValidationError: If a field is missing or invalid.
            LimitExceededError: If the student already has the maximum
                number of active requests.
        """
        if not document_type or quantity is None:
            raise ValidationError("Document type and quantity are required")
        if document_type not in DOCUMENT_TYPES:
            raise ValidationError(f"Invalid document type: {document_type}")
        if (
            not isinstance(quantity, int)
            or isinstance(quantity, bool)
            or not 1 <= quantity <= MAX_COPIES_PER_REQUEST
        ):
            raise ValidationError(
                f"Quantity must be between 1 and {MAX_COPIES_PER_REQUEST}"
            )

        # Lock the student's row so concurrent creates for the same student
        # run the cap check one at a time. SQLite ignores FOR UPDATE; there the
        # BEGIN IMMEDIATE issued by core.database already holds the write lock.
        self.db.query(UserModel).filter(UserModel.id == student.id).with_for_update().first()

        if self.count_active_requests(student.id) >= MAX_ACTIVE_REQUESTS:
            logger.warning("Student %s hit the active request cap", student.id)
            raise LimitExceededError(
                f"Maximum {MAX_ACTIVE_REQUESTS} active requests allowed"
            )

        now = datetime.now(pytz.utc).isoformat()
        model = DocumentRequestModel(
            id=str(uuid.uuid4()),
            student_id=student.id,
            student_name=student.full_name,
            document_type=document_type,
            quantity=quantity,
            price_per_copy=PRICE_PER_COPY,
            total=PRICE_PER_COPY * quantity,
            status=REQUEST_STATUS_PENDING,
            created_at=now,
            updated_at=now,
        )
        message = build_system_message(model.id, REQUEST_RECEIVED_MESSAGE)
        self.db.add(model)
        self.db.add(message)
        commit_or_raise(self.db, "Failed to create request")

        logger.info(
            "Created request %s (%s x%d) for student %s",
            model.id,
            document_type,
            quantity,
            student.id,
        )
        return model_to_request(model), model_to_message(message)

    def update_status(self, request_id: str, status: Optional[str]) -> DocumentRequest:
        """Set a request's status and post the matching system message.

        Any defined status may follow any other; only the value itself is
        validated.

        Args:
            request_id: The request to update.
            status: New status.

        Returns:
            The updated request.

        Raises:
            ValidationError: If the status is not a known request status.
            RequestNotFoundError: If the request does not exist.
        """
        model = self._get_model(request_id)
        if status not in REQUEST_STATUSES:
            raise ValidationError(
                f"Invalid status: {status}. Must be one of {', '.join(REQUEST_STATUSES)}."
            )
        previous = model.status
        model.status = status
        model.updated_at = datetime.now(pytz.utc).isoformat()

        text = STATUS_CHANGE_MESSAGES.get(status)
        if text:
            self.db.add(build_system_message(model.id, text))
        commit_or_raise(self.db, "Failed to update request")

        logger.info("Request %s status changed: %s -> %s", request_id, previous, status)
        return model_to_request(model)

    def list_requests(self, actor: User) -> List[DocumentRequest]:
        """List requests visible to the actor.

        Returns:
            Students get their own requests, admins get all; newest first.
        """
        query = self.db.query(DocumentRequestModel)
        if actor.role != ROLE_ADMIN:
            query = query.filter(DocumentRequestModel.student_id == actor.id)
        models = query.order_by(DocumentRequestModel.created_at.desc()).all()
        return [model_to_request(m) for m in models]

    def status_counts(self) -> Dict[str, int]:
        """Count all requests per status; every known status is present."""
        counts = {status: 0 for status in REQUEST_STATUSES}
        rows = (
            self.db.query(DocumentRequestModel.status, func.count(DocumentRequestModel.id))
            .group_by(DocumentRequestModel.status)
            .all()
        )
        for status, count in rows:
            counts[status] = count
        return counts
