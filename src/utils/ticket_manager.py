"""Support ticket management utilities."""

import logging
import uuid
from datetime import datetime
from typing import List, Optional

import pytz
from sqlalchemy.orm import Session

from config import ROLE_ADMIN, TICKET_STATUS_OPEN, TICKET_STATUSES
from core.database import commit_or_raise
from core.exceptions import TicketNotFoundError, ValidationError
from models.support_ticket import SupportTicketModel
from schemas.ticket import SupportTicket
from schemas.user import User
from utils.converters import model_to_ticket

logger = logging.getLogger(__name__)


class TicketManager:
    """Manages support tickets."""

    def __init__(self, db: Session):
        self.db = db

    def create_ticket(
        self,
        student: User,
        subject: Optional[str],
        description: Optional[str],
        attachment_url: Optional[str] = None,
    ) -> SupportTicket:
        """Open a new ticket for a student."""
        if not subject or not description:
            raise ValidationError("Subject and description are required")

        now = datetime.now(pytz.utc).isoformat()
        model = SupportTicketModel(
            id=str(uuid.uuid4()),
            student_id=student.id,
            student_name=student.full_name,
            subject=subject,
            description=description,
            attachment_url=attachment_url,
            status=TICKET_STATUS_OPEN,
            created_at=now,
            updated_at=now,
        )
        self.db.add(model)
        commit_or_raise(self.db, "Failed to create ticket")
        logger.info("Created ticket %s for student %s", model.id, student.id)
        return model_to_ticket(model)

    def update_status(self, ticket_id: str, status: Optional[str]) -> SupportTicket:
        """Set a ticket's status. Any defined status may follow any other.

        Raises:
            ValidationError: If the status is unknown.
            TicketNotFoundError: If the ticket does not exist.
        """
        model = (
            self.db.query(SupportTicketModel)
            .filter(SupportTicketModel.id == ticket_id)
            .first()
        )
        if not model:
            raise TicketNotFoundError(ticket_id)
        if status not in TICKET_STATUSES:
            raise ValidationError(
                f"Invalid status: {status}. Must be one of {', '.join(TICKET_STATUSES)}."
            )

        previous = model.status
        model.status = status
        model.updated_at = datetime.now(pytz.utc).isoformat()
        commit_or_raise(self.db, "Failed to update ticket")
        logger.info("Ticket %s status changed: %s -> %s", ticket_id, previous, status)
        return model_to_ticket(model)

    def list_tickets(self, actor: User) -> List[SupportTicket]:
        """Own tickets for students, all tickets for admins; newest first."""
        query = self.db.query(SupportTicketModel)
        if actor.role != ROLE_ADMIN:
            query = query.filter(SupportTicketModel.student_id == actor.id)
        models = query.order_by(SupportTicketModel.created_at.desc()).all()
        return [model_to_ticket(m) for m in models]
