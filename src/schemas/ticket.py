"""Support ticket schema definitions."""

from typing import List, Optional

from schemas.base import CamelModel


class SupportTicket(CamelModel):
    id: str
    student_id: str
    student_name: str
    subject: str
    description: str
    attachment_url: Optional[str] = None
    status: str
    created_at: str
    updated_at: str


class CreateTicketRequest(CamelModel):
    subject: Optional[str] = None
    description: Optional[str] = None
    attachment_url: Optional[str] = None


class UpdateTicketRequest(CamelModel):
    status: Optional[str] = None


class TicketResponse(CamelModel):
    success: bool = True
    ticket: SupportTicket


class TicketListResponse(CamelModel):
    tickets: List[SupportTicket]
