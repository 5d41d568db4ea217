"""Support ticket routes."""

from fastapi import APIRouter, Depends, HTTPException, status

from api.routes.auth import get_current_user
from config import ROLE_ADMIN, ROLE_STUDENT
from core.dependencies import TicketManagerDep
from schemas.ticket import (
    CreateTicketRequest,
    TicketListResponse,
    TicketResponse,
    UpdateTicketRequest,
)
from schemas.user import User

router = APIRouter(prefix="/api/tickets", tags=["Ticket"])


@router.post("", response_model=TicketResponse, summary="Open a support ticket")
def create_ticket(
    req: CreateTicketRequest,
    ticket_manager: TicketManagerDep,
    current_user: User = Depends(get_current_user),
) -> TicketResponse:
    if current_user.role != ROLE_STUDENT:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    ticket = ticket_manager.create_ticket(
        current_user, req.subject, req.description, req.attachment_url
    )
    return TicketResponse(ticket=ticket)


@router.get("", response_model=TicketListResponse, summary="List support tickets")
def list_tickets(
    ticket_manager: TicketManagerDep,
    current_user: User = Depends(get_current_user),
) -> TicketListResponse:
    return TicketListResponse(tickets=ticket_manager.list_tickets(current_user))


@router.put("/{ticket_id}", response_model=TicketResponse, summary="Update ticket status")
def update_ticket(
    ticket_id: str,
    req: UpdateTicketRequest,
    ticket_manager: TicketManagerDep,
    current_user: User = Depends(get_current_user),
) -> TicketResponse:
    if current_user.role != ROLE_ADMIN:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    ticket = ticket_manager.update_status(ticket_id, req.status)
    return TicketResponse(ticket=ticket)
