"""Dependency injection module for FastAPI.

Each manager is built per request around the request-scoped DB session.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from core.database import get_db
from utils import announcement_manager
from utils import message_manager
from utils import request_manager
from utils import ticket_manager
from utils import user_manager


def get_user_manager(db: Session = Depends(get_db)) -> user_manager.UserManager:
    """Get UserManager instance with request-scoped DB session.

    Args:
        db: Database session.

    Returns:
        UserManager instance.
    """
    return user_manager.UserManager(db)


def get_request_manager(db: Session = Depends(get_db)) -> request_manager.RequestManager:
    """Get RequestManager instance with request-scoped DB session.

    Args:
        db: Database session.

    Returns:
        RequestManager instance.
    """
    return request_manager.RequestManager(db)


def get_message_manager(db: Session = Depends(get_db)) -> message_manager.MessageManager:
    """Get MessageManager instance with request-scoped DB session."""
    return message_manager.MessageManager(db)


def get_ticket_manager(db: Session = Depends(get_db)) -> ticket_manager.TicketManager:
    """Get TicketManager instance with request-scoped DB session."""
    return ticket_manager.TicketManager(db)


def get_announcement_manager(
    db: Session = Depends(get_db),
) -> announcement_manager.AnnouncementManager:
    """Get AnnouncementManager instance with request-scoped DB session."""
    return announcement_manager.AnnouncementManager(db)


# Type aliases for dependency injection
UserManagerDep = Annotated[
    user_manager.UserManager, Depends(get_user_manager)
]
RequestManagerDep = Annotated[
    request_manager.RequestManager, Depends(get_request_manager)
]
MessageManagerDep = Annotated[
    message_manager.MessageManager, Depends(get_message_manager)
]
TicketManagerDep = Annotated[
    ticket_manager.TicketManager, Depends(get_ticket_manager)
]
AnnouncementManagerDep = Annotated[
    announcement_manager.AnnouncementManager, Depends(get_announcement_manager)
]
