"""ORM models.

Importing this package registers every table with ``Base.metadata``.
"""

from .base import Base
from .user import UserModel
from .document_request import DocumentRequestModel
from .message import MessageModel
from .support_ticket import SupportTicketModel
from .announcement import AnnouncementModel

__all__ = [
    "Base",
    "UserModel",
    "DocumentRequestModel",
    "MessageModel",
    "SupportTicketModel",
    "AnnouncementModel",
]
