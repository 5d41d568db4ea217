from sqlalchemy import Column, String, Text, ForeignKey
from .base import Base


class SupportTicketModel(Base):
    __tablename__ = "support_tickets"

    id = Column(String, primary_key=True, index=True)
    student_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    student_name = Column(String, nullable=False)
    subject = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    attachment_url = Column(String, nullable=True)
    status = Column(String, nullable=False)
    created_at = Column(String, index=True, nullable=False)
    updated_at = Column(String, nullable=False)
