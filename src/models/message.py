from sqlalchemy import Boolean, Column, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base


class MessageModel(Base):
    __tablename__ = "messages"

    id = Column(String, primary_key=True, index=True)
    conversation_id = Column(
        String,
        ForeignKey("document_requests.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    sender_id = Column(String, nullable=False)  # user id or 'system'
    sender_name = Column(String, nullable=False)
    sender_role = Column(String, nullable=False)
    text = Column(Text, nullable=False, default="")
    file_url = Column(String, nullable=True)
    timestamp = Column(String, index=True, nullable=False)
    read = Column(Boolean, nullable=False, default=False)

    conversation = relationship("DocumentRequestModel", back_populates="messages")
