from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base


class DocumentRequestModel(Base):
    __tablename__ = "document_requests"

    id = Column(String, primary_key=True, index=True)
    # Owner's user id
    student_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    student_name = Column(String, nullable=False)
    document_type = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False)
    price_per_copy = Column(Integer, nullable=False)
    total = Column(Integer, nullable=False)
    status = Column(String, index=True, nullable=False)
    created_at = Column(String, index=True, nullable=False)
    updated_at = Column(String, nullable=False)

    messages = relationship(
        "MessageModel",
        back_populates="conversation",
        cascade="all, delete-orphan",
    )
