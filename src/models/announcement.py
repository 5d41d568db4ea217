"""Announcement database model."""

from sqlalchemy import Boolean, Column, String, Text
from .base import Base


class AnnouncementModel(Base):
    """Admin-authored broadcast notice."""

    __tablename__ = "announcements"

    id = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=False)
    body = Column(Text, nullable=False)
    expiry_date = Column(String, nullable=False)  # ISO date or datetime string
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(String, index=True, nullable=False)
    created_by = Column(String, nullable=False)  # admin user id
    updated_at = Column(String, nullable=True)
