"""Announcement schema definitions."""

from typing import List, Optional

from schemas.base import CamelModel


class Announcement(CamelModel):
    id: str
    title: str
    body: str
    expiry_date: str
    active: bool
    created_at: str
    created_by: str
    updated_at: Optional[str] = None


class CreateAnnouncementRequest(CamelModel):
    title: Optional[str] = None
    body: Optional[str] = None
    expiry_date: Optional[str] = None


class UpdateAnnouncementRequest(CamelModel):
    """Partial update; only fields present in the body are merged."""
    title: Optional[str] = None
    body: Optional[str] = None
    expiry_date: Optional[str] = None
    active: Optional[bool] = None


class AnnouncementResponse(CamelModel):
    success: bool = True
    announcement: Announcement


class AnnouncementListResponse(CamelModel):
    announcements: List[Announcement]
