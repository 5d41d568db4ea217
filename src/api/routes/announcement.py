"""Announcement routes.

The active listing is public; every other endpoint is admin-only.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from api.routes.auth import get_current_user
from config import ROLE_ADMIN
from core.dependencies import AnnouncementManagerDep
from schemas.announcement import (
    AnnouncementListResponse,
    AnnouncementResponse,
    CreateAnnouncementRequest,
    UpdateAnnouncementRequest,
)
from schemas.user import User

router = APIRouter(prefix="/api/announcements", tags=["Announcement"])


def _require_admin(user: User) -> None:
    if user.role != ROLE_ADMIN:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )


@router.get("", response_model=AnnouncementListResponse, summary="List active announcements")
def list_active_announcements(
    announcement_manager: AnnouncementManagerDep,
) -> AnnouncementListResponse:
    """Active, unexpired announcements, newest first. No auth required."""
    return AnnouncementListResponse(announcements=announcement_manager.list_active())


@router.get("/all", response_model=AnnouncementListResponse, summary="List all announcements")
def list_all_announcements(
    announcement_manager: AnnouncementManagerDep,
    current_user: User = Depends(get_current_user),
) -> AnnouncementListResponse:
    _require_admin(current_user)
    return AnnouncementListResponse(announcements=announcement_manager.list_all())


@router.post("", response_model=AnnouncementResponse, summary="Create an announcement")
def create_announcement(
    req: CreateAnnouncementRequest,
    announcement_manager: AnnouncementManagerDep,
    current_user: User = Depends(get_current_user),
) -> AnnouncementResponse:
    _require_admin(current_user)
    announcement = announcement_manager.create_announcement(
        current_user, req.title, req.body, req.expiry_date
    )
    return AnnouncementResponse(announcement=announcement)


@router.put(
    "/{announcement_id}",
    response_model=AnnouncementResponse,
    summary="Update an announcement",
)
def update_announcement(
    announcement_id: str,
    req: UpdateAnnouncementRequest,
    announcement_manager: AnnouncementManagerDep,
    current_user: User = Depends(get_current_user),
) -> AnnouncementResponse:
    """Merge the fields present in the body into the announcement."""
    _require_admin(current_user)
    announcement = announcement_manager.update_announcement(
        announcement_id, req.model_dump(exclude_unset=True)
    )
    return AnnouncementResponse(announcement=announcement)


@router.delete("/{announcement_id}", summary="Delete an announcement")
def delete_announcement(
    announcement_id: str,
    announcement_manager: AnnouncementManagerDep,
    current_user: User = Depends(get_current_user),
) -> dict:
    _require_admin(current_user)
    announcement_manager.delete_announcement(announcement_id)
    return {"success": True}
