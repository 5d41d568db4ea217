"""Announcement management utilities.

Announcements are admin-authored notices. The public listing only shows
announcements that are active and whose expiry date lies in the future.
"""

import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

import pytz
from sqlalchemy.orm import Session

from core.database import commit_or_raise
from core.exceptions import AnnouncementNotFoundError, ValidationError
from models.announcement import AnnouncementModel
from schemas.announcement import Announcement
from schemas.user import User
from utils.converters import model_to_announcement

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "body", "expiry_date", "active")


def parse_expiry_date(value: str) -> datetime:
    """Parse an ISO date or datetime into an aware UTC datetime.

    A date without time means midnight UTC of that day; a naive datetime is
    taken as UTC.

    Raises:
        ValidationError: If the value is not an ISO-8601 date/datetime.
    """
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (TypeError, ValueError, AttributeError):
        raise ValidationError(f"Invalid expiry date: {value}")
    if parsed.tzinfo is None:
        return pytz.utc.localize(parsed)
    return parsed.astimezone(pytz.utc)


class AnnouncementManager:
    """Manages announcements using SQLAlchemy."""

    def __init__(self, db: Session):
        """Initialize AnnouncementManager.

        Args:
            db: SQLAlchemy Session.
        """
        self.db = db

    def _get_model(self, announcement_id: str) -> AnnouncementModel:
        model = (
            self.db.query(AnnouncementModel)
            .filter(AnnouncementModel.id == announcement_id)
            .first()
        )
        if not model:
            raise AnnouncementNotFoundError(announcement_id)
        return model

    def create_announcement(
        self,
        author: User,
        title: Optional[str],
        body: Optional[str],
        expiry_date: Optional[str],
    ) -> Announcement:
        """Create an active announcement.

        Args:
            author: The admin posting the announcement.
            title: Headline.
            body: Announcement text.
            expiry_date: ISO date/datetime after which it is hidden.

        Returns:
            The created Announcement.

        Raises:
            ValidationError: If a field is missing or the expiry date is invalid.
        """
        if not title or not body or not expiry_date:
            raise ValidationError("Title, body and expiry date are required")
        parse_expiry_date(expiry_date)

        model = AnnouncementModel(
            id=str(uuid.uuid4()),
            title=title,
            body=body,
            expiry_date=expiry_date,
            active=True,
            created_at=datetime.now(pytz.utc).isoformat(),
            created_by=author.id,
        )
        self.db.add(model)
        commit_or_raise(self.db, "Failed to create announcement")
        logger.info("Announcement %s created by %s", model.id, author.id)
        return model_to_announcement(model)

    def update_announcement(
        self, announcement_id: str, updates: Dict[str, Any]
    ) -> Announcement:
        """Shallow-merge the given fields into an announcement.

        Unknown keys and None values are ignored. updated_at is always stamped.

        Raises:
            AnnouncementNotFoundError: If the announcement does not exist.
            ValidationError: If a new expiry date is invalid.
        """
        model = self._get_model(announcement_id)
        changes = {
            key: value
            for key, value in updates.items()
            if key in UPDATABLE_FIELDS and value is not None
        }
        if "expiry_date" in changes:
            parse_expiry_date(changes["expiry_date"])

        for key, value in changes.items():
            setattr(model, key, value)
        model.updated_at = datetime.now(pytz.utc).isoformat()
        commit_or_raise(self.db, "Failed to update announcement")
        logger.info("Announcement %s updated: %s", announcement_id, sorted(changes))
        return model_to_announcement(model)

    def delete_announcement(self, announcement_id: str) -> None:
        """Delete an announcement.

        Raises:
            AnnouncementNotFoundError: If the announcement does not exist.
        """
        model = self._get_model(announcement_id)
        self.db.delete(model)
        commit_or_raise(self.db, "Failed to delete announcement")
        logger.info("Deleted announcement: %s", announcement_id)

    def list_all(self) -> List[Announcement]:
        """Every announcement, newest first."""
        models = (
            self.db.query(AnnouncementModel)
            .order_by(AnnouncementModel.created_at.desc())
            .all()
        )
        return [model_to_announcement(m) for m in models]

    def list_active(self, now: Optional[datetime] = None) -> List[Announcement]:
        """Announcements that are active and not yet expired, newest first."""
        now = now or datetime.now(pytz.utc)
        models = (
            self.db.query(AnnouncementModel)
            .filter(AnnouncementModel.active.is_(True))
            .order_by(AnnouncementModel.created_at.desc())
            .all()
        )
        results = []
        for model in models:
            try:
                expires_at = parse_expiry_date(model.expiry_date)
            except ValidationError:
                logger.warning(
                    "Announcement %s has unparseable expiry date %r, hiding it",
                    model.id,
                    model.expiry_date,
                )
                continue
            if expires_at > now:
                results.append(model_to_announcement(model))
        return results
