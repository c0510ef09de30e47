from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import parse_optional_date, today
from ..common.validators import parse_enum, require_non_empty
from ..core.constants import DEFAULT_FEED_LIMIT, DEFAULT_LIST_LIMIT
from ..core.enums import AnnouncementCategory, AnnouncementPriority, Role
from ..core.exceptions import AuthorizationError, NotFoundError
from .model import Announcement
from .repository import AnnouncementRepository

logger = logging.getLogger(__name__)


class AnnouncementService:
    def __init__(self, announcements: AnnouncementRepository):
        self._announcements = announcements

    @staticmethod
    def _require_hr(current_role: Role) -> None:
        if current_role != Role.HR_ADMIN:
            raise AuthorizationError("You do not have permission to manage announcements")

    def publish(
        self,
        *,
        current_role: Role,
        publisher_id: int,
        title: str,
        content: str,
        category: str = AnnouncementCategory.GENERAL.value,
        priority: str = AnnouncementPriority.NORMAL.value,
        expires_at: str = "",
    ) -> int:
        self._require_hr(current_role)
        announcement_id = self._announcements.create(
            title=require_non_empty(title, "Title"),
            content=require_non_empty(content, "Content"),
            category=parse_enum(AnnouncementCategory, category or AnnouncementCategory.GENERAL.value, "Category"),
            priority=parse_enum(AnnouncementPriority, priority or AnnouncementPriority.NORMAL.value, "Priority"),
            published_by=int(publisher_id),
            expires_at=parse_optional_date(expires_at, "Expiry date"),
        )
        logger.info("Announcement %s published by %s", announcement_id, publisher_id)
        return announcement_id

    def list_for_hr(self, *, limit: int = DEFAULT_LIST_LIMIT) -> Sequence[Announcement]:
        return self._announcements.list_all(limit)

    def toggle_active(self, *, current_role: Role, announcement_id: int) -> bool:
        self._require_hr(current_role)
        announcement = self._announcements.get_by_id(int(announcement_id))
        if not announcement:
            raise NotFoundError("Announcement not found")
        new_state = not announcement.is_active
        if not self._announcements.set_active(announcement.id, new_state):
            raise NotFoundError("Announcement not found")
        logger.info("Announcement %s active=%s", announcement.id, new_state)
        return new_state

    def delete(self, *, current_role: Role, announcement_id: int) -> None:
        self._require_hr(current_role)
        if not self._announcements.delete_by_id(int(announcement_id)):
            raise NotFoundError("Announcement not found")
        logger.info("Announcement %s deleted", announcement_id)

    def feed(
        self,
        *,
        category: str = "all",
        search: str = "",
        day: Optional[date] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[Announcement]:
        wanted = None
        if (category or "all") != "all":
            wanted = parse_enum(AnnouncementCategory, category, "Category")
        return self._announcements.list_visible(day or today(), limit, category=wanted, search=(search or "").strip())

    def latest(self, *, limit: int = DEFAULT_FEED_LIMIT) -> Sequence[Announcement]:
        return self._announcements.list_visible(today(), limit)
