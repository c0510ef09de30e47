from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import AnnouncementCategory, AnnouncementPriority
from .model import Announcement


class AnnouncementRepository(Protocol):
    def create(
        self,
        *,
        title: str,
        content: str,
        category: AnnouncementCategory,
        priority: AnnouncementPriority,
        published_by: int,
        expires_at: Optional[date],
    ) -> int:
        raise NotImplementedError

    def get_by_id(self, announcement_id: int) -> Optional[Announcement]:
        raise NotImplementedError

    def list_all(self, limit: int) -> Sequence[Announcement]:
        """Newest first, active or not."""

        raise NotImplementedError

    def list_visible(
        self,
        day: date,
        limit: int,
        *,
        category: Optional[AnnouncementCategory] = None,
        search: str = "",
    ) -> Sequence[Announcement]:
        """Active and not expired on `day`, newest first; `search` matches title or content."""

        raise NotImplementedError

    def set_active(self, announcement_id: int, is_active: bool) -> bool:
        """False when no row changed."""

        raise NotImplementedError

    def delete_by_id(self, announcement_id: int) -> bool:
        raise NotImplementedError
