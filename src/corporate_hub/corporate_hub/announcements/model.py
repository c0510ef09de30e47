from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AnnouncementCategory, AnnouncementPriority


@dataclass(frozen=True)
class Announcement:
    id: int
    title: str
    content: str
    category: AnnouncementCategory
    priority: AnnouncementPriority
    published_by: Optional[int]
    published_at: Optional[datetime]
    expires_at: Optional[date] = None
    is_active: bool = True
    publisher_name: Optional[str] = None

    def is_expired_on(self, day: date) -> bool:
        return self.expires_at is not None and self.expires_at < day

    def is_visible_on(self, day: date) -> bool:
        return self.is_active and not self.is_expired_on(day)
