from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AnnouncementCategory, AnnouncementPriority
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, like_pattern
from .model import Announcement
from .repository import AnnouncementRepository

_SELECT = """
    SELECT a.id, a.title, a.content, a.category, a.priority, a.published_by, a.published_at,
           a.expires_at, a.is_active, p.full_name AS publisher_name
    FROM announcements a
    LEFT JOIN profiles p ON p.id = a.published_by
"""


def _row_to_announcement(r: dict) -> Announcement:
    return Announcement(
        id=int(r["id"]),
        title=r["title"],
        content=r["content"],
        category=AnnouncementCategory(r["category"]),
        priority=AnnouncementPriority(r["priority"]),
        published_by=r.get("published_by"),
        published_at=r.get("published_at"),
        expires_at=r.get("expires_at"),
        is_active=bool(r.get("is_active")),
        publisher_name=r.get("publisher_name"),
    )


class MySQLAnnouncementRepository(AnnouncementRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO announcements(title, content, category, priority, published_by, expires_at, is_active)
                VALUES(%s,%s,%s,%s,%s,%s,1)
                """,
                (title, content, category.value, priority.value, published_by, expires_at),
            )
            return int(cur.lastrowid)

    def get_by_id(self, announcement_id: int) -> Optional[Announcement]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE a.id=%s", (announcement_id,))
            row = fetchone(cur)
            return _row_to_announcement(row) if row else None

    def list_all(self, limit: int) -> Sequence[Announcement]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} ORDER BY a.published_at DESC, a.id DESC LIMIT %s", (int(limit),))
            return [_row_to_announcement(r) for r in fetchall(cur)]

    def list_visible(
        self,
        day: date,
        limit: int,
        *,
        category: Optional[AnnouncementCategory] = None,
        search: str = "",
    ) -> Sequence[Announcement]:
        where = ["a.is_active=1", "(a.expires_at IS NULL OR a.expires_at >= %s)"]
        params: list = [day]
        if category is not None:
            where.append("a.category=%s")
            params.append(category.value)
        if search:
            pattern = like_pattern(search.strip().lower())
            where.append("(LOWER(a.title) LIKE %s OR LOWER(a.content) LIKE %s)")
            params.extend([pattern, pattern])
        sql = f"{_SELECT} WHERE " + " AND ".join(where) + " ORDER BY a.published_at DESC, a.id DESC LIMIT %s"
        params.append(int(limit))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_announcement(r) for r in fetchall(cur)]

    def set_active(self, announcement_id: int, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE announcements SET is_active=%s WHERE id=%s", (int(is_active), announcement_id))
            return cur.rowcount > 0

    def delete_by_id(self, announcement_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM announcements WHERE id=%s", (announcement_id,))
            return cur.rowcount > 0
