"""Small helpers shared by the MySQL repositories."""

from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, time, timedelta
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (conn, cursor); commit on success, roll back on error, always close."""
    conn = conn_factory.connect()
    cur = conn.cursor(dictionary=dictionary)
    try:
        yield conn, cur
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        cur.close()
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    return cur.fetchone() or None


def fetchall(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or [])


def scalar(cur, sql: str, params: Sequence[Any] = ()) -> Any:
    """First column of the first row, or None."""
    cur.execute(sql, tuple(params))
    row = cur.fetchone()
    if not row:
        return None
    if isinstance(row, dict):
        return next(iter(row.values()))
    return row[0]


def like_pattern(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def to_decimal(value: Any) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def to_time(value: Any) -> Optional[time]:
    """TIME columns come back as timedelta from mysql-connector; accept time and 'HH:MM[:SS]' too."""
    if value is None or isinstance(value, time):
        return value
    if isinstance(value, timedelta):
        return (datetime.min + timedelta(seconds=int(value.total_seconds()) % 86400)).time()
    if isinstance(value, str):
        parts = [int(p) for p in value.strip().split(":") if p]
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        return time(*parts[:3])
    raise TypeError(f"Unsupported TIME value: {type(value)!r}")


def grouped_counts(cur, sql: str, params: Sequence[Any] = ()) -> Dict[str, int]:
    """{k: n} from a `SELECT <col> AS k, COUNT(*) AS n ... GROUP BY <col>` query."""
    cur.execute(sql, tuple(params))
    return {str(r["k"]): int(r["n"]) for r in fetchall(cur) if r.get("k") is not None}
