from __future__ import annotations

import json
from typing import Any, Dict, Optional, Sequence, Tuple

from ..core.enums import EmploymentStatus, RateType, Role, ShiftType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, grouped_counts, like_pattern, scalar, to_time
from .model import EmployeeOption, Profile, ProfileFields
from .repository import ProfileRepository

_COLUMNS = """
    id, email, password_hash, full_name, position, department, phone, profile_photo_url,
    role, employment_status, time_in, time_out, days_of_work, start_date, end_date,
    rate_type, salary_rate, shift_type, date_hired, remarks, email_confirmed,
    created_at, updated_at
"""


def _days(raw: Any) -> tuple[str, ...]:
    if not raw:
        return ()
    try:
        return tuple(json.loads(raw))
    except (TypeError, ValueError):
        return tuple(d.strip() for d in str(raw).split(",") if d.strip())


def _row_to_profile(r: dict) -> Profile:
    return Profile(
        id=int(r["id"]),
        email=r["email"],
        password_hash=r["password_hash"],
        full_name=r["full_name"],
        position=r.get("position") or "",
        department=r.get("department") or "",
        role=Role(r["role"]),
        phone=r.get("phone"),
        profile_photo_url=r.get("profile_photo_url"),
        employment_status=EmploymentStatus(r.get("employment_status") or "regular"),
        time_in=to_time(r.get("time_in")),
        time_out=to_time(r.get("time_out")),
        days_of_work=_days(r.get("days_of_work")),
        start_date=r.get("start_date"),
        end_date=r.get("end_date"),
        rate_type=RateType(r.get("rate_type") or "monthly"),
        salary_rate=r.get("salary_rate"),
        shift_type=ShiftType(r.get("shift_type") or "day"),
        date_hired=r.get("date_hired"),
        remarks=r.get("remarks"),
        email_confirmed=bool(r.get("email_confirmed")),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


def _field_params(fields: ProfileFields) -> tuple:
    return (
        fields.full_name,
        fields.position,
        fields.department,
        fields.phone,
        fields.role.value,
        fields.employment_status.value,
        fields.time_in,
        fields.time_out,
        json.dumps(list(fields.days_of_work)),
        fields.start_date,
        fields.end_date,
        fields.rate_type.value,
        fields.salary_rate,
        fields.shift_type.value,
        fields.date_hired,
        fields.remarks,
    )


class MySQLProfileRepository(ProfileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, profile_id: int) -> Optional[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM profiles WHERE id=%s", (profile_id,))
            row = fetchone(cur)
            return _row_to_profile(row) if row else None

    def get_by_email(self, email: str) -> Optional[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM profiles WHERE email=%s", (email.lower(),))
            row = fetchone(cur)
            return _row_to_profile(row) if row else None

    def create(self, *, email: str, password_hash: str, fields: ProfileFields, email_confirmed: bool) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO profiles(full_name, position, department, phone, role, employment_status,
                                     time_in, time_out, days_of_work, start_date, end_date, rate_type,
                                     salary_rate, shift_type, date_hired, remarks,
                                     email, password_hash, email_confirmed)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                _field_params(fields) + (email.lower(), password_hash, int(email_confirmed)),
            )
            return int(cur.lastrowid)

    def update_fields(self, profile_id: int, fields: ProfileFields) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE profiles
                SET full_name=%s, position=%s, department=%s, phone=%s, role=%s, employment_status=%s,
                    time_in=%s, time_out=%s, days_of_work=%s, start_date=%s, end_date=%s, rate_type=%s,
                    salary_rate=%s, shift_type=%s, date_hired=%s, remarks=%s
                WHERE id=%s
                """,
                _field_params(fields) + (profile_id,),
            )

    def update_contact(self, profile_id: int, *, full_name: str, phone: Optional[str]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE profiles SET full_name=%s, phone=%s WHERE id=%s", (full_name, phone, profile_id))

    def set_password_hash(self, profile_id: int, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE profiles SET password_hash=%s WHERE id=%s", (password_hash, profile_id))
            return cur.rowcount > 0

    def confirm_email(self, profile_id: int) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE profiles SET email_confirmed=1 WHERE id=%s", (profile_id,))

    def delete_by_id(self, profile_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM profiles WHERE id=%s", (profile_id,))
            return cur.rowcount > 0

    def list_all(self, *, search: Optional[str] = None, department: Optional[str] = None) -> Sequence[Profile]:
        where = []
        params: list = []
        if search:
            pattern = like_pattern(search.lower())
            where.append("(LOWER(full_name) LIKE %s OR LOWER(email) LIKE %s OR LOWER(position) LIKE %s)")
            params.extend([pattern, pattern, pattern])
        if department:
            where.append("department=%s")
            params.append(department)
        sql = f"SELECT {_COLUMNS} FROM profiles"
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY created_at DESC, id DESC"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_profile(r) for r in fetchall(cur)]

    def list_departments(self) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT DISTINCT department FROM profiles WHERE department <> '' ORDER BY department")
            return [r["department"] for r in fetchall(cur)]

    def list_options(self) -> Sequence[EmployeeOption]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, full_name, position, department FROM profiles ORDER BY full_name")
            return [
                EmployeeOption(
                    id=int(r["id"]),
                    full_name=r["full_name"],
                    position=r.get("position") or "",
                    department=r.get("department") or "",
                )
                for r in fetchall(cur)
            ]

    def count_all(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            return int(scalar(cur, "SELECT COUNT(*) AS n FROM profiles") or 0)

    def count_by_role(self) -> Dict[str, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            return grouped_counts(cur, "SELECT role AS k, COUNT(*) AS n FROM profiles GROUP BY role")

    def count_by_department(self) -> Sequence[Tuple[str, int]]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COALESCE(NULLIF(TRIM(department), ''), 'Unassigned') AS k, COUNT(*) AS n
                FROM profiles
                GROUP BY k
                ORDER BY n DESC, k
                """
            )
            return [(r["k"], int(r["n"])) for r in fetchall(cur)]
