from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig

logger = logging.getLogger(__name__)

DEMO_ACCOUNTS = (
    {
        "email": "hr@corporatehub.local",
        "password": "hradmin123",
        "full_name": "Helena Reyes",
        "position": "HR Manager",
        "department": "Human Resources",
        "role": "hr_admin",
    },
    {
        "email": "employee@corporatehub.local",
        "password": "employee123",
        "full_name": "Marco Santos",
        "position": "Software Engineer",
        "department": "Engineering",
        "role": "employee",
    },
)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql usable regardless of the configured database name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_comments(sql: str) -> str:
    return "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ';' outside of quoted strings."""
    buf: list[str] = []
    quote = None
    escape = False

    for ch in sql:
        buf.append(ch)
        if escape:
            escape = False
            continue
        if ch == "\\":
            escape = True
            continue
        if ch in ("'", '"'):
            if quote is None:
                quote = ch
            elif quote == ch:
                quote = None
            continue
        if ch == ";" and quote is None:
            stmt = "".join(buf[:-1]).strip()
            buf.clear()
            if stmt:
                yield stmt

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _connect(config: DBConfig, *, with_database: bool = True):
    kwargs = dict(host=config.host, port=config.port, user=config.user, password=config.password, use_pure=True)
    if with_database:
        kwargs["database"] = config.database
    return mysql.connector.connect(**kwargs)


def _run_script(config: DBConfig, path: Path) -> None:
    sql = _strip_comments(_strip_create_db_and_use(path.read_text(encoding="utf-8")))
    conn = _connect(config)
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(config: DBConfig) -> None:
    conn = _connect(config, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(config: DBConfig, *, schema_path: str | Path) -> None:
    ensure_database_exists(config)
    _run_script(config, Path(schema_path))
    logger.info("Applied schema %s to %s", schema_path, config.describe())


def apply_seed_sql(config: DBConfig, *, seed_path: str | Path) -> None:
    _run_script(config, Path(seed_path))
    logger.info("Applied seed %s to %s", seed_path, config.describe())


def ensure_demo_accounts(config: DBConfig) -> None:
    """Create or reset the demo HR and employee logins (confirmed, known passwords)."""
    conn = _connect(config)
    try:
        cur = conn.cursor(dictionary=True)
        for acc in DEMO_ACCOUNTS:
            password_hash = generate_password_hash(acc["password"])
            cur.execute("SELECT id FROM profiles WHERE email=%s", (acc["email"],))
            if cur.fetchone():
                cur.execute(
                    """
                    UPDATE profiles
                    SET full_name=%s, position=%s, department=%s, role=%s,
                        password_hash=%s, email_confirmed=1
                    WHERE email=%s
                    """,
                    (acc["full_name"], acc["position"], acc["department"], acc["role"], password_hash, acc["email"]),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO profiles(email, password_hash, full_name, position, department, role,
                                         days_of_work, date_hired, email_confirmed)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,CURDATE(),1)
                    """,
                    (
                        acc["email"],
                        password_hash,
                        acc["full_name"],
                        acc["position"],
                        acc["department"],
                        acc["role"],
                        json.dumps(["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]),
                    ),
                )
        conn.commit()
        logger.info("Demo accounts ready: %s", ", ".join(a["email"] for a in DEMO_ACCOUNTS))
    finally:
        conn.close()


def list_tables(config: DBConfig) -> list[str]:
    conn = _connect(config)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
