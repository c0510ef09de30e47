from __future__ import annotations

from datetime import time, timedelta
from decimal import Decimal

import pytest

from src.corporate_hub.corporate_hub.database.mysql_base import like_pattern, scalar, to_decimal, to_time


class FakeCursor:
    def __init__(self, row):
        self._row = row
        self.executed = []

    def execute(self, sql, params=()):
        self.executed.append((sql, params))

    def fetchone(self):
        return self._row


def test_scalar_reads_first_column_of_dict_row():
    cur = FakeCursor({"n": 7})

    assert scalar(cur, "SELECT COUNT(*) AS n FROM profiles WHERE role=%s", ["employee"]) == 7
    assert cur.executed == [("SELECT COUNT(*) AS n FROM profiles WHERE role=%s", ("employee",))]


def test_scalar_returns_none_without_row():
    assert scalar(FakeCursor(None), "SELECT 1") is None


def test_to_time_accepts_timedelta_time_and_text():
    assert to_time(timedelta(hours=9, minutes=30)) == time(9, 30)
    assert to_time(timedelta(hours=25)) == time(1, 0)
    assert to_time(time(18, 0)) == time(18, 0)
    assert to_time("08:15") == time(8, 15)
    assert to_time("22:00:05") == time(22, 0, 5)
    assert to_time(None) is None


def test_to_time_rejects_garbage():
    with pytest.raises(ValueError):
        to_time("9")
    with pytest.raises(TypeError):
        to_time(930)


def test_like_pattern_escapes_wildcards():
    assert like_pattern("50%_off") == "%50\\%\\_off%"


def test_to_decimal_defaults_to_zero():
    assert to_decimal(None) == Decimal("0")
    assert to_decimal(12.5) == Decimal("12.5")
