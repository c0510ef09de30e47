from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, like_pattern, to_decimal
from .model import SCORE_FIELDS, Evaluation, NewEvaluation
from .repository import EvaluationRepository

_COLUMNS = """
    e.id, e.employee_id, e.evaluator_id, e.evaluation_date, e.period_start, e.period_end,
    e.technical_skills, e.communication, e.teamwork, e.leadership, e.productivity, e.overall_score,
    e.strengths, e.areas_for_improvement, e.goals, e.comments, e.created_at,
    emp.full_name AS employee_name, ev.full_name AS evaluator_name
"""

_FROM = """
    FROM performance_evaluations e
    JOIN profiles emp ON emp.id = e.employee_id
    LEFT JOIN profiles ev ON ev.id = e.evaluator_id
"""


def _row_to_evaluation(r: dict) -> Evaluation:
    return Evaluation(
        id=int(r["id"]),
        employee_id=int(r["employee_id"]),
        evaluator_id=r.get("evaluator_id"),
        evaluation_date=r["evaluation_date"],
        period_start=r["period_start"],
        period_end=r["period_end"],
        overall_score=to_decimal(r["overall_score"]),
        strengths=r.get("strengths"),
        areas_for_improvement=r.get("areas_for_improvement"),
        goals=r.get("goals"),
        comments=r.get("comments"),
        created_at=r.get("created_at"),
        employee_name=r.get("employee_name"),
        evaluator_name=r.get("evaluator_name"),
        **{name: int(r[name]) for name in SCORE_FIELDS},
    )


class MySQLEvaluationRepository(EvaluationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, evaluation: NewEvaluation) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO performance_evaluations(
                    employee_id, evaluator_id, evaluation_date, period_start, period_end,
                    technical_skills, communication, teamwork, leadership, productivity, overall_score,
                    strengths, areas_for_improvement, goals, comments)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    evaluation.employee_id,
                    evaluation.evaluator_id,
                    evaluation.evaluation_date,
                    evaluation.period_start,
                    evaluation.period_end,
                    evaluation.technical_skills,
                    evaluation.communication,
                    evaluation.teamwork,
                    evaluation.leadership,
                    evaluation.productivity,
                    evaluation.overall_score,
                    evaluation.strengths,
                    evaluation.areas_for_improvement,
                    evaluation.goals,
                    evaluation.comments,
                ),
            )
            return int(cur.lastrowid)

    def list_all(self, *, search: str = "", limit: int) -> Sequence[Evaluation]:
        sql = f"SELECT {_COLUMNS} {_FROM}"
        params: list = []
        if search:
            sql += " WHERE LOWER(emp.full_name) LIKE %s"
            params.append(like_pattern(search.strip().lower()))
        sql += " ORDER BY e.evaluation_date DESC, e.id DESC LIMIT %s"
        params.append(int(limit))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_evaluation(r) for r in fetchall(cur)]

    def list_for_employee(self, employee_id: int) -> Sequence[Evaluation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} {_FROM} WHERE e.employee_id=%s ORDER BY e.evaluation_date DESC, e.id DESC",
                (employee_id,),
            )
            return [_row_to_evaluation(r) for r in fetchall(cur)]
