from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..common.badges import rating_label

SCORE_FIELDS = ("technical_skills", "communication", "teamwork", "leadership", "productivity")


@dataclass(frozen=True)
class Evaluation:
    """Domain entity: one performance evaluation of an employee."""

    id: int
    employee_id: int
    evaluator_id: Optional[int]
    evaluation_date: date
    period_start: date
    period_end: date
    technical_skills: int
    communication: int
    teamwork: int
    leadership: int
    productivity: int
    overall_score: Decimal
    strengths: Optional[str] = None
    areas_for_improvement: Optional[str] = None
    goals: Optional[str] = None
    comments: Optional[str] = None
    created_at: Optional[datetime] = None
    employee_name: Optional[str] = None
    evaluator_name: Optional[str] = None

    @property
    def rating(self) -> str:
        return rating_label(float(self.overall_score))

    def scores(self) -> dict:
        return {name: getattr(self, name) for name in SCORE_FIELDS}


@dataclass(frozen=True)
class NewEvaluation:
    employee_id: int
    evaluator_id: int
    evaluation_date: date
    period_start: date
    period_end: date
    technical_skills: int
    communication: int
    teamwork: int
    leadership: int
    productivity: int
    overall_score: Decimal
    strengths: Optional[str] = None
    areas_for_improvement: Optional[str] = None
    goals: Optional[str] = None
    comments: Optional[str] = None
