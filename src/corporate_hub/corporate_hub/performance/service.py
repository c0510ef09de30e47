from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping, Optional, Sequence

from ..common.datetime_utils import parse_optional_date, require_date, today
from ..common.validators import optional_text, parse_int_in_range
from ..core.constants import DEFAULT_LIST_LIMIT, MAX_SCORE, MIN_SCORE
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..profiles.repository import ProfileRepository
from .model import SCORE_FIELDS, Evaluation, NewEvaluation
from .repository import EvaluationRepository

logger = logging.getLogger(__name__)


def overall_score(scores: Sequence[int]) -> Decimal:
    """Mean of the scores, rounded to 2 decimals."""
    if not scores:
        return Decimal("0.00")
    mean = Decimal(sum(scores)) / Decimal(len(scores))
    return mean.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class EmployeeEvaluations:
    rows: Sequence[Evaluation]
    average: Optional[Decimal] = None
    latest: Optional[Evaluation] = None


class PerformanceService:
    def __init__(self, evaluations: EvaluationRepository, profiles: ProfileRepository):
        self._evaluations = evaluations
        self._profiles = profiles

    def evaluate(self, *, current_role: Role, evaluator_id: int, employee_id: int, form: Mapping[str, str]) -> int:
        if current_role != Role.HR_ADMIN:
            raise AuthorizationError("You do not have permission to evaluate employees")
        if not employee_id or not self._profiles.get_by_id(int(employee_id)):
            raise ValidationError("Please select an employee")

        period_start = require_date(form.get("period_start"), "Period start")
        period_end = require_date(form.get("period_end"), "Period end")
        if period_end < period_start:
            raise ValidationError("Period end cannot be before period start")

        scores = {
            name: parse_int_in_range(form.get(name), name.replace("_", " ").capitalize(), MIN_SCORE, MAX_SCORE)
            for name in SCORE_FIELDS
        }

        evaluation = NewEvaluation(
            employee_id=int(employee_id),
            evaluator_id=int(evaluator_id),
            evaluation_date=parse_optional_date(form.get("evaluation_date"), "Evaluation date") or today(),
            period_start=period_start,
            period_end=period_end,
            overall_score=overall_score(list(scores.values())),
            strengths=optional_text(form.get("strengths")),
            areas_for_improvement=optional_text(form.get("areas_for_improvement")),
            goals=optional_text(form.get("goals")),
            comments=optional_text(form.get("comments")),
            **scores,
        )
        evaluation_id = self._evaluations.create(evaluation)
        logger.info(
            "Evaluation %s saved for employee %s (overall=%s)", evaluation_id, employee_id, evaluation.overall_score
        )
        return evaluation_id

    def list_for_hr(self, *, search: str = "", limit: int = DEFAULT_LIST_LIMIT) -> Sequence[Evaluation]:
        return self._evaluations.list_all(search=(search or "").strip(), limit=limit)

    def list_for_employee(self, employee_id: int) -> EmployeeEvaluations:
        rows = list(self._evaluations.list_for_employee(int(employee_id)))
        if not rows:
            return EmployeeEvaluations(rows=rows)
        total = sum((r.overall_score for r in rows), Decimal("0"))
        average = (total / len(rows)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        return EmployeeEvaluations(rows=rows, average=average, latest=rows[0])
