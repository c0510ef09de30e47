from __future__ import annotations

import dataclasses
from datetime import date
from decimal import Decimal

import pytest

from src.corporate_hub.corporate_hub.common.badges import rating_label
from src.corporate_hub.corporate_hub.core.enums import Role
from src.corporate_hub.corporate_hub.core.exceptions import AuthorizationError, ValidationError
from src.corporate_hub.corporate_hub.performance.model import Evaluation, NewEvaluation
from src.corporate_hub.corporate_hub.performance.service import PerformanceService, overall_score


class InMemoryProfiles:
    def __init__(self, *ids: int):
        self.ids = set(ids)

    def get_by_id(self, profile_id: int):
        return object() if profile_id in self.ids else None


class InMemoryEvaluations:
    def __init__(self):
        self.rows: list[Evaluation] = []

    def create(self, evaluation: NewEvaluation) -> int:
        evaluation_id = len(self.rows) + 1
        self.rows.append(
            Evaluation(id=evaluation_id, employee_name=f"Employee {evaluation.employee_id}", **dataclasses.asdict(evaluation))
        )
        return evaluation_id

    def list_all(self, *, search: str = "", limit: int):
        return [r for r in reversed(self.rows) if search.lower() in (r.employee_name or "").lower()][:limit]

    def list_for_employee(self, employee_id: int):
        return [r for r in reversed(self.rows) if r.employee_id == employee_id]


def _form(**overrides) -> dict:
    form = {
        "period_start": "2025-01-01",
        "period_end": "2025-03-31",
        "technical_skills": "5",
        "communication": "4",
        "teamwork": "4",
        "leadership": "3",
        "productivity": "5",
        "strengths": "Ships on time",
    }
    form.update(overrides)
    return form


def test_overall_score_is_rounded_mean():
    assert overall_score([5, 4, 4, 3, 5]) == Decimal("4.20")
    assert overall_score([5, 5, 4]) == Decimal("4.67")
    assert overall_score([]) == Decimal("0.00")


def test_rating_labels():
    assert rating_label(4.5) == "Excellent"
    assert rating_label(4.49) == "Good"
    assert rating_label(3.5) == "Good"
    assert rating_label(2.5) == "Satisfactory"
    assert rating_label(2.49) == "Needs Improvement"


def test_evaluate_stores_scores_and_overall():
    repo = InMemoryEvaluations()
    svc = PerformanceService(repo, InMemoryProfiles(1))

    svc.evaluate(current_role=Role.HR_ADMIN, evaluator_id=9, employee_id=1, form=_form(evaluation_date="2025-04-02"))

    saved = repo.rows[0]
    assert saved.overall_score == Decimal("4.20")
    assert saved.rating == "Good"
    assert saved.evaluator_id == 9
    assert saved.evaluation_date == date(2025, 4, 2)
    assert saved.scores()["leadership"] == 3
    assert saved.comments is None


def test_evaluate_validates_scores_period_and_employee():
    svc = PerformanceService(InMemoryEvaluations(), InMemoryProfiles(1))

    with pytest.raises(AuthorizationError):
        svc.evaluate(current_role=Role.EMPLOYEE, evaluator_id=1, employee_id=1, form=_form())
    with pytest.raises(ValidationError, match="select an employee"):
        svc.evaluate(current_role=Role.HR_ADMIN, evaluator_id=9, employee_id=2, form=_form())
    with pytest.raises(ValidationError, match="between 1 and 5"):
        svc.evaluate(current_role=Role.HR_ADMIN, evaluator_id=9, employee_id=1, form=_form(teamwork="6"))
    with pytest.raises(ValidationError, match="Period end cannot be before period start"):
        svc.evaluate(current_role=Role.HR_ADMIN, evaluator_id=9, employee_id=1, form=_form(period_end="2024-12-31"))


def test_employee_view_average_and_latest():
    repo = InMemoryEvaluations()
    svc = PerformanceService(repo, InMemoryProfiles(1, 2))
    svc.evaluate(current_role=Role.HR_ADMIN, evaluator_id=9, employee_id=1, form=_form())
    svc.evaluate(
        current_role=Role.HR_ADMIN,
        evaluator_id=9,
        employee_id=1,
        form=_form(technical_skills="3", communication="3", teamwork="3", leadership="3", productivity="3"),
    )
    svc.evaluate(current_role=Role.HR_ADMIN, evaluator_id=9, employee_id=2, form=_form())

    mine = svc.list_for_employee(1)
    assert len(mine.rows) == 2
    assert mine.average == Decimal("3.60")
    assert mine.latest.overall_score == Decimal("3.00")

    assert svc.list_for_employee(3).average is None
    assert [r.employee_id for r in svc.list_for_hr(search="employee 2")] == [2]
    assert [r.id for r in svc.list_for_hr(search="employee 1", limit=1)] == [2]
