from __future__ import annotations

from typing import Protocol, Sequence

from .model import Evaluation, NewEvaluation


class EvaluationRepository(Protocol):
    def create(self, evaluation: NewEvaluation) -> int:
        raise NotImplementedError

    def list_all(self, *, search: str = "", limit: int) -> Sequence[Evaluation]:
        """Joined with employee and evaluator names, newest evaluation first; `search` matches the employee name."""

        raise NotImplementedError

    def list_for_employee(self, employee_id: int) -> Sequence[Evaluation]:
        raise NotImplementedError
