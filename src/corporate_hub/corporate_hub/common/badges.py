"""Status -> (label, css class) lookups shared by list views."""

from __future__ import annotations

from enum import Enum

_CSS = {
    # attendance
    "present": "bg-success",
    "late": "bg-warning text-dark",
    "absent": "bg-danger",
    "half-day": "bg-info text-dark",
    # approvals / requests
    "pending": "bg-warning text-dark",
    "approved": "bg-success",
    "rejected": "bg-danger",
    "in_progress": "bg-primary",
    "completed": "bg-success",
    # tickets
    "open": "bg-primary",
    "resolved": "bg-success",
    "closed": "bg-secondary",
    # payroll
    "processed": "bg-info text-dark",
    "paid": "bg-success",
    # announcement priority
    "low": "bg-secondary",
    "normal": "bg-primary",
    "high": "bg-warning text-dark",
    "urgent": "bg-danger",
}


def _value(status) -> str:
    if isinstance(status, Enum):
        return str(status.value)
    return str(status or "")


def badge_label(status) -> str:
    v = _value(status)
    return v.replace("_", " ").replace("-", " ").title() if v else "-"


def badge_class(status) -> str:
    return _CSS.get(_value(status), "bg-secondary")


def rating_label(score: float) -> str:
    if score >= 4.5:
        return "Excellent"
    if score >= 3.5:
        return "Good"
    if score >= 2.5:
        return "Satisfactory"
    return "Needs Improvement"
