from __future__ import annotations

import dataclasses
from typing import Optional

import pytest

from src.corporate_hub.corporate_hub.core.enums import Role, TicketStatus
from src.corporate_hub.corporate_hub.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.corporate_hub.corporate_hub.support.model import SupportTicket
from src.corporate_hub.corporate_hub.support.service import SupportService


class InMemoryTickets:
    def __init__(self):
        self.by_id: dict[int, SupportTicket] = {}

    def create(self, *, user_id: int, subject: str, message: str) -> int:
        ticket_id = len(self.by_id) + 1
        self.by_id[ticket_id] = SupportTicket(
            id=ticket_id, user_id=user_id, subject=subject, message=message, status=TicketStatus.OPEN
        )
        return ticket_id

    def get_by_id(self, ticket_id: int) -> Optional[SupportTicket]:
        return self.by_id.get(ticket_id)

    def list_for_user(self, user_id: int, limit: int):
        return [t for t in self.by_id.values() if t.user_id == user_id][:limit]

    def list_all(self, *, status=None, limit: int):
        rows = [t for t in self.by_id.values() if status is None or t.status == status]
        return sorted(rows, key=lambda t: t.id, reverse=True)[:limit]

    def respond(self, *, ticket_id: int, response, status: TicketStatus) -> None:
        self.by_id[ticket_id] = dataclasses.replace(self.by_id[ticket_id], response=response, status=status)


def test_open_ticket_starts_open():
    repo = InMemoryTickets()
    svc = SupportService(repo)

    ticket_id = svc.open_ticket(user_id=1, subject=" VPN ", message="Cannot connect")

    ticket = repo.get_by_id(ticket_id)
    assert ticket.subject == "VPN"
    assert ticket.status == TicketStatus.OPEN
    assert svc.list_for_employee(1) == [ticket]
    assert svc.list_for_employee(2) == []

    with pytest.raises(ValidationError, match="Message is required"):
        svc.open_ticket(user_id=1, subject="VPN", message="")


def test_hr_response_defaults_to_resolved():
    repo = InMemoryTickets()
    svc = SupportService(repo)
    ticket_id = svc.open_ticket(user_id=1, subject="VPN", message="Cannot connect")

    svc.respond(current_role=Role.HR_ADMIN, ticket_id=ticket_id, response="Reset your token", status="")

    ticket = repo.get_by_id(ticket_id)
    assert ticket.status == TicketStatus.RESOLVED
    assert ticket.response == "Reset your token"
    assert [t.id for t in svc.list_for_hr(status="resolved")] == [ticket_id]
    assert svc.list_for_hr(status="open") == []


def test_respond_requires_hr_and_existing_ticket():
    svc = SupportService(InMemoryTickets())

    with pytest.raises(AuthorizationError):
        svc.respond(current_role=Role.EMPLOYEE, ticket_id=1, response="x")
    with pytest.raises(NotFoundError):
        svc.respond(current_role=Role.HR_ADMIN, ticket_id=1, response="x")


def test_hr_status_filter_reaches_tickets_beyond_the_limit():
    svc = SupportService(InMemoryTickets())
    oldest = svc.open_ticket(user_id=1, subject="Payslip", message="Missing March")
    for n in range(3):
        newer = svc.open_ticket(user_id=2, subject=f"VPN {n}", message="Cannot connect")
        svc.respond(current_role=Role.HR_ADMIN, ticket_id=newer, response="Done")

    assert [t.id for t in svc.list_for_hr(status="open", limit=2)] == [oldest]
    assert len(svc.list_for_hr(limit=2)) == 2
