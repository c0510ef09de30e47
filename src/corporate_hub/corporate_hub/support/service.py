from __future__ import annotations

import logging
from typing import Sequence

from ..common.validators import optional_text, parse_enum, require_non_empty
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import Role, TicketStatus
from ..core.exceptions import AuthorizationError, NotFoundError
from .model import SupportTicket
from .repository import TicketRepository

logger = logging.getLogger(__name__)


class SupportService:
    def __init__(self, tickets: TicketRepository):
        self._tickets = tickets

    def open_ticket(self, *, user_id: int, subject: str, message: str) -> int:
        ticket_id = self._tickets.create(
            user_id=int(user_id),
            subject=require_non_empty(subject, "Subject"),
            message=require_non_empty(message, "Message"),
        )
        logger.info("Support ticket %s opened by %s", ticket_id, user_id)
        return ticket_id

    def list_for_employee(self, user_id: int, *, limit: int = DEFAULT_LIST_LIMIT) -> Sequence[SupportTicket]:
        return self._tickets.list_for_user(int(user_id), limit)

    def list_for_hr(self, *, status: str = "all", limit: int = DEFAULT_LIST_LIMIT) -> Sequence[SupportTicket]:
        wanted = None
        if (status or "all") != "all":
            wanted = parse_enum(TicketStatus, status, "Status")
        return self._tickets.list_all(status=wanted, limit=limit)

    def respond(
        self,
        *,
        current_role: Role,
        ticket_id: int,
        response: str,
        status: str = TicketStatus.RESOLVED.value,
    ) -> None:
        if current_role != Role.HR_ADMIN:
            raise AuthorizationError("You do not have permission to respond to tickets")
        ticket = self._tickets.get_by_id(int(ticket_id))
        if not ticket:
            raise NotFoundError("Ticket not found")

        new_status = parse_enum(TicketStatus, status or TicketStatus.RESOLVED.value, "Status")
        self._tickets.respond(ticket_id=ticket.id, response=optional_text(response), status=new_status)
        logger.info("Support ticket %s -> %s", ticket.id, new_status.value)
