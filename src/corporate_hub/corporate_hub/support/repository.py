from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import TicketStatus
from .model import SupportTicket


class TicketRepository(Protocol):
    def create(self, *, user_id: int, subject: str, message: str) -> int:
        raise NotImplementedError

    def get_by_id(self, ticket_id: int) -> Optional[SupportTicket]:
        raise NotImplementedError

    def list_for_user(self, user_id: int, limit: int) -> Sequence[SupportTicket]:
        raise NotImplementedError

    def list_all(self, *, status: Optional[TicketStatus] = None, limit: int) -> Sequence[SupportTicket]:
        raise NotImplementedError

    def respond(self, *, ticket_id: int, response: Optional[str], status: TicketStatus) -> None:
        raise NotImplementedError
