from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import TicketStatus


@dataclass(frozen=True)
class SupportTicket:
    id: int
    user_id: int
    subject: str
    message: str
    status: TicketStatus
    response: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    employee_name: Optional[str] = None
