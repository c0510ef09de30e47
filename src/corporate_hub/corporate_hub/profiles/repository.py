from __future__ import annotations

from typing import Dict, Optional, Protocol, Sequence, Tuple

from .model import EmployeeOption, Profile, ProfileFields


class ProfileRepository(Protocol):
    """Repository interface for profiles.

    Note: services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, profile_id: int) -> Optional[Profile]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Profile]:
        raise NotImplementedError

    def create(self, *, email: str, password_hash: str, fields: ProfileFields, email_confirmed: bool) -> int:
        raise NotImplementedError

    def update_fields(self, profile_id: int, fields: ProfileFields) -> None:
        raise NotImplementedError

    def update_contact(self, profile_id: int, *, full_name: str, phone: Optional[str]) -> None:
        raise NotImplementedError

    def set_password_hash(self, profile_id: int, password_hash: str) -> bool:
        raise NotImplementedError

    def confirm_email(self, profile_id: int) -> None:
        raise NotImplementedError

    def delete_by_id(self, profile_id: int) -> bool:
        raise NotImplementedError

    def list_all(self, *, search: Optional[str] = None, department: Optional[str] = None) -> Sequence[Profile]:
        """Newest first."""

        raise NotImplementedError

    def list_departments(self) -> Sequence[str]:
        raise NotImplementedError

    def list_options(self) -> Sequence[EmployeeOption]:
        raise NotImplementedError

    def count_all(self) -> int:
        raise NotImplementedError

    def count_by_role(self) -> Dict[str, int]:
        raise NotImplementedError

    def count_by_department(self) -> Sequence[Tuple[str, int]]:
        """(department, headcount), largest first; blank departments count as "Unassigned"."""

        raise NotImplementedError
