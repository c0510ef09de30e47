from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import parse_optional_date, parse_optional_time
from ..common.validators import (
    optional_text,
    parse_enum,
    parse_money,
    require_email,
    require_min_length,
    require_non_empty,
)
from ..core.constants import (
    DEFAULT_DAYS_OF_WORK,
    DEFAULT_TIME_IN,
    DEFAULT_TIME_OUT,
    MIN_PASSWORD_LENGTH,
    TOKEN_SALT_RESET,
    TOKEN_SALT_VERIFY,
    WEEKDAYS,
)
from ..core.enums import EmploymentStatus, RateType, Role, ShiftType
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from .model import EmployeeOption, Profile, ProfileFields
from .repository import ProfileRepository
from .tokens import Mailer, SignedLinks

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionIdentity:
    """What we store into the Flask session after login."""

    profile_id: int
    full_name: str
    email: str
    role: Role

    @property
    def landing_path(self) -> str:
        return "/hr" if self.role == Role.HR_ADMIN else "/employee"


def _check_new_password(password: str, confirm_password: str) -> str:
    if password != confirm_password:
        raise ValidationError("Passwords do not match")
    return require_min_length(password, "Password", MIN_PASSWORD_LENGTH)


def parse_profile_fields(form: Mapping[str, str], *, days_of_work: Sequence[str] = ()) -> ProfileFields:
    """Build ProfileFields from submitted form values."""
    time_in = parse_optional_time(form.get("time_in"), "Time in") or DEFAULT_TIME_IN
    time_out = parse_optional_time(form.get("time_out"), "Time out") or DEFAULT_TIME_OUT
    start_date = parse_optional_date(form.get("start_date"), "Start date")
    end_date = parse_optional_date(form.get("end_date"), "End date")
    if start_date and end_date and end_date < start_date:
        raise ValidationError("End date cannot be before start date")

    days = tuple(d for d in WEEKDAYS if d in set(days_of_work))
    salary_raw = (form.get("salary_rate") or "").strip()

    return ProfileFields(
        full_name=require_non_empty(form.get("full_name"), "Full name"),
        position=require_non_empty(form.get("position"), "Position"),
        department=require_non_empty(form.get("department"), "Department"),
        role=parse_enum(Role, form.get("role") or Role.EMPLOYEE.value, "Role"),
        phone=optional_text(form.get("phone")),
        employment_status=parse_enum(
            EmploymentStatus, form.get("employment_status") or EmploymentStatus.REGULAR.value, "Employment status"
        ),
        time_in=time_in,
        time_out=time_out,
        days_of_work=days,
        start_date=start_date,
        end_date=end_date,
        rate_type=parse_enum(RateType, form.get("rate_type") or RateType.MONTHLY.value, "Rate type"),
        salary_rate=parse_money(salary_raw, "Salary rate") if salary_raw else None,
        shift_type=parse_enum(ShiftType, form.get("shift_type") or ShiftType.DAY.value, "Shift type"),
        date_hired=parse_optional_date(form.get("date_hired"), "Date hired"),
        remarks=optional_text(form.get("remarks")),
    )


class AuthService:
    """Use cases: register, verify email, login, password reset."""

    def __init__(self, profiles: ProfileRepository, links: SignedLinks, mailer: Mailer):
        self._profiles = profiles
        self._links = links
        self._mailer = mailer

    def register(
        self,
        *,
        email: str,
        password: str,
        confirm_password: str,
        full_name: str,
        position: str,
        department: str,
        phone: str = "",
        role: str = Role.EMPLOYEE.value,
    ) -> int:
        _check_new_password(password, confirm_password)
        email = require_email(email)
        fields = ProfileFields(
            full_name=require_non_empty(full_name, "Full name"),
            position=require_non_empty(position, "Position"),
            department=require_non_empty(department, "Department"),
            role=parse_enum(Role, role, "Role"),
            phone=optional_text(phone),
            time_in=DEFAULT_TIME_IN,
            time_out=DEFAULT_TIME_OUT,
            days_of_work=DEFAULT_DAYS_OF_WORK,
        )

        if self._profiles.get_by_email(email):
            raise ValidationError("User already registered")

        profile_id = self._profiles.create(
            email=email,
            password_hash=generate_password_hash(password),
            fields=fields,
            email_confirmed=False,
        )
        self._send_verification(profile_id, email)
        logger.info("Registered profile %s (%s, role=%s)", profile_id, email, fields.role.value)
        return profile_id

    def _send_verification(self, profile_id: int, email: str) -> None:
        token = self._links.issue(profile_id, email, salt=TOKEN_SALT_VERIFY)
        self._mailer.send(
            to=email,
            subject="Confirm your CorporateHub account",
            body=f"Confirm your email: {self._mailer.link(f'/auth/verify-email/{token}')}",
        )

    def verify_email(self, token: str) -> Profile:
        data = self._links.read(token, salt=TOKEN_SALT_VERIFY)
        profile = self._profiles.get_by_id(int(data["id"]))
        if not profile or profile.email != data["email"]:
            raise AuthenticationError("This link is invalid.")
        if not profile.email_confirmed:
            self._profiles.confirm_email(profile.id)
            logger.info("Email confirmed for profile %s", profile.id)
        return profile

    def authenticate(self, email: str, password: str, selected_role: str) -> SessionIdentity:
        role = parse_enum(Role, selected_role, "Role")
        profile = self._profiles.get_by_email((email or "").strip().lower())
        if not profile:
            raise AuthenticationError("Invalid login credentials")

        try:
            ok = check_password_hash(profile.password_hash, password or "")
        except ValueError:
            # e.g. placeholder or corrupted hashes
            ok = False
        if not ok:
            raise AuthenticationError("Invalid login credentials")

        if not profile.email_confirmed:
            raise AuthenticationError("Email not confirmed")

        if profile.role != role:
            label = "HR Admin" if role == Role.HR_ADMIN else "Employee"
            raise AuthenticationError(f"Invalid credentials for {label} login")

        logger.info("Login ok for profile %s (%s)", profile.id, profile.role.value)
        return SessionIdentity(
            profile_id=profile.id,
            full_name=profile.full_name,
            email=profile.email,
            role=profile.role,
        )

    def request_password_reset(self, email: str) -> None:
        profile = self._profiles.get_by_email((email or "").strip().lower())
        if not profile:
            logger.info("Password reset requested for unknown email")
            return
        token = self._links.issue(profile.id, profile.email, salt=TOKEN_SALT_RESET)
        self._mailer.send(
            to=profile.email,
            subject="Reset your CorporateHub password",
            body=f"Choose a new password: {self._mailer.link(f'/auth/reset-password/{token}')}",
        )

    def check_reset_token(self, token: str) -> Profile:
        data = self._links.read(token, salt=TOKEN_SALT_RESET)
        profile = self._profiles.get_by_id(int(data["id"]))
        if not profile or profile.email != data["email"]:
            raise AuthenticationError("This link is invalid.")
        return profile

    def reset_password(self, token: str, password: str, confirm_password: str) -> None:
        profile = self.check_reset_token(token)
        _check_new_password(password, confirm_password)
        self._profiles.set_password_hash(profile.id, generate_password_hash(password))
        logger.info("Password reset for profile %s", profile.id)


class ProfileService:
    """Use cases: own profile, HR employee directory."""

    def __init__(self, profiles: ProfileRepository):
        self._profiles = profiles

    def get(self, profile_id: int) -> Profile:
        profile = self._profiles.get_by_id(int(profile_id))
        if not profile:
            raise NotFoundError("Employee not found")
        return profile

    def find(self, profile_id: int) -> Optional[Profile]:
        return self._profiles.get_by_id(int(profile_id))

    def update_own_profile(self, *, profile_id: int, full_name: str, phone: str) -> None:
        full_name = require_non_empty(full_name, "Full name")
        self.get(profile_id)
        self._profiles.update_contact(int(profile_id), full_name=full_name, phone=optional_text(phone))

    def create_employee(self, *, current_role: Role, email: str, password: str, fields: ProfileFields) -> int:
        if current_role != Role.HR_ADMIN:
            raise AuthorizationError("You do not have permission to add employees")

        email = require_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        if self._profiles.get_by_email(email):
            raise ValidationError("An account with this email already exists")

        profile_id = self._profiles.create(
            email=email,
            password_hash=generate_password_hash(password),
            fields=fields,
            email_confirmed=True,
        )
        logger.info("HR created profile %s (%s)", profile_id, email)
        return profile_id

    def update_employee(self, *, current_role: Role, profile_id: int, fields: ProfileFields) -> None:
        if current_role != Role.HR_ADMIN:
            raise AuthorizationError("You do not have permission to edit employees")
        self.get(profile_id)
        self._profiles.update_fields(int(profile_id), fields)
        logger.info("HR updated profile %s", profile_id)

    def delete_employee(self, *, current_role: Role, current_profile_id: int, profile_id: int) -> None:
        if current_role != Role.HR_ADMIN:
            raise AuthorizationError("You do not have permission to delete employees")
        if int(profile_id) == int(current_profile_id):
            raise ValidationError("You cannot delete your own account")
        self.get(profile_id)
        if not self._profiles.delete_by_id(int(profile_id)):
            raise ValidationError("Failed to delete employee")
        logger.info("HR deleted profile %s", profile_id)

    def list_directory(self, *, search: str = "", department: str = "") -> Sequence[Profile]:
        return self._profiles.list_all(
            search=(search or "").strip() or None,
            department=(department or "").strip() or None,
        )

    def list_departments(self) -> Sequence[str]:
        return self._profiles.list_departments()

    def list_options(self) -> Sequence[EmployeeOption]:
        return self._profiles.list_options()

    def count(self) -> int:
        return self._profiles.count_all()
