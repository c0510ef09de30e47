from src.corporate_hub.corporate_hub.access.guards import gate_redirect
from src.corporate_hub.corporate_hub.core.enums import Role
from src.corporate_hub.corporate_hub.profiles.model import Profile


def _profile(role: Role) -> Profile:
    return Profile(
        id=1,
        email="a@example.com",
        password_hash="x",
        full_name="A",
        position="Designer",
        department="Design",
        role=role,
        email_confirmed=True,
    )


def test_anonymous_visitor_is_sent_to_login_except_public_paths():
    assert gate_redirect("/", None) is None
    assert gate_redirect("/auth/login", None) is None
    assert gate_redirect("/auth/reset-password/abc", None) is None
    assert gate_redirect("/employee", None) == "/auth/login"
    assert gate_redirect("/hr/payroll", None) == "/auth/login"


def test_signed_in_user_is_kept_out_of_auth_pages():
    assert gate_redirect("/auth/login", _profile(Role.EMPLOYEE)) == "/employee"
    assert gate_redirect("/auth/register", _profile(Role.HR_ADMIN)) == "/hr"


def test_email_verification_stays_reachable_when_signed_in():
    assert gate_redirect("/auth/verify-email/token", _profile(Role.EMPLOYEE)) is None


def test_portals_are_separated_by_role():
    assert gate_redirect("/hr/employees", _profile(Role.EMPLOYEE)) == "/employee"
    assert gate_redirect("/employee/leaves", _profile(Role.HR_ADMIN)) == "/hr"
    assert gate_redirect("/employee/leaves", _profile(Role.EMPLOYEE)) is None
    assert gate_redirect("/hr/employees", _profile(Role.HR_ADMIN)) is None
