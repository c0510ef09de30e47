from __future__ import annotations

from dataclasses import dataclass

from .announcements.mysql_announcement_repository import MySQLAnnouncementRepository
from .announcements.service import AnnouncementService
from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_TOKEN_MAX_AGE_SECONDS, LATE_GRACE_MINUTES
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.service import LeaveService
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.service import PayrollService
from .performance.mysql_evaluation_repository import MySQLEvaluationRepository
from .performance.service import PerformanceService
from .profiles.mysql_profile_repository import MySQLProfileRepository
from .profiles.service import AuthService, ProfileService
from .profiles.tokens import LoggingMailer, Mailer, SignedLinks
from .requests.mysql_request_repository import MySQLScheduleChangeRepository, MySQLServiceRequestRepository
from .requests.service import RequestService, ScheduleRequestService
from .support.mysql_ticket_repository import MySQLTicketRepository
from .support.service import SupportService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    profiles_repo: MySQLProfileRepository

    auth_service: AuthService
    profile_service: ProfileService
    attendance_service: AttendanceService
    leave_service: LeaveService
    payroll_service: PayrollService
    performance_service: PerformanceService
    announcement_service: AnnouncementService
    request_service: RequestService
    schedule_request_service: ScheduleRequestService
    support_service: SupportService
    dashboard_service: DashboardService


def build_container(
    *,
    db_config: dict,
    secret_key: str,
    token_max_age_seconds: int = DEFAULT_TOKEN_MAX_AGE_SECONDS,
    mailer: Mailer | None = None,
    grace_minutes: int = LATE_GRACE_MINUTES,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    profiles_repo = MySQLProfileRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    leaves_repo = MySQLLeaveRepository(conn)
    payroll_repo = MySQLPayrollRepository(conn)
    evaluations_repo = MySQLEvaluationRepository(conn)
    announcements_repo = MySQLAnnouncementRepository(conn)
    requests_repo = MySQLServiceRequestRepository(conn)
    schedule_requests_repo = MySQLScheduleChangeRepository(conn)
    tickets_repo = MySQLTicketRepository(conn)

    auth_service = AuthService(
        profiles_repo,
        SignedLinks(secret_key, max_age_seconds=token_max_age_seconds),
        mailer or LoggingMailer(),
    )
    profile_service = ProfileService(profiles_repo)
    attendance_service = AttendanceService(
        attendance_repo,
        profiles_repo,
        strategy_factory=AttendanceStrategyFactory(),
        grace_minutes=grace_minutes,
    )
    leave_service = LeaveService(leaves_repo)
    payroll_service = PayrollService(payroll_repo, profiles_repo)
    performance_service = PerformanceService(evaluations_repo, profiles_repo)
    announcement_service = AnnouncementService(announcements_repo)
    request_service = RequestService(requests_repo)
    schedule_request_service = ScheduleRequestService(schedule_requests_repo, profiles_repo)
    support_service = SupportService(tickets_repo)
    dashboard_service = DashboardService(
        profiles_repo,
        attendance_service,
        leave_service,
        payroll_service,
        announcement_service,
    )

    return Container(
        conn=conn,
        profiles_repo=profiles_repo,
        auth_service=auth_service,
        profile_service=profile_service,
        attendance_service=attendance_service,
        leave_service=leave_service,
        payroll_service=payroll_service,
        performance_service=performance_service,
        announcement_service=announcement_service,
        request_service=request_service,
        schedule_request_service=schedule_request_service,
        support_service=support_service,
        dashboard_service=dashboard_service,
    )
