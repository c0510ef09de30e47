from __future__ import annotations

from flask import Flask, abort, flash, redirect, render_template, request, url_for

from ..access.guards import current_user, flash_system_error, login_required, role_required
from ..container import Container
from ..core.enums import ApprovalStatus, Role, ServiceRequestStatus, ServiceRequestType
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import SCHEDULE_REQUEST_TYPES


def register(app: Flask, container: Container) -> None:
    @app.route("/employee/requests", methods=["GET", "POST"], endpoint="employee_requests")
    @login_required
    def employee_requests():
        me = current_user()
        if request.method == "POST":
            try:
                container.request_service.submit(
                    user_id=me.id,
                    request_type=request.form.get("request_type", ""),
                    subject=request.form.get("subject", ""),
                    description=request.form.get("description", ""),
                )
                flash("Request submitted.", "success")
                return redirect(url_for("employee_requests"))
            except ValidationError as e:
                flash(str(e), "danger")
            except Exception:
                flash_system_error("System error while submitting the request")

        return render_template(
            "employee/requests.html",
            requests=container.request_service.list_for_employee(me.id),
            request_types=list(ServiceRequestType),
            form=request.form,
            active_page="requests",
        )

    @app.route("/employee/schedule-requests", methods=["GET", "POST"], endpoint="employee_schedule_requests")
    @login_required
    def employee_schedule_requests():
        me = current_user()
        if request.method == "POST":
            try:
                container.schedule_request_service.submit(
                    employee_id=me.id,
                    request_type=request.form.get("request_type", ""),
                    current_schedule=request.form.get("current_schedule", ""),
                    requested_schedule=request.form.get("requested_schedule", ""),
                    reason=request.form.get("reason", ""),
                    request_date=request.form.get("request_date", ""),
                    notes=request.form.get("notes", ""),
                )
                flash("Schedule change request submitted.", "success")
                return redirect(url_for("employee_schedule_requests"))
            except (ValidationError, NotFoundError) as e:
                flash(str(e), "danger")
            except Exception:
                flash_system_error("System error while submitting the schedule change request")

        return render_template(
            "employee/schedule_requests.html",
            schedule_requests=container.schedule_request_service.list_for_employee(me.id),
            request_types=SCHEDULE_REQUEST_TYPES,
            form=request.form,
            active_page="schedule_requests",
        )

    @app.route("/hr/requests", endpoint="hr_requests")
    @role_required(Role.HR_ADMIN)
    def hr_requests():
        status = request.args.get("status", "all")
        try:
            requests = container.request_service.list_for_hr(status=status)
        except ValidationError as e:
            flash(str(e), "warning")
            status = "all"
            requests = container.request_service.list_for_hr()
        return render_template(
            "hr/requests.html",
            requests=requests,
            status=status,
            statuses=list(ServiceRequestStatus),
            active_page="requests",
        )

    @app.route("/hr/requests/<int:request_id>/status", methods=["POST"], endpoint="hr_request_status")
    @role_required(Role.HR_ADMIN)
    def hr_request_status(request_id: int):
        me = current_user()
        try:
            container.request_service.update_status(
                current_role=me.role,
                handler_id=me.id,
                request_id=request_id,
                status=request.form.get("status", ""),
                note=request.form.get("admin_note", ""),
            )
            flash("Request updated.", "success")
        except (ValidationError, AuthorizationError, NotFoundError) as e:
            flash(str(e), "danger")
        except Exception:
            flash_system_error("System error while updating the request")
        return redirect(url_for("hr_requests"))

    @app.route("/hr/schedule-requests", endpoint="hr_schedule_requests")
    @role_required(Role.HR_ADMIN)
    def hr_schedule_requests():
        status = request.args.get("status", ApprovalStatus.PENDING.value)
        search = request.args.get("q", "")
        try:
            schedule_requests = container.schedule_request_service.list_for_hr(status=status, search=search)
        except ValidationError as e:
            flash(str(e), "warning")
            status = "all"
            schedule_requests = container.schedule_request_service.list_for_hr(status=status, search=search)
        return render_template(
            "hr/schedule_requests.html",
            schedule_requests=schedule_requests,
            status=status,
            search=search,
            statuses=list(ApprovalStatus),
            active_page="schedule_requests",
        )

    @app.route(
        "/hr/schedule-requests/<int:request_id>/<action>",
        methods=["POST"],
        endpoint="hr_schedule_request_decide",
    )
    @role_required(Role.HR_ADMIN)
    def hr_schedule_request_decide(request_id: int, action: str):
        if action not in ("approve", "reject"):
            abort(404)
        me = current_user()
        try:
            status = container.schedule_request_service.decide(
                current_role=me.role,
                reviewer_id=me.id,
                request_id=request_id,
                approve=action == "approve",
                rejection_reason=request.form.get("rejection_reason", ""),
            )
            flash(f"Schedule change request {status.value}.", "success")
        except (ValidationError, AuthorizationError, NotFoundError) as e:
            flash(str(e), "danger")
        except Exception:
            flash_system_error("System error while reviewing the schedule change request")
        return redirect(url_for("hr_schedule_requests"))
