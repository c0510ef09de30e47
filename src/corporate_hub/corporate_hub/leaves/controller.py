from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, url_for

from ..access.guards import current_user, flash_system_error, login_required, role_required
from ..container import Container
from ..core.enums import ApprovalStatus, LeaveType, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/employee/leaves", methods=["GET", "POST"], endpoint="employee_leaves")
    @login_required
    def employee_leaves():
        me = current_user()
        if request.method == "POST":
            try:
                container.leave_service.apply(
                    user_id=me.id,
                    leave_type=request.form.get("leave_type", ""),
                    start_date=request.form.get("start_date", ""),
                    end_date=request.form.get("end_date", ""),
                    reason=request.form.get("reason", ""),
                )
                flash("Leave application submitted.", "success")
                return redirect(url_for("employee_leaves"))
            except ValidationError as e:
                flash(str(e), "danger")
            except Exception:
                flash_system_error("System error while submitting the leave application")

        leaves = container.leave_service.list_for_employee(me.id)
        return render_template(
            "employee/leaves.html",
            leaves=leaves,
            leave_types=list(LeaveType),
            form=request.form,
            active_page="leaves",
        )

    @app.route("/hr/leaves", endpoint="hr_leaves")
    @role_required(Role.HR_ADMIN)
    def hr_leaves():
        status = request.args.get("status", ApprovalStatus.PENDING.value)
        leave_type = request.args.get("type", "all")
        search = request.args.get("q", "")
        try:
            leaves = container.leave_service.list_for_hr(status=status, leave_type=leave_type, search=search)
        except ValidationError as e:
            flash(str(e), "warning")
            status, leave_type = "all", "all"
            leaves = container.leave_service.list_for_hr(status=status, search=search)
        return render_template(
            "hr/leaves.html",
            leaves=leaves,
            status=status,
            leave_type=leave_type,
            search=search,
            statuses=list(ApprovalStatus),
            leave_types=list(LeaveType),
            active_page="leaves",
        )

    @app.route("/hr/leaves/<int:leave_id>/approve", methods=["POST"], endpoint="hr_leave_approve")
    @role_required(Role.HR_ADMIN)
    def hr_leave_approve(leave_id: int):
        me = current_user()
        try:
            container.leave_service.approve(current_role=me.role, approver_id=me.id, leave_id=leave_id)
            flash("Leave approved.", "success")
        except (ValidationError, AuthorizationError, NotFoundError) as e:
            flash(str(e), "danger")
        except Exception:
            flash_system_error("System error while approving the leave")
        return redirect(url_for("hr_leaves"))

    @app.route("/hr/leaves/<int:leave_id>/reject", methods=["POST"], endpoint="hr_leave_reject")
    @role_required(Role.HR_ADMIN)
    def hr_leave_reject(leave_id: int):
        me = current_user()
        try:
            container.leave_service.reject(
                current_role=me.role,
                approver_id=me.id,
                leave_id=leave_id,
                reason=request.form.get("rejection_reason", ""),
            )
            flash("Leave rejected.", "success")
        except (ValidationError, AuthorizationError, NotFoundError) as e:
            flash(str(e), "danger")
        except Exception:
            flash_system_error("System error while rejecting the leave")
        return redirect(url_for("hr_leaves"))
