from __future__ import annotations

import io

from flask import Flask, flash, redirect, render_template, request, send_file, url_for

from ..access.guards import current_user, flash_system_error, login_required, role_required
from ..common.datetime_utils import parse_optional_date, parse_optional_time, require_date, today
from ..container import Container
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .service import AUTO_STATUS, PUNCH_LABELS


def register(app: Flask, container: Container) -> None:
    def _selected_day():
        try:
            return parse_optional_date(request.values.get("date"), "Date") or today()
        except ValidationError as e:
            flash(str(e), "warning")
            return today()

    @app.route("/employee/attendance", endpoint="employee_attendance")
    @login_required
    def employee_attendance():
        me = current_user()
        search = request.args.get("q", "")
        history = container.attendance_service.employee_history(me.id, search=search)
        return render_template(
            "employee/attendance.html",
            history=history,
            today_record=container.attendance_service.today_record(me.id, today()),
            punch_labels=PUNCH_LABELS,
            search=search,
            active_page="attendance",
        )

    @app.route("/employee/attendance/punch", methods=["POST"], endpoint="employee_punch")
    @login_required
    def employee_punch():
        action = request.form.get("action", "")
        try:
            status = container.attendance_service.punch(current_user().id, action)
            flash(f"{PUNCH_LABELS.get(action, action)} recorded ({status.value}).", "success")
        except (ValidationError, NotFoundError) as e:
            flash(str(e), "warning")
        except Exception:
            flash_system_error("System error while recording attendance")
        return redirect(url_for("employee_attendance"))

    @app.route("/hr/attendance", endpoint="hr_attendance")
    @role_required(Role.HR_ADMIN)
    def hr_attendance():
        day = _selected_day()
        status = request.args.get("status", "all")
        search = request.args.get("q", "")
        try:
            view = container.attendance_service.day_view(day=day, status=status, search=search)
        except ValidationError as e:
            flash(str(e), "warning")
            view = container.attendance_service.day_view(day=day)
            status = "all"
        return render_template(
            "hr/attendance.html",
            view=view,
            status=status,
            search=search,
            statuses=list(AttendanceStatus),
            employees=container.profile_service.list_options(),
            auto_status=AUTO_STATUS,
            active_page="attendance",
        )

    @app.route("/hr/attendance/record", methods=["POST"], endpoint="hr_attendance_save")
    @role_required(Role.HR_ADMIN)
    def hr_attendance_save():
        day_text = request.form.get("date", "")
        try:
            day = require_date(day_text, "Date")
            status = container.attendance_service.record_for_employee(
                current_role=current_user().role,
                employee_id=int(request.form.get("employee_id") or 0),
                day=day,
                time_in=parse_optional_time(request.form.get("time_in"), "Time in"),
                lunch_out=parse_optional_time(request.form.get("lunch_out"), "Lunch out"),
                lunch_in=parse_optional_time(request.form.get("lunch_in"), "Lunch in"),
                time_out=parse_optional_time(request.form.get("time_out"), "Time out"),
                status=request.form.get("status", AUTO_STATUS),
                notes=request.form.get("notes", ""),
            )
            flash(f"Attendance saved ({status.value}).", "success")
            return redirect(url_for("hr_attendance", date=day.isoformat()))
        except (ValidationError, AuthorizationError, NotFoundError) as e:
            flash(str(e), "danger")
        except Exception:
            flash_system_error("System error while saving attendance")
        return redirect(url_for("hr_attendance", date=day_text or None))

    @app.route("/hr/attendance/export", endpoint="hr_attendance_export")
    @role_required(Role.HR_ADMIN)
    def hr_attendance_export():
        day = _selected_day()
        try:
            export = container.attendance_service.export_day(day=day, fmt=request.args.get("format", "csv"))
        except ValidationError as e:
            flash(str(e), "warning")
            return redirect(url_for("hr_attendance", date=day.isoformat()))
        except Exception:
            flash_system_error("System error while exporting attendance")
            return redirect(url_for("hr_attendance", date=day.isoformat()))

        return send_file(
            io.BytesIO(export.content),
            mimetype=export.mimetype,
            as_attachment=True,
            download_name=export.filename,
        )
