from __future__ import annotations

import calendar
import io

from flask import Flask, flash, redirect, render_template, request, send_file, url_for

from ..access.guards import current_user, flash_system_error, login_required, role_required
from ..common.datetime_utils import today
from ..container import Container
from ..core.enums import PaymentMethod, PaymentStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import DEDUCTION_FIELDS, INCOME_FIELDS
from .service import parse_amounts


def register(app: Flask, container: Container) -> None:
    def _period():
        now = today()
        try:
            month = int(request.args.get("month") or now.month)
            year = int(request.args.get("year") or now.year)
        except ValueError:
            return now.month, now.year
        if not 1 <= month <= 12:
            month = now.month
        return month, year

    def _form_context(record=None) -> dict:
        month, year = _period()
        return {
            "record": record,
            "employees": container.profile_service.list_options(),
            "income_fields": INCOME_FIELDS,
            "deduction_fields": DEDUCTION_FIELDS,
            "payment_statuses": list(PaymentStatus),
            "payment_methods": list(PaymentMethod),
            "month_names": list(calendar.month_name)[1:],
            "default_month": month,
            "default_year": year,
            "form": request.form,
            "active_page": "payroll",
        }

    def _save(record_id=None):
        totals = container.payroll_service.save(
            current_role=current_user().role,
            record_id=record_id,
            employee_id=int(request.form.get("employee_id") or 0),
            month=request.form.get("month", ""),
            year=request.form.get("year", ""),
            amounts=parse_amounts(request.form),
            payment_status=request.form.get("payment_status", PaymentStatus.PENDING.value),
            payment_method=request.form.get("payment_method", PaymentMethod.BANK_TRANSFER.value),
            payment_date=request.form.get("payment_date", ""),
            notes=request.form.get("notes", ""),
        )
        flash(f"Payroll saved. Net salary: {totals.net_salary:,.2f}", "success")
        return redirect(url_for("hr_payroll", month=request.form.get("month"), year=request.form.get("year")))

    @app.route("/employee/payroll", endpoint="employee_payroll")
    @login_required
    def employee_payroll():
        year = request.args.get("year", "all")
        try:
            payslips = container.payroll_service.employee_payslips(current_user().id, year=year)
        except ValidationError as e:
            flash(str(e), "warning")
            year = "all"
            payslips = container.payroll_service.employee_payslips(current_user().id)
        return render_template("employee/payroll.html", payslips=payslips, year=year, active_page="payroll")

    @app.route("/employee/payroll/<int:record_id>", endpoint="employee_payslip")
    @login_required
    def employee_payslip(record_id: int):
        try:
            record = container.payroll_service.own_payslip(employee_id=current_user().id, record_id=record_id)
        except NotFoundError as e:
            flash(str(e), "warning")
            return redirect(url_for("employee_payroll"))
        return render_template(
            "employee/payslip.html",
            record=record,
            income_fields=INCOME_FIELDS,
            deduction_fields=DEDUCTION_FIELDS,
            active_page="payroll",
        )

    @app.route("/hr/payroll", endpoint="hr_payroll")
    @role_required(Role.HR_ADMIN)
    def hr_payroll():
        month, year = _period()
        status = request.args.get("status", "all")
        search = request.args.get("q", "")
        try:
            view = container.payroll_service.month_view(month=month, year=year, payment_status=status, search=search)
        except ValidationError as e:
            flash(str(e), "warning")
            status = "all"
            view = container.payroll_service.month_view(month=month, year=year, search=search)
        return render_template(
            "hr/payroll.html",
            view=view,
            status=status,
            search=search,
            payment_statuses=list(PaymentStatus),
            month_names=list(calendar.month_name)[1:],
            active_page="payroll",
        )

    @app.route("/hr/payroll/new", methods=["GET", "POST"], endpoint="hr_payroll_new")
    @role_required(Role.HR_ADMIN)
    def hr_payroll_new():
        if request.method == "POST":
            try:
                return _save()
            except (ValidationError, AuthorizationError, NotFoundError) as e:
                flash(str(e), "danger")
            except Exception:
                flash_system_error("System error while saving payroll")
        return render_template("hr/payroll_form.html", **_form_context())

    @app.route("/hr/payroll/<int:record_id>/edit", methods=["GET", "POST"], endpoint="hr_payroll_edit")
    @role_required(Role.HR_ADMIN)
    def hr_payroll_edit(record_id: int):
        try:
            record = container.payroll_service.get(record_id)
        except NotFoundError as e:
            flash(str(e), "warning")
            return redirect(url_for("hr_payroll"))

        if request.method == "POST":
            try:
                return _save(record_id)
            except (ValidationError, AuthorizationError, NotFoundError) as e:
                flash(str(e), "danger")
            except Exception:
                flash_system_error("System error while saving payroll")
        return render_template("hr/payroll_form.html", **_form_context(record))

    @app.route("/hr/payroll/export", endpoint="hr_payroll_export")
    @role_required(Role.HR_ADMIN)
    def hr_payroll_export():
        month, year = _period()
        try:
            export = container.payroll_service.export_month(month=month, year=year)
        except Exception:
            flash_system_error("System error while exporting payroll")
            return redirect(url_for("hr_payroll", month=month, year=year))
        return send_file(
            io.BytesIO(export.content),
            mimetype=export.mimetype,
            as_attachment=True,
            download_name=export.filename,
        )
