from __future__ import annotations

import logging
from datetime import timedelta

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..access.guards import current_user, flash_system_error, login_required, role_required
from ..container import Container
from ..core.constants import DEPARTMENTS, POSITIONS, WEEKDAYS
from ..core.enums import EmploymentStatus, RateType, Role, ShiftType
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from .service import parse_profile_fields

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _form_choices() -> dict:
        return {
            "positions": POSITIONS,
            "departments": DEPARTMENTS,
            "weekdays": WEEKDAYS,
            "roles": list(Role),
            "employment_statuses": list(EmploymentStatus),
            "rate_types": list(RateType),
            "shift_types": list(ShiftType),
        }

    @app.route("/", endpoint="landing")
    def landing():
        return render_template("landing.html")

    @app.route("/auth/login", methods=["GET", "POST"], endpoint="login")
    def login():
        selected_role = request.values.get("role", Role.EMPLOYEE.value)

        if request.method == "POST":
            email = request.form.get("email", "")
            password = request.form.get("password", "")
            remember = request.form.get("remember_me")

            try:
                identity = container.auth_service.authenticate(email, password, selected_role)

                session.clear()
                session.permanent = bool(remember)
                app.permanent_session_lifetime = timedelta(days=int(app.config.get("SESSION_DAYS", 7)))

                session["user_id"] = identity.profile_id
                session["name"] = identity.full_name
                session["role"] = identity.role.value

                flash(f"Welcome back, {identity.full_name}!", "success")
                return redirect(identity.landing_path)
            except (AuthenticationError, ValidationError) as e:
                flash(str(e), "danger")
            except Exception:
                flash_system_error("System error while signing in")

        return render_template("auth/login.html", selected_role=selected_role, email=request.form.get("email", ""))

    @app.route("/auth/register", methods=["GET", "POST"], endpoint="register")
    def register_account():
        if request.method == "POST":
            try:
                container.auth_service.register(
                    email=request.form.get("email", ""),
                    password=request.form.get("password", ""),
                    confirm_password=request.form.get("confirm_password", ""),
                    full_name=request.form.get("full_name", ""),
                    position=request.form.get("position", ""),
                    department=request.form.get("department", ""),
                    phone=request.form.get("phone", ""),
                    role=request.form.get("role", Role.EMPLOYEE.value),
                )
                flash("Account created. Check your email to confirm it.", "success")
                return redirect(url_for("verify_email_notice"))
            except ValidationError as e:
                flash(str(e), "danger")
            except Exception:
                flash_system_error("System error while creating the account")

        return render_template("auth/register.html", form=request.form, **_form_choices())

    @app.route("/auth/verify-email", endpoint="verify_email_notice")
    def verify_email_notice():
        return render_template("auth/verify_email.html")

    @app.route("/auth/verify-email/<token>", endpoint="verify_email")
    def verify_email(token: str):
        try:
            container.auth_service.verify_email(token)
            flash("Email confirmed. You can sign in now.", "success")
            if current_user() is not None:
                return redirect(url_for("landing"))
            return redirect(url_for("login"))
        except AuthenticationError as e:
            flash(str(e), "danger")
        except Exception:
            flash_system_error("System error while confirming the email")
        return render_template("auth/verify_email.html")

    @app.route("/auth/reset-password", methods=["GET", "POST"], endpoint="forgot_password")
    def forgot_password():
        if request.method == "POST":
            try:
                container.auth_service.request_password_reset(request.form.get("email", ""))
                flash("If an account exists for that email, a reset link has been sent.", "info")
                return redirect(url_for("login"))
            except Exception:
                flash_system_error("System error while requesting a password reset")
        return render_template("auth/forgot_password.html")

    @app.route("/auth/reset-password/<token>", methods=["GET", "POST"], endpoint="reset_password")
    def reset_password(token: str):
        try:
            container.auth_service.check_reset_token(token)
        except AuthenticationError as e:
            flash(str(e), "danger")
            return redirect(url_for("forgot_password"))

        if request.method == "POST":
            try:
                container.auth_service.reset_password(
                    token,
                    request.form.get("password", ""),
                    request.form.get("confirm_password", ""),
                )
                flash("Password updated. You can sign in now.", "success")
                return redirect(url_for("login"))
            except (AuthenticationError, ValidationError) as e:
                flash(str(e), "danger")
            except Exception:
                flash_system_error("System error while resetting the password")

        return render_template("auth/reset_password.html", token=token)

    @app.route("/logout", methods=["GET", "POST"], endpoint="logout")
    def logout():
        logger.info("Signed out profile_id=%s", session.get("user_id"))
        session.clear()
        flash("You have been signed out.", "info")
        return redirect(url_for("login"))

    def _own_profile(template: str):
        me = current_user()
        if request.method == "POST":
            try:
                container.profile_service.update_own_profile(
                    profile_id=me.id,
                    full_name=request.form.get("full_name", ""),
                    phone=request.form.get("phone", ""),
                )
                session["name"] = request.form.get("full_name", "").strip()
                flash("Profile updated.", "success")
                return redirect(request.path)
            except (ValidationError, NotFoundError) as e:
                flash(str(e), "danger")
            except Exception:
                flash_system_error("System error while updating the profile")
        return render_template(template, profile=me)

    @app.route("/employee/profile", methods=["GET", "POST"], endpoint="employee_profile")
    @login_required
    def employee_profile():
        return _own_profile("employee/profile.html")

    @app.route("/hr/profile", methods=["GET", "POST"], endpoint="hr_profile")
    @role_required(Role.HR_ADMIN)
    def hr_profile():
        return _own_profile("hr/profile.html")

    @app.route("/hr/employees", endpoint="hr_employees")
    @role_required(Role.HR_ADMIN)
    def hr_employees():
        search = request.args.get("q", "")
        department = request.args.get("department", "")
        employees = container.profile_service.list_directory(search=search, department=department)
        return render_template(
            "hr/employees.html",
            employees=employees,
            departments=container.profile_service.list_departments(),
            search=search,
            department=department,
            active_page="employees",
        )

    @app.route("/hr/employees/new", methods=["GET", "POST"], endpoint="hr_employee_new")
    @role_required(Role.HR_ADMIN)
    def hr_employee_new():
        if request.method == "POST":
            try:
                fields = parse_profile_fields(request.form, days_of_work=request.form.getlist("days_of_work"))
                profile_id = container.profile_service.create_employee(
                    current_role=current_user().role,
                    email=request.form.get("email", ""),
                    password=request.form.get("password", ""),
                    fields=fields,
                )
                flash("Employee added.", "success")
                return redirect(url_for("hr_employee_view", profile_id=profile_id))
            except (ValidationError, AuthorizationError) as e:
                flash(str(e), "danger")
            except Exception:
                flash_system_error("System error while adding the employee")

        return render_template("hr/employee_form.html", employee=None, form=request.form, active_page="employees", **_form_choices())

    @app.route("/hr/employees/<int:profile_id>", endpoint="hr_employee_view")
    @role_required(Role.HR_ADMIN)
    def hr_employee_view(profile_id: int):
        try:
            employee = container.profile_service.get(profile_id)
        except NotFoundError as e:
            flash(str(e), "warning")
            return redirect(url_for("hr_employees"))
        return render_template("hr/employee_detail.html", employee=employee, active_page="employees")

    @app.route("/hr/employees/<int:profile_id>/edit", methods=["GET", "POST"], endpoint="hr_employee_edit")
    @role_required(Role.HR_ADMIN)
    def hr_employee_edit(profile_id: int):
        try:
            employee = container.profile_service.get(profile_id)
        except NotFoundError as e:
            flash(str(e), "warning")
            return redirect(url_for("hr_employees"))

        if request.method == "POST":
            try:
                fields = parse_profile_fields(request.form, days_of_work=request.form.getlist("days_of_work"))
                container.profile_service.update_employee(
                    current_role=current_user().role, profile_id=profile_id, fields=fields
                )
                flash("Employee updated.", "success")
                return redirect(url_for("hr_employee_view", profile_id=profile_id))
            except (ValidationError, AuthorizationError, NotFoundError) as e:
                flash(str(e), "danger")
            except Exception:
                flash_system_error("System error while updating the employee")

        return render_template(
            "hr/employee_form.html", employee=employee, form=request.form, active_page="employees", **_form_choices()
        )

    @app.route("/hr/employees/<int:profile_id>/delete", methods=["POST"], endpoint="hr_employee_delete")
    @role_required(Role.HR_ADMIN)
    def hr_employee_delete(profile_id: int):
        me = current_user()
        try:
            container.profile_service.delete_employee(
                current_role=me.role, current_profile_id=me.id, profile_id=profile_id
            )
            flash("Employee deleted.", "success")
        except (ValidationError, AuthorizationError, NotFoundError) as e:
            flash(str(e), "danger")
        except Exception:
            flash_system_error("System error while deleting the employee")
        return redirect(url_for("hr_employees"))
