from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, url_for

from ..access.guards import current_user, flash_system_error, login_required, role_required
from ..container import Container
from ..core.enums import Role, TicketStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/employee/support", methods=["GET", "POST"], endpoint="employee_support")
    @login_required
    def employee_support():
        me = current_user()
        if request.method == "POST":
            try:
                container.support_service.open_ticket(
                    user_id=me.id,
                    subject=request.form.get("subject", ""),
                    message=request.form.get("message", ""),
                )
                flash("Ticket submitted. HR will get back to you.", "success")
                return redirect(url_for("employee_support"))
            except ValidationError as e:
                flash(str(e), "danger")
            except Exception:
                flash_system_error("System error while submitting the ticket")

        return render_template(
            "employee/support.html",
            tickets=container.support_service.list_for_employee(me.id),
            form=request.form,
            active_page="support",
        )

    @app.route("/hr/support", endpoint="hr_support")
    @role_required(Role.HR_ADMIN)
    def hr_support():
        status = request.args.get("status", "all")
        try:
            tickets = container.support_service.list_for_hr(status=status)
        except ValidationError as e:
            flash(str(e), "warning")
            status = "all"
            tickets = container.support_service.list_for_hr()
        return render_template(
            "hr/support.html",
            tickets=tickets,
            status=status,
            statuses=list(TicketStatus),
            active_page="support",
        )

    @app.route("/hr/support/<int:ticket_id>/respond", methods=["POST"], endpoint="hr_support_respond")
    @role_required(Role.HR_ADMIN)
    def hr_support_respond(ticket_id: int):
        try:
            container.support_service.respond(
                current_role=current_user().role,
                ticket_id=ticket_id,
                response=request.form.get("response", ""),
                status=request.form.get("status", TicketStatus.RESOLVED.value),
            )
            flash("Ticket updated.", "success")
        except (ValidationError, AuthorizationError, NotFoundError) as e:
            flash(str(e), "danger")
        except Exception:
            flash_system_error("System error while updating the ticket")
        return redirect(url_for("hr_support"))
