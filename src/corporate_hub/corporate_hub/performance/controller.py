from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, url_for

from ..access.guards import current_user, flash_system_error, login_required, role_required
from ..container import Container
from ..core.constants import MAX_SCORE, MIN_SCORE
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import SCORE_FIELDS


def register(app: Flask, container: Container) -> None:
    @app.route("/employee/performance", endpoint="employee_performance")
    @login_required
    def employee_performance():
        evaluations = container.performance_service.list_for_employee(current_user().id)
        return render_template(
            "employee/performance.html",
            evaluations=evaluations,
            score_fields=SCORE_FIELDS,
            active_page="performance",
        )

    @app.route("/hr/performance", methods=["GET", "POST"], endpoint="hr_performance")
    @role_required(Role.HR_ADMIN)
    def hr_performance():
        me = current_user()
        if request.method == "POST":
            try:
                container.performance_service.evaluate(
                    current_role=me.role,
                    evaluator_id=me.id,
                    employee_id=int(request.form.get("employee_id") or 0),
                    form=request.form,
                )
                flash("Evaluation saved.", "success")
                return redirect(url_for("hr_performance"))
            except (ValidationError, AuthorizationError) as e:
                flash(str(e), "danger")
            except Exception:
                flash_system_error("System error while saving the evaluation")

        search = request.args.get("q", "")
        return render_template(
            "hr/performance.html",
            evaluations=container.performance_service.list_for_hr(search=search),
            employees=container.profile_service.list_options(),
            score_fields=SCORE_FIELDS,
            score_range=range(MIN_SCORE, MAX_SCORE + 1),
            search=search,
            form=request.form,
            active_page="performance",
        )
