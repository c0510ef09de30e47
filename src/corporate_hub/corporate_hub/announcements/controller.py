from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, url_for

from ..access.guards import current_user, flash_system_error, login_required, role_required
from ..common.datetime_utils import today
from ..container import Container
from ..core.enums import AnnouncementCategory, AnnouncementPriority, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/employee/announcements", endpoint="employee_announcements")
    @login_required
    def employee_announcements():
        category = request.args.get("category", "all")
        search = request.args.get("q", "")
        try:
            announcements = container.announcement_service.feed(category=category, search=search)
        except ValidationError as e:
            flash(str(e), "warning")
            category = "all"
            announcements = container.announcement_service.feed(search=search)
        return render_template(
            "employee/announcements.html",
            announcements=announcements,
            categories=list(AnnouncementCategory),
            category=category,
            search=search,
            active_page="announcements",
        )

    @app.route("/hr/announcements", methods=["GET", "POST"], endpoint="hr_announcements")
    @role_required(Role.HR_ADMIN)
    def hr_announcements():
        me = current_user()
        if request.method == "POST":
            try:
                container.announcement_service.publish(
                    current_role=me.role,
                    publisher_id=me.id,
                    title=request.form.get("title", ""),
                    content=request.form.get("content", ""),
                    category=request.form.get("category", ""),
                    priority=request.form.get("priority", ""),
                    expires_at=request.form.get("expires_at", ""),
                )
                flash("Announcement published.", "success")
                return redirect(url_for("hr_announcements"))
            except (ValidationError, AuthorizationError) as e:
                flash(str(e), "danger")
            except Exception:
                flash_system_error("System error while publishing the announcement")

        return render_template(
            "hr/announcements.html",
            announcements=container.announcement_service.list_for_hr(),
            categories=list(AnnouncementCategory),
            priorities=list(AnnouncementPriority),
            today=today(),
            form=request.form,
            active_page="announcements",
        )

    @app.route("/hr/announcements/<int:announcement_id>/toggle", methods=["POST"], endpoint="hr_announcement_toggle")
    @role_required(Role.HR_ADMIN)
    def hr_announcement_toggle(announcement_id: int):
        try:
            active = container.announcement_service.toggle_active(
                current_role=current_user().role, announcement_id=announcement_id
            )
            flash("Announcement activated." if active else "Announcement deactivated.", "success")
        except (AuthorizationError, NotFoundError) as e:
            flash(str(e), "danger")
        except Exception:
            flash_system_error("System error while updating the announcement")
        return redirect(url_for("hr_announcements"))

    @app.route("/hr/announcements/<int:announcement_id>/delete", methods=["POST"], endpoint="hr_announcement_delete")
    @role_required(Role.HR_ADMIN)
    def hr_announcement_delete(announcement_id: int):
        try:
            container.announcement_service.delete(current_role=current_user().role, announcement_id=announcement_id)
            flash("Announcement deleted.", "success")
        except (AuthorizationError, NotFoundError) as e:
            flash(str(e), "danger")
        except Exception:
            flash_system_error("System error while deleting the announcement")
        return redirect(url_for("hr_announcements"))
