from __future__ import annotations

import logging
import sys
from functools import wraps
from typing import Callable, Optional

from flask import Flask, current_app, flash, g, redirect, render_template, request, session, url_for

from ..common.badges import badge_class, badge_label, rating_label
from ..common.datetime_utils import format_time
from ..core.enums import Role
from ..profiles.model import Profile

logger = logging.getLogger(__name__)

PUBLIC_PREFIX = "/auth"
VERIFY_PREFIX = "/auth/verify-email"


def landing_path(profile: Profile) -> str:
    return "/hr" if profile.role == Role.HR_ADMIN else "/employee"


def gate_redirect(path: str, profile: Optional[Profile]) -> Optional[str]:
    """Where a request for `path` must be sent instead, or None to let it through."""
    if profile is None:
        if path == "/" or path.startswith(PUBLIC_PREFIX):
            return None
        return "/auth/login"

    if path.startswith(PUBLIC_PREFIX) and not path.startswith(VERIFY_PREFIX):
        return landing_path(profile)
    if path.startswith("/hr") and profile.role != Role.HR_ADMIN:
        return "/employee"
    if path.startswith("/employee") and profile.role == Role.HR_ADMIN:
        return "/hr"
    return None


def install_access_gate(app: Flask, load_profile: Callable[[int], Optional[Profile]]) -> None:
    """Check the signed-in profile against the requested path before every view."""

    @app.before_request
    def _access_gate():
        if request.endpoint == "static":
            return None

        profile = None
        user_id = session.get("user_id")
        if user_id is not None:
            profile = load_profile(int(user_id))
            if profile is None:
                session.clear()
        g.current_user = profile

        target = gate_redirect(request.path, profile)
        if target and target != request.path:
            return redirect(target)
        return None

    @app.context_processor
    def _inject_helpers():
        return {
            "current_user": g.get("current_user"),
            "badge_class": badge_class,
            "badge_label": badge_label,
            "rating_label": rating_label,
            "fmt_time": format_time,
        }


def current_user() -> Profile:
    return g.current_user


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if g.get("current_user") is None:
            flash("Please sign in to continue.", "warning")
            return redirect(url_for("login"))
        return view(*args, **kwargs)

    return wrapper


def role_required(role: Role):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            profile = g.get("current_user")
            if profile is None:
                return redirect(url_for("login"))
            if profile.role != role:
                return render_template("403.html"), 403
            return view(*args, **kwargs)

        return wrapper

    return decorator


def flash_system_error(message: str) -> None:
    """Log the active exception and show a generic message (details only in DEBUG)."""
    logger.exception(message)
    if bool(current_app.config.get("DEBUG", False)):
        flash(f"{message}: {sys.exc_info()[1]}", "danger")
    else:
        flash(message, "danger")
