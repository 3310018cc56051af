from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..core.enums import AttendanceEvent, Role
from ..core.exceptions import BackendError, ValidationError
from ..container import Container
from ..users.session import end_session, session_required

logger = logging.getLogger(__name__)

EVENT_LABELS = {
    AttendanceEvent.CHECK_IN: "Check-in",
    AttendanceEvent.CHECK_OUT: "Check-out",
}


def register(app: Flask, container: Container) -> None:
    @app.route("/employee", endpoint="employee")
    @session_required(Role.EMPLOYEE)
    def employee(ctx):
        service = container.attendance_service
        status = {}
        try:
            status = service.today_status(ctx.user_id)
        except BackendError:
            logger.exception("could not load today's attendance user_id=%s", ctx.user_id)
            flash("Could not load today's attendance.", "danger")

        return render_template(
            "employee.html",
            ctx=ctx,
            now=service.now(),
            status=status,
            allowed_shifts=container.shift_registry.allowed_shifts(ctx.branch),
            preset_shift=container.shift_registry.preset_shift(ctx.branch),
            rules=container.shift_registry.rules,
        )

    @app.route("/employee/events", methods=["POST"], endpoint="record_event")
    @session_required(Role.EMPLOYEE)
    def record_event(ctx):
        event_s = request.form.get("event", "")
        try:
            record = container.attendance_service.record_event(
                user_id=ctx.user_id,
                branch=ctx.branch,
                shift=request.form.get("shift") or None,
                event=event_s,
            )
        except ValidationError as e:
            flash(str(e), "warning")
            return redirect(url_for("employee"))
        except BackendError:
            logger.exception("could not save attendance user_id=%s", ctx.user_id)
            flash("Could not save the event. Please try again.", "danger")
            return redirect(url_for("employee"))

        # One event per visit: the employee logs in again for the next one.
        end_session()
        label = EVENT_LABELS[AttendanceEvent(event_s)]
        flash(f"{label} recorded for the {record.shift.value} shift.", "success")
        return redirect(url_for("login"))
