from __future__ import annotations

import io
import logging
from datetime import date
from typing import Optional

from flask import Flask, flash, redirect, render_template, request, send_file, url_for

from ..common.datetime_utils import parse_iso_date
from ..core.constants import NOT_RECORDED
from ..core.enums import Role
from ..core.exceptions import BackendError, NothingToExportError, ValidationError
from ..container import Container
from ..users.session import session_required

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _today() -> date:
        return container.attendance_service.now().date()

    def _parse_date(value: Optional[str], default: date) -> date:
        if not value:
            return default
        try:
            return parse_iso_date(value)
        except ValueError:
            raise ValidationError(f"Invalid date: {value!r}")

    def _parse_employee(value: Optional[str]) -> Optional[int]:
        if not value or value == "all":
            return None
        try:
            return int(value)
        except ValueError:
            raise ValidationError("Invalid employee selection")

    def _period_label(start: date, end: date) -> str:
        if start == end:
            return start.isoformat()
        return f"{start.isoformat()}_to_{end.isoformat()}"

    @app.route("/admin", endpoint="admin_dashboard")
    @session_required(Role.ADMIN)
    def admin_dashboard(ctx):
        today = _today()
        view = {
            "ctx": ctx,
            "mode": "day",
            "rows": [],
            "employees": [],
            "stats": None,
            "selected_employee": None,
            "date": today.isoformat(),
            "start": today.isoformat(),
            "end": today.isoformat(),
            "not_recorded": NOT_RECORDED,
        }
        try:
            employee_id = _parse_employee(request.args.get("employee"))
            if request.args.get("start") or request.args.get("end"):
                start = _parse_date(request.args.get("start"), today)
                end = _parse_date(request.args.get("end"), start)
                result = container.aggregator.aggregate(start, end)
                view.update(mode="range", start=start.isoformat(), end=end.isoformat(), date=start.isoformat())
            else:
                day = _parse_date(request.args.get("date"), today)
                result = container.aggregator.aggregate_day(day)
                view.update(date=day.isoformat(), start=day.isoformat(), end=day.isoformat())
                view["stats"] = container.aggregator.stats(result.rows)

            rows = [r for r in result.rows if employee_id is None or r.user_id == employee_id]
            view.update(rows=rows, employees=result.employees, selected_employee=employee_id)
        except ValidationError as e:
            flash(str(e), "warning")
        except BackendError:
            logger.exception("could not load attendance records")
            flash("Could not load attendance records.", "danger")

        return render_template("admin/dashboard.html", **view)

    @app.route("/admin/export", endpoint="admin_export")
    @session_required(Role.ADMIN)
    def admin_export(ctx):
        scope = request.args.get("scope", "month")
        individual = request.args.get("individual") == "1"
        back = url_for(
            "admin_dashboard",
            **{k: v for k, v in request.args.items() if k in {"date", "start", "end", "employee"} and v},
        )

        try:
            today = _today()
            employee_id = _parse_employee(request.args.get("employee"))
            if scope == "range":
                start = _parse_date(request.args.get("start"), today)
                end = _parse_date(request.args.get("end"), start)
                result = container.aggregator.aggregate(start, end)
                label, by_day = _period_label(start, end), False
            elif scope == "month":
                day = _parse_date(request.args.get("date"), today)
                result = container.aggregator.aggregate_month(day)
                label, by_day = day.strftime("%Y-%m"), True
            else:
                raise ValidationError("Unknown export scope")

            exporter = container.exporter
            if individual and employee_id is None:
                artifacts = exporter.export_individually(result.rows, period_label=label, by_day=by_day)
                artifact = exporter.bundle(artifacts, filename=f"Attendance_{label}.zip")
            else:
                artifact = exporter.export(result.rows, period_label=label, employee_id=employee_id, by_day=by_day)
        except NothingToExportError as e:
            flash(str(e), "info")
            return redirect(back)
        except ValidationError as e:
            flash(str(e), "warning")
            return redirect(back)
        except BackendError:
            logger.exception("export failed")
            flash("Could not load attendance records for the export.", "danger")
            return redirect(back)

        return send_file(
            io.BytesIO(artifact.content),
            mimetype=artifact.mimetype,
            as_attachment=True,
            download_name=artifact.filename,
        )
