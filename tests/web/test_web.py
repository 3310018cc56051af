from __future__ import annotations

import io
from datetime import datetime, timedelta

import pytest
from openpyxl import load_workbook

from fakes import BrokenRepo
from shift_attendance.attendance.model import AttendanceRecord
from shift_attendance.container import wire_container
from shift_attendance.core.enums import Role, Shift
from shift_attendance.main import create_app
from shift_attendance.users.session import SESSION_KEY


@pytest.fixture
def clock(fixed_now):
    state = {"now": fixed_now}

    def _now():
        return state["now"]

    _now.state = state
    return _now


@pytest.fixture
def app(users_repo, admins_repo, attendance_repo, shift_registry, clock):
    container = wire_container(
        users_repo=users_repo,
        admins_repo=admins_repo,
        attendance_repo=attendance_repo,
        shift_registry=shift_registry,
        clock=clock,
    )
    return create_app("shift_attendance.config.testing", container=container)


@pytest.fixture
def client(app):
    return app.test_client()


def _login(client, identifier, password, **kwargs):
    return client.post("/login", data={"identifier": identifier, "password": password}, **kwargs)


def _session_ctx(client):
    with client.session_transaction() as sess:
        return sess.get(SESSION_KEY)


def test_employee_login_goes_to_employee_page(client):
    resp = _login(client, "30111222", "secret1")

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/employee")
    assert _session_ctx(client)["role"] == Role.EMPLOYEE.value


def test_admin_login_goes_to_dashboard(client):
    resp = _login(client, "admin", "admin-pass")

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/admin")
    assert _session_ctx(client)["role"] == Role.ADMIN.value


@pytest.mark.parametrize(
    "identifier, password",
    [("30111222", "wrong"), ("99999999", "secret1"), ("admin", "secret1"), ("", "")],
)
def test_bad_credentials_show_generic_message(client, identifier, password):
    resp = _login(client, identifier, password)

    assert resp.status_code == 200
    assert b"Invalid credentials" in resp.data
    assert _session_ctx(client) is None


@pytest.mark.parametrize("path", ["/employee", "/admin", "/admin/export", "/admin/employees/new"])
def test_protected_pages_redirect_without_session(client, path):
    resp = client.get(path)

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/login")


def test_employee_cannot_open_admin_pages(client):
    _login(client, "30111222", "secret1")

    resp = client.get("/admin")

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/login")


def test_expired_session_redirects_to_login(client):
    _login(client, "30111222", "secret1")
    with client.session_transaction() as sess:
        stale = dict(sess[SESSION_KEY], issued_at=(datetime.now() - timedelta(hours=2)).timestamp())
        sess[SESSION_KEY] = stale

    resp = client.get("/employee")

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/login")
    assert _session_ctx(client) is None


def test_employee_page_shows_shift_choice(client):
    _login(client, "30111222", "secret1")

    resp = client.get("/employee")

    assert resp.status_code == 200
    assert b"Ana G" in resp.data
    assert b'name="shift" required' in resp.data


def test_single_shift_branch_gets_preset(client):
    _login(client, "28999000", "secret1")

    resp = client.get("/employee")

    assert b'type="hidden" name="shift" value="morning"' in resp.data


def test_successful_event_ends_session(client, attendance_repo, fixed_now):
    _login(client, "30111222", "secret1")

    resp = client.post("/employee/events", data={"event": "check_in", "shift": "morning"})

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/login")
    assert _session_ctx(client) is None
    rec = attendance_repo.get_for_user_and_date(Shift.MORNING, 1, fixed_now.date())
    assert rec.check_in_time == fixed_now


def test_rule_violation_keeps_session(client, attendance_repo, fixed_now):
    attendance_repo.save(
        AttendanceRecord(user_id=1, work_date=fixed_now.date(), shift=Shift.MORNING, check_in_time=fixed_now)
    )
    _login(client, "30111222", "secret1")

    resp = client.post("/employee/events", data={"event": "check_in", "shift": "morning"}, follow_redirects=True)

    assert resp.status_code == 200
    assert b"alert-warning" in resp.data
    assert _session_ctx(client) is not None
    assert attendance_repo.saves == 1


def test_late_checkin_is_rejected(client, clock, attendance_repo, fixed_now):
    clock.state["now"] = fixed_now.replace(hour=9, minute=1)
    _login(client, "28999000", "secret1")

    resp = client.post("/employee/events", data={"event": "check_in", "shift": "morning"})

    assert resp.headers["Location"].endswith("/employee")
    assert attendance_repo.saves == 0


def test_shift_outside_branch_is_refused(client, attendance_repo):
    _login(client, "28999000", "secret1")

    client.post("/employee/events", data={"event": "check_out", "shift": "afternoon"})

    assert attendance_repo.saves == 0
    assert _session_ctx(client) is not None


def test_dashboard_lists_every_employee(client, attendance_repo, fixed_now):
    attendance_repo.save(
        AttendanceRecord(user_id=1, work_date=fixed_now.date(), shift=Shift.MORNING, check_in_time=fixed_now)
    )
    _login(client, "admin", "admin-pass")

    resp = client.get("/admin", query_string={"date": fixed_now.date().isoformat()})

    assert resp.status_code == 200
    assert b"08:10" in resp.data
    assert b"Bruno D" in resp.data
    assert b"No attendance" in resp.data
    assert b"1 (50%)" in resp.data


def test_dashboard_rejects_reversed_range(client):
    _login(client, "admin", "admin-pass")

    resp = client.get("/admin", query_string={"start": "2026-02-05", "end": "2026-02-01"})

    assert resp.status_code == 200
    assert b"alert-warning" in resp.data


def test_export_without_records_flashes_notice(client):
    _login(client, "admin", "admin-pass")

    resp = client.get("/admin/export", query_string={"scope": "month", "date": "2026-02-02"}, follow_redirects=True)

    assert resp.status_code == 200
    assert b"no attendance records to export" in resp.data
    assert b"alert-info" in resp.data


def test_month_export_returns_workbook(client, attendance_repo, fixed_now):
    attendance_repo.save(
        AttendanceRecord(user_id=2, work_date=fixed_now.date(), shift=Shift.MORNING, check_in_time=fixed_now)
    )
    _login(client, "admin", "admin-pass")

    resp = client.get("/admin/export", query_string={"scope": "month", "date": "2026-02-02"})

    assert resp.status_code == 200
    assert "Attendance_All_2026-02.xlsx" in resp.headers["Content-Disposition"]
    ws = load_workbook(io.BytesIO(resp.data))["Attendance"]
    assert ws.max_row == 2
    assert ws.cell(row=2, column=1).value == "Bruno Díaz"
    assert ws.cell(row=2, column=2).value == 2


def test_individual_export_returns_zip(client, attendance_repo, fixed_now):
    for uid in (1, 2):
        attendance_repo.save(
            AttendanceRecord(user_id=uid, work_date=fixed_now.date(), shift=Shift.MORNING, check_in_time=fixed_now)
        )
    _login(client, "admin", "admin-pass")

    resp = client.get(
        "/admin/export",
        query_string={"scope": "range", "start": "2026-02-01", "end": "2026-02-02", "individual": "1"},
    )

    assert resp.status_code == 200
    assert resp.mimetype == "application/zip"
    assert "Attendance_2026-02-01_to_2026-02-02.zip" in resp.headers["Content-Disposition"]


def test_admin_adds_employee(client, users_repo):
    _login(client, "admin", "admin-pass")

    resp = client.post(
        "/admin/employees/new",
        data={"full_name": "Carla Ruiz", "dni": "40111222", "password": "secret9", "branch": "centro"},
    )

    assert resp.status_code == 302
    created = users_repo.get_by_dni("40111222")
    assert created.full_name == "Carla Ruiz"
    assert created.branch == "centro"

    client.get("/logout")
    assert _login(client, "40111222", "secret9").headers["Location"].endswith("/employee")


def test_add_employee_rejects_duplicate_dni(client):
    _login(client, "admin", "admin-pass")

    resp = client.post(
        "/admin/employees/new",
        data={"full_name": "Copy", "dni": "30111222", "password": "secret9"},
    )

    assert resp.status_code == 200
    assert b"already exists" in resp.data


def test_backend_failure_on_login_is_generic(admins_repo, shift_registry, clock):
    container = wire_container(
        users_repo=BrokenRepo(),
        admins_repo=admins_repo,
        attendance_repo=BrokenRepo(),
        shift_registry=shift_registry,
        clock=clock,
    )
    client = create_app("shift_attendance.config.testing", container=container).test_client()

    resp = _login(client, "30111222", "secret1")

    assert resp.status_code == 200
    assert b"Invalid credentials" in resp.data
