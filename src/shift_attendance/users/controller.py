from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, BackendError, ValidationError
from ..container import Container
from .session import end_session, home_endpoint, load_context, session_required, start_session

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/", endpoint="index")
    def index():
        ctx = load_context()
        if ctx is not None:
            return redirect(url_for(home_endpoint(ctx)))
        return render_template("index.html")

    @app.route("/login", methods=["GET", "POST"], endpoint="login")
    def login():
        ctx = load_context()
        if ctx is not None:
            return redirect(url_for(home_endpoint(ctx)))

        if request.method == "POST":
            identifier = request.form.get("identifier", "")
            password = request.form.get("password", "")
            try:
                user = container.auth_service.authenticate(identifier, password)
            except AuthenticationError as e:
                flash(str(e), "danger")
            else:
                ctx = start_session(user)
                return redirect(url_for(home_endpoint(ctx)))

        return render_template("login.html")

    @app.route("/logout", endpoint="logout")
    def logout():
        end_session()
        flash("You have been signed out.", "info")
        return redirect(url_for("login"))

    @app.route("/admin/employees/new", methods=["GET", "POST"], endpoint="add_employee")
    @session_required(Role.ADMIN)
    def add_employee(ctx):
        if request.method == "POST":
            try:
                container.user_service.create_employee(
                    current_role=ctx.role,
                    full_name=request.form.get("full_name", ""),
                    dni=request.form.get("dni", ""),
                    password=request.form.get("password", ""),
                    branch=request.form.get("branch", ""),
                )
                flash("Employee added.", "success")
                return redirect(url_for("admin_dashboard"))
            except (ValidationError, AuthorizationError) as e:
                flash(str(e), "danger")
            except BackendError:
                logger.exception("could not create employee")
                flash("Could not save the employee. Please try again.", "danger")

        branches = sorted(container.shift_registry.branch_shifts)
        return render_template("admin/add_employee.html", ctx=ctx, branches=branches, form=request.form)
