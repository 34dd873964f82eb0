"""Login, signup and logout routes."""

from __future__ import annotations

from flask import flash, jsonify, redirect, render_template, request, session, url_for

from ...extensions import get_context
from ...logging_config import get_logger
from ...services import auth as auth_service
from ..common import SESSION_USER_KEY, prefers_json_response
from . import bp
from .forms import LoginForm, SignupForm

logger = get_logger(__name__)


def _safe_next(target: str | None) -> str:
    if target and target.startswith("/") and not target.startswith("//"):
        return target
    return url_for("dashboard.overview")


def _form_source():
    if request.is_json:
        return request.get_json(silent=True) or {}
    return request.form


def _sign_in(user) -> None:
    session.clear()
    session[SESSION_USER_KEY] = user.id


def _user_payload(user) -> dict:
    return {"id": user.id, "username": user.username}


def _form_error(template: str, message: str, status: int = 400):
    if prefers_json_response():
        return jsonify({"error": "validation_error", "message": message}), status
    flash(message, "error")
    return render_template(template), status


@bp.route("/login", methods=("GET", "POST"))
def login():
    if request.method == "GET":
        return render_template("auth/login.html")

    source = _form_source()
    form = LoginForm.from_payload(
        {"username": source.get("username") or "", "password": source.get("password") or ""}
    )
    errors = form.validation_errors()
    if errors:
        return _form_error("auth/login.html", LoginForm.first_error(errors))

    data = form.cleaned()
    user = auth_service.authenticate(
        username=data.username,
        password=data.password,
        session_factory=get_context().session_factory,
    )
    if user is None:
        return _form_error("auth/login.html", "Invalid username or password", status=401)

    _sign_in(user)
    logger.info("User logged in", extra={"user_id": user.id})
    if prefers_json_response():
        return jsonify({"user": _user_payload(user)})
    return redirect(_safe_next(request.args.get("next")))


@bp.route("/signup", methods=("GET", "POST"))
def signup():
    if request.method == "GET":
        return render_template("auth/signup.html")

    source = _form_source()
    form = SignupForm.from_payload(
        {
            "username": source.get("username") or "",
            "password": source.get("password") or "",
            "confirm_password": source.get("confirm_password") or "",
        }
    )
    errors = form.validation_errors()
    if errors:
        return _form_error("auth/signup.html", SignupForm.first_error(errors))

    data = form.cleaned()
    try:
        user = auth_service.create_user(
            username=data.username,
            password=data.password,
            session_factory=get_context().session_factory,
        )
    except ValueError as exc:
        return _form_error("auth/signup.html", str(exc), status=409)

    _sign_in(user)
    if prefers_json_response():
        return jsonify({"user": _user_payload(user)}), 201
    flash("Welcome to Wellnest!", "success")
    return redirect(url_for("habits.list_habits"))


@bp.get("/logout")
def logout():
    session.clear()
    if prefers_json_response():
        return jsonify({"status": "logged_out"})
    flash("You have been logged out.", "info")
    return redirect(url_for("auth.login"))
