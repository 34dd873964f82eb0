"""Request helpers shared by the blueprints."""

from __future__ import annotations

from functools import wraps
from typing import Any, Callable, Optional

from flask import current_app, redirect, request, session, url_for

from ..domain.errors import NotAuthenticatedError, WellnestError

SESSION_USER_KEY = "user_id"


def prefers_json_response() -> bool:
    accepts = request.accept_mimetypes
    return request.is_json or accepts["application/json"] > accepts["text/html"]


def current_user_id() -> Optional[int]:
    """Authenticated-user provider: the signed-in user's id, if any."""

    value = session.get(SESSION_USER_KEY)
    return int(value) if value is not None else None


def require_user_id() -> int:
    user_id = current_user_id()
    if user_id is None:
        raise NotAuthenticatedError("Please log in to continue.")
    return user_id


def login_required(view: Callable[..., Any]) -> Callable[..., Any]:
    """Redirect anonymous browsers to the login page; JSON callers get 401."""

    @wraps(view)
    def wrapped(*args: Any, **kwargs: Any):
        if current_user_id() is None:
            if prefers_json_response():
                raise NotAuthenticatedError("Please log in to continue.")
            return redirect(url_for("auth.login", next=request.full_path))
        return view(*args, **kwargs)

    return wrapped


def error_payload(exc: WellnestError) -> dict[str, Any]:
    """JSON body for an application error, including the auto-dismiss delay."""

    return {
        "error": exc.code,
        "message": str(exc),
        "dismiss_after": current_app.config.get("ERROR_DISMISS_SECONDS", 3),
    }
