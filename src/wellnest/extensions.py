"""Database and extension wiring for Wellnest."""

from __future__ import annotations

from flask import Flask, current_app

from .config import BaseConfig
from .context import AppContext, create_app_context

EXTENSION_KEY = "wellnest"


def init_db(app: Flask) -> AppContext:
    """Build the application context from the app's config and attach it."""

    config: BaseConfig = app.config["WELLNEST_CONFIG"]
    ctx = create_app_context(config)
    # Sessions are opened per store call, so nothing is bound to the request.
    app.extensions[EXTENSION_KEY] = ctx
    return ctx


def get_context() -> AppContext:
    """Return the context attached to the current Flask app."""

    try:
        return current_app.extensions[EXTENSION_KEY]
    except KeyError as exc:  # pragma: no cover - exercised only on misconfiguration
        raise RuntimeError("Database engine not initialized") from exc
