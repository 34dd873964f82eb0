"""Wellnest application factory."""

from __future__ import annotations

from importlib import import_module
from typing import Iterable

from flask import Flask, flash, jsonify, redirect, request, url_for

from . import cli as _cli
from .config import BaseConfig, DevConfig, TestConfig
from .domain.errors import NotAuthenticatedError, WellnestError
from .logging_config import get_logger, setup_logging

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestConfig,
    "default": BaseConfig,
}

logger = get_logger(__name__)


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    """Yield blueprint import paths in registration order."""

    yield "wellnest.blueprints.auth"
    yield "wellnest.blueprints.dashboard"
    yield "wellnest.blueprints.habits"
    yield "wellnest.blueprints.tracker"
    yield "wellnest.blueprints.reflect"
    yield "wellnest.blueprints.insights"


def create_app(config_name: str | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__, instance_relative_config=True)
    config_cls = _resolve_config(config_name)
    config_obj = config_cls()
    app.config.from_object(config_obj)
    app.config["WELLNEST_CONFIG"] = config_obj

    setup_logging(config_obj)

    _register_blueprints(app)
    _register_error_handlers(app)

    # Imported here so models register with SQLModel metadata only once the
    # app is being built.
    from .extensions import init_db

    init_db(app)
    _cli.init_app(app)

    @app.get("/")
    def index():
        return redirect(url_for("dashboard.overview"))

    logger.info("Application created", extra={"config": config_cls.__name__})
    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        blueprint = getattr(module, "bp")
        app.register_blueprint(blueprint)


def _register_error_handlers(app: Flask) -> None:
    from .blueprints.common import error_payload, prefers_json_response

    @app.errorhandler(WellnestError)
    def _handle_app_error(exc: WellnestError):
        if exc.status_code >= 500:
            logger.error("Request failed: %s", exc, extra={"path": request.path, "code": exc.code})
        if prefers_json_response():
            return jsonify(error_payload(exc)), exc.status_code
        flash(str(exc), "error")
        if isinstance(exc, NotAuthenticatedError):
            return redirect(url_for("auth.login"))
        return redirect(request.referrer or url_for("dashboard.overview"))


__all__ = ["BaseConfig", "DevConfig", "TestConfig", "create_app"]
