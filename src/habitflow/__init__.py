"""HabitFlow application factory."""

from __future__ import annotations

import logging
from importlib import import_module
from typing import Iterable

from flask import Flask, jsonify
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from . import cli as _cli
from .config import BaseConfig, DevConfig, TestConfig
from .errors import HabitFlowError

logger = logging.getLogger("habitflow")

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestConfig,
    "default": BaseConfig,
}


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    """Yield blueprint import paths to register."""

    yield "habitflow.blueprints.habits"
    yield "habitflow.blueprints.todos"
    yield "habitflow.blueprints.analytics"
    yield "habitflow.blueprints.chat"


def create_app(config_name: str | None = None, *, config: BaseConfig | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__, instance_relative_config=True)
    config_obj = config or _resolve_config(config_name)()
    app.config.from_object(config_obj)
    app.config["HABITFLOW_CONFIG"] = config_obj

    # Imported lazily so model-only imports do not pull in the web stack.
    from .context import create_app_context
    from .logging_config import setup_logging

    if not getattr(config_obj, "TESTING", False):
        setup_logging(config_obj)

    ctx = create_app_context(config_obj)
    app.extensions["habitflow"] = ctx

    _register_blueprints(app)
    _register_error_handlers(app)
    _cli.init_app(app)

    if config_obj.SCHEDULER_ENABLED:
        from .scheduler import create_scheduler

        ctx.scheduler = create_scheduler(ctx, auto_start=True)

    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        app.register_blueprint(getattr(module, "bp"))


def _register_error_handlers(app: Flask) -> None:
    """Render errors as JSON bodies."""

    @app.errorhandler(HabitFlowError)
    def _handle_app_error(exc: HabitFlowError):
        if exc.status_code >= 500:
            logger.error("Request failed: %s", exc)
        return jsonify({"error": str(exc)}), exc.status_code

    @app.errorhandler(ValidationError)
    def _handle_validation_error(exc: ValidationError):
        from .blueprints.common import validation_errors

        return jsonify({"errors": validation_errors(exc)}), 400

    @app.errorhandler(HTTPException)
    def _handle_http_error(exc: HTTPException):
        return jsonify({"error": exc.description}), exc.code


__all__ = ["BaseConfig", "DevConfig", "TestConfig", "create_app"]
