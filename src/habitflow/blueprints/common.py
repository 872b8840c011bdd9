"""Request helpers shared by the JSON blueprints."""

from __future__ import annotations

from datetime import date

from flask import abort, current_app, request
from pydantic import ValidationError

from ..context import AppContext

USER_HEADER = "X-User-Id"


def get_context() -> AppContext:
    """Return the AppContext attached by the app factory."""

    return current_app.extensions["habitflow"]


def current_user_id() -> str:
    """Return the user id asserted by the upstream identity provider."""

    user_id = request.headers.get(USER_HEADER, "").strip()
    if not user_id:
        abort(401, description=f"Missing {USER_HEADER} header")
    return user_id


def reference_day() -> date:
    """Parse the optional ``date`` query parameter (YYYY-MM-DD)."""

    raw = request.args.get("date", "").strip()
    if not raw:
        return date.today()
    try:
        return date.fromisoformat(raw)
    except ValueError:
        abort(400, description="date must be formatted as YYYY-MM-DD")


def json_body() -> dict:
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        abort(400, description="Expected a JSON object body")
    return payload


def validation_errors(exc: ValidationError) -> dict[str, list[str]]:
    """Group pydantic errors by top-level field name."""

    structured: dict[str, list[str]] = {}
    for error in exc.errors(include_url=False):
        loc = error.get("loc", ())
        key = str(loc[0]) if loc else "__root__"
        structured.setdefault(key, []).append(error.get("msg", "Invalid value"))
    return structured
