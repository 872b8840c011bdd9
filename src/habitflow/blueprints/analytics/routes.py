"""Analytics routes."""

from __future__ import annotations

from flask import jsonify

from ...services.reports import summarize
from ..common import current_user_id, get_context, reference_day
from . import bp


@bp.get("/")
def overview():
    """Headline numbers and distributions for the analytics charts."""

    ctx = get_context()
    user_id = current_user_id()
    summary = summarize(
        ctx.todo_repo.list_all(user_id=user_id),
        ctx.habit_repo.list_all(user_id=user_id),
        reference_day(),
    )
    return jsonify(summary)
