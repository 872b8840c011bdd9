"""Habit routes."""

from __future__ import annotations

from datetime import datetime

from flask import jsonify
from pydantic import ValidationError

from ...errors import NotFoundError
from ...models.habit import Habit
from ..common import current_user_id, get_context, json_body, reference_day, validation_errors
from . import bp
from .forms import HabitForm, HabitUpdateForm


@bp.get("/")
def today():
    """Habits due on the requested day, grouped by time of day."""

    board = get_context().habit_service.today_board(current_user_id(), reference_day())
    return jsonify(board.to_dict())


@bp.get("/all")
def list_habits():
    """Every non-deleted habit of the user, newest first."""

    habits = get_context().habit_repo.list_all(user_id=current_user_id())
    return jsonify({"habits": [habit.to_dict() for habit in habits]})


@bp.post("/")
def create_habit():
    user_id = current_user_id()
    try:
        form = HabitForm.model_validate(json_body())
    except ValidationError as exc:
        return jsonify({"errors": validation_errors(exc)}), 400

    habit = Habit(
        user_id=user_id,
        title=form.title,
        recurrence=form.recurrence,
        weekdays=form.weekdays,
        time_of_day=form.time_of_day,
    )
    created = get_context().habit_repo.create(habit, user_id=user_id)
    return jsonify(created.to_dict()), 201


@bp.patch("/<int:habit_id>")
def update_habit(habit_id: int):
    user_id = current_user_id()
    try:
        form = HabitUpdateForm.model_validate(json_body())
    except ValidationError as exc:
        return jsonify({"errors": validation_errors(exc)}), 400

    habit = get_context().habit_repo.update_fields(habit_id, form.changes(), user_id=user_id)
    if habit is None:
        raise NotFoundError("Habit", habit_id)
    return jsonify(habit.to_dict())


@bp.post("/<int:habit_id>/toggle")
def toggle_habit(habit_id: int):
    """Complete a Todo habit (updating its streak) or reopen a Done one."""

    habit = get_context().habit_service.toggle(habit_id, current_user_id(), datetime.now())
    return jsonify(habit.to_dict())


@bp.delete("/<int:habit_id>")
def delete_habit(habit_id: int):
    if not get_context().habit_repo.soft_delete(habit_id, user_id=current_user_id()):
        raise NotFoundError("Habit", habit_id)
    return "", 204
