"""Todo routes."""

from __future__ import annotations

import logging

from flask import jsonify
from pydantic import ValidationError

from ...errors import NotFoundError
from ...models.habit import HabitStatus
from ...models.todo import Todo
from ..common import current_user_id, get_context, json_body, validation_errors
from . import bp
from .forms import TodoForm, TodoUpdateForm

logger = logging.getLogger("habitflow.blueprints.todos")


@bp.get("/")
def list_todos():
    todos = get_context().todo_repo.list_all(user_id=current_user_id())
    return jsonify({"todos": [todo.to_dict() for todo in todos]})


@bp.post("/")
def create_todo():
    user_id = current_user_id()
    try:
        form = TodoForm.model_validate(json_body())
    except ValidationError as exc:
        return jsonify({"errors": validation_errors(exc)}), 400

    todo = Todo(user_id=user_id, **form.to_columns())
    created = get_context().todo_repo.create(todo, user_id=user_id)
    return jsonify(created.to_dict()), 201


@bp.patch("/<int:todo_id>")
def update_todo(todo_id: int):
    user_id = current_user_id()
    try:
        form = TodoUpdateForm.model_validate(json_body())
    except ValidationError as exc:
        return jsonify({"errors": validation_errors(exc)}), 400

    todo = get_context().todo_repo.update_fields(todo_id, form.changes(), user_id=user_id)
    if todo is None:
        raise NotFoundError("Todo", todo_id)
    return jsonify(todo.to_dict())


@bp.post("/<int:todo_id>/toggle")
def toggle_todo(todo_id: int):
    user_id = current_user_id()
    repo = get_context().todo_repo
    todo = repo.get_by_id(todo_id, user_id=user_id)
    if todo is None:
        raise NotFoundError("Todo", todo_id)

    new_status = HabitStatus.TODO if todo.status == HabitStatus.DONE else HabitStatus.DONE
    updated = repo.update_fields(todo_id, {"status": new_status}, user_id=user_id)
    if updated is None:
        raise NotFoundError("Todo", todo_id)
    logger.info("Todo toggled", extra={"todo_id": todo_id, "status": new_status.value})
    return jsonify(updated.to_dict())


@bp.delete("/<int:todo_id>")
def delete_todo(todo_id: int):
    if not get_context().todo_repo.soft_delete(todo_id, user_id=current_user_id()):
        raise NotFoundError("Todo", todo_id)
    return "", 204
