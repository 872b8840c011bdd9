"""Chat proxy route."""

from __future__ import annotations

from flask import jsonify

from ..common import get_context, json_body
from . import bp


@bp.post("/chat")
def chat():
    """Forward a question plus prior conversation to the coaching model.

    Body: ``{"message": str, "conversationHistory": [{"sender", "content"}, ...]}``.
    """

    payload = json_body()
    message = str(payload.get("message") or "").strip()
    if not message:
        return jsonify({"error": "Message is required"}), 400

    history = payload.get("conversationHistory") or []
    if not isinstance(history, list):
        return jsonify({"error": "conversationHistory must be a list"}), 400

    reply = get_context().coach.ask(message, [item for item in history if isinstance(item, dict)])
    return jsonify({"response": reply.response, "usage": reply.usage})
