"""Productivity coaching through the DeepSeek chat-completions API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional

import requests

from ..config import BaseConfig
from ..errors import CoachError, CoachNotConfiguredError

logger = logging.getLogger("habitflow.services.coach")

SYSTEM_PROMPT = """You are a productivity assistant focused on helping users improve their time management, goal setting, habit formation, and overall productivity.

Your expertise includes:
- Time management techniques (Pomodoro, time blocking, etc.)
- Goal setting frameworks (SMART goals, OKRs, etc.)
- Habit formation strategies (atomic habits, habit stacking, etc.)
- Focus and concentration techniques
- Task prioritization methods (Eisenhower Matrix, etc.)
- Work-life balance strategies
- Digital productivity tools and workflows
- Stress management and burnout prevention

Keep your responses:
- Practical and actionable
- Concise but comprehensive
- Encouraging and motivating
- Based on proven productivity principles
- Tailored to the user's specific question
- Well-formatted using markdown (headers, lists, bold text)

If the user asks about topics outside of productivity, politely redirect them back to productivity-related topics."""

MAX_TOKENS = 1500
TEMPERATURE = 0.7


@dataclass
class CoachReply:
    """Assistant answer plus the upstream token usage block."""

    response: str
    usage: Optional[dict[str, Any]] = None


def build_messages(message: str, history: Iterable[dict[str, Any]] = ()) -> list[dict[str, str]]:
    """Translate the chat history into the chat-completions message list.

    History items carry ``sender`` (``user`` or ``bot``) and ``content``.
    """

    messages = [{"role": "system", "content": SYSTEM_PROMPT}]
    for item in history:
        role = "user" if item.get("sender") == "user" else "assistant"
        messages.append({"role": role, "content": str(item.get("content", ""))})
    messages.append({"role": "user", "content": message})
    return messages


class CoachClient:
    """Thin client over the DeepSeek chat endpoint."""

    def __init__(
        self,
        api_key: Optional[str],
        *,
        api_url: str = BaseConfig.DEEPSEEK_DEFAULT_URL,
        model: str = "deepseek-chat",
        timeout: int = 30,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.model = model
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config: BaseConfig) -> "CoachClient":
        return cls(
            config.DEEPSEEK_API_KEY,
            api_url=config.DEEPSEEK_API_URL,
            model=config.DEEPSEEK_MODEL,
            timeout=config.DEEPSEEK_TIMEOUT,
        )

    def ask(self, message: str, history: Iterable[dict[str, Any]] = ()) -> CoachReply:
        """Send ``message`` with prior ``history`` and return the assistant reply."""

        if not self.api_key:
            raise CoachNotConfiguredError()

        payload = {
            "model": self.model,
            "messages": build_messages(message, history),
            "max_tokens": MAX_TOKENS,
            "temperature": TEMPERATURE,
            "stream": False,
        }
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

        try:
            response = self.session.post(
                self.api_url, json=payload, headers=headers, timeout=self.timeout
            )
        except requests.exceptions.RequestException as exc:
            logger.error("DeepSeek request failed: %s", exc, exc_info=True)
            raise CoachError("Failed to get response from AI service", status_code=502) from exc

        if not response.ok:
            logger.error("DeepSeek API error %s: %s", response.status_code, response.text)
            raise CoachError("Failed to get response from AI service", status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as exc:
            raise CoachError("Invalid response from AI service") from exc

        choices = data.get("choices") if isinstance(data, dict) else None
        if not choices or not isinstance(choices[0], dict) or not choices[0].get("message"):
            logger.warning("Unexpected DeepSeek response format: %s", data)
            raise CoachError("Invalid response from AI service")

        return CoachReply(response=choices[0]["message"].get("content", ""), usage=data.get("usage"))


__all__ = ["CoachClient", "CoachReply", "SYSTEM_PROMPT", "build_messages"]
