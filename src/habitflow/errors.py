"""Exception hierarchy for the service and HTTP layers."""

from __future__ import annotations


class HabitFlowError(Exception):
    """Base class for application errors."""

    status_code = 500


class NotFoundError(HabitFlowError):
    """A record does not exist, is deleted, or belongs to another user."""

    status_code = 404

    def __init__(self, kind: str, record_id: int) -> None:
        super().__init__(f"{kind} {record_id} not found")
        self.kind = kind
        self.record_id = record_id


class CoachError(HabitFlowError):
    """The upstream chat service failed or answered with an unusable payload."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        super().__init__(message)
        self.status_code = status_code


class CoachNotConfiguredError(CoachError):
    """No API key is configured for the chat service."""

    def __init__(self) -> None:
        super().__init__("DeepSeek API key not configured", status_code=500)


__all__ = ["CoachError", "CoachNotConfiguredError", "HabitFlowError", "NotFoundError"]
