# src/logging/context.py - v1
"""Contextual logging: attach request_id, model and CLI command to records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)
_model: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "model", default=None
)
_command: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "command", default=None
)


@dataclass(frozen=True)
class LogContext:
    """Snapshot of the current logging context."""

    request_id: str | None = None
    model: str | None = None
    command: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    return LogContext(
        request_id=_request_id.get(),
        model=_model.get(),
        command=_command.get(),
    )


def set_request_context(request_id: str, model: str | None = None) -> None:
    """Tag subsequent records with the request being handled."""
    _request_id.set(request_id)
    _model.set(model)


def set_command_context(command: str) -> None:
    _command.set(command)


def clear_context() -> None:
    _request_id.set(None)
    _model.set(None)
    _command.set(None)
