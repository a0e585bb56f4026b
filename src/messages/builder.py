# src/messages/builder.py - v1
"""Builder-style initializer for Request.

Turns are validated as they are added; the Request itself is validated
once, in build(), through its constructor.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from claudia.config.settings import Settings
from claudia.messages.models import (
    Content,
    Message,
    Metadata,
    Request,
    Roles,
    as_contents,
)

logger = logging.getLogger(__name__)


class RequestBuilder:
    """Fluent Request construction with defaults taken from Settings."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self._fields: dict[str, Any] = {}
        self._messages: list[Message] = []
        # Blocks of the user turn still being assembled (text + images).
        self._pending: list[Content] = []

    # --- Required fields ---

    def model(self, model: str) -> RequestBuilder:
        self._fields["model"] = model
        return self

    def max_tokens(self, max_tokens: int) -> RequestBuilder:
        self._fields["max_tokens"] = max_tokens
        return self

    # --- Turns ---

    def message(self, role: str, content: str | Content | Iterable[Any]) -> RequestBuilder:
        self._flush()
        self._messages.append(Message(role=role, content=as_contents(content)))
        return self

    def user(self, content: str | Content | Iterable[Any]) -> RequestBuilder:
        """Start a user turn; following image() calls attach to it."""
        self._flush()
        self._pending.extend(as_contents(content))
        return self

    def assistant(self, content: str | Content | Iterable[Any]) -> RequestBuilder:
        return self.message(Roles.ASSISTANT, content)

    def image(self, media_type: str, data: bytes | str) -> RequestBuilder:
        """Attach an image block to the current user turn, starting one if needed."""
        self._pending.append(Content.from_image(media_type, data))
        return self

    # --- Optional parameters ---

    def system(self, system: str) -> RequestBuilder:
        self._fields["system"] = system
        return self

    def user_id(self, user_id: str) -> RequestBuilder:
        self._fields["metadata"] = Metadata(user_id=user_id)
        return self

    def stop_sequences(self, *sequences: str) -> RequestBuilder:
        self._fields["stop_sequences"] = tuple(sequences)
        return self

    def stream(self, stream: bool = True) -> RequestBuilder:
        self._fields["stream"] = stream
        return self

    def temperature(self, temperature: float) -> RequestBuilder:
        self._fields["temperature"] = temperature
        return self

    def top_p(self, top_p: float) -> RequestBuilder:
        self._fields["top_p"] = top_p
        return self

    def top_k(self, top_k: int) -> RequestBuilder:
        self._fields["top_k"] = top_k
        return self

    # --- Build ---

    def build(self) -> Request:
        """Construct the Request.

        Raises:
            MissingRequiredField: If model or max_tokens is neither set nor
                configured as a default.
            TypeMismatch: If a field has the wrong type.
        """
        self._flush()
        request = build_request(
            self._settings, **self._fields, messages=tuple(self._messages)
        )
        logger.debug(
            "Built request: model=%s, messages=%d", request.model, len(request.messages)
        )
        return request

    def _flush(self) -> None:
        if self._pending:
            self._messages.append(Message(role=Roles.USER, content=tuple(self._pending)))
            self._pending = []


def build_request(settings: Settings | None = None, **fields: Any) -> Request:
    """One-shot keyword construction, applying Settings defaults."""
    if settings is not None:
        if settings.default_model:
            fields.setdefault("model", settings.default_model)
        fields.setdefault("max_tokens", settings.default_max_tokens)
    return Request(**fields)
