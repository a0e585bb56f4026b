# src/messages/response.py - v1
"""Inbound shapes: the Messages API response body and its token usage."""

from __future__ import annotations

from typing import Literal

from pydantic import StrictInt, StrictStr

from claudia.messages.base import WireModel
from claudia.messages.models import Content

StopReason = Literal["end_turn", "max_tokens", "stop_sequence"]


class Usage(WireModel):
    """Billing token counts reported by the provider."""

    input_tokens: StrictInt
    output_tokens: StrictInt
    cache_creation_input_tokens: StrictInt | None = None
    cache_read_input_tokens: StrictInt | None = None

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


class MessageResponse(WireModel):
    """Body returned by POST /v1/messages (non-streaming)."""

    id: StrictStr
    type: Literal["message"] = "message"
    role: Literal["assistant"] = "assistant"
    content: tuple[Content, ...]
    model: StrictStr
    stop_reason: StopReason | None = None
    stop_sequence: StrictStr | None = None
    usage: Usage

    @property
    def text(self) -> str:
        """Concatenated text of all text blocks, in order."""
        return "".join(block.text or "" for block in self.content if block.is_text)
