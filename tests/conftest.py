# tests/conftest.py - v1
"""Shared test fixtures: sample requests, image bytes, isolated settings.

No network and no environment leakage: Settings are built with
_env_file=None and CLAUDIA_* variables are cleared.
"""

from __future__ import annotations

import logging
import os

import pytest

from claudia.config.settings import Settings
from claudia.logging.context import clear_context
from claudia.messages.models import Content, Message, Metadata, Request, Source
from claudia.messages.response import MessageResponse, Usage

# PNG signature followed by arbitrary payload bytes
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + bytes(range(32))


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Drop CLAUDIA_* variables; restore logging context and package logger."""
    for key in list(os.environ):
        if key.startswith("CLAUDIA_"):
            monkeypatch.delenv(key, raising=False)
    clear_context()
    root = logging.getLogger("claudia")
    level, handlers = root.level, list(root.handlers)
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    clear_context()


# === FIXTURES: Sample data ===


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture
def hello_request() -> Request:
    """Minimal request: required fields only."""
    return Request(
        model="claude-3",
        max_tokens=1024,
        messages=[{"role": "user", "content": "Hello"}],
    )


@pytest.fixture
def image_content(png_bytes: bytes) -> Content:
    return Content(
        type="image",
        source=Source(media_type="image/png", data=png_bytes),
    )


@pytest.fixture
def full_request(image_content: Content) -> Request:
    """Request with every optional field set and a multi-block turn."""
    return Request(
        model="claude-3-opus-20240229",
        max_tokens=256,
        messages=[
            Message(role="user", content=[image_content, "What is in this image?"]),
            Message(role="assistant", content="A single transparent pixel."),
            Message(role="user", content="Are you sure?"),
        ],
        system="You are a careful image describer.",
        metadata=Metadata(user_id="8f14e45f-ceea-467a-9af0-2d7a3a5f1e3b"),
        stop_sequences=["\n\nHuman:", "END"],
        stream=False,
        temperature=0.5,
        top_p=0.9,
        top_k=40,
    )


@pytest.fixture
def sample_response() -> MessageResponse:
    return MessageResponse(
        id="msg_013Zva2CMHLNnXjNJJKqJ2EF",
        content=[{"type": "text", "text": "Hi! "}, {"type": "text", "text": "How can I help?"}],
        model="claude-3-opus-20240229",
        stop_reason="end_turn",
        usage=Usage(input_tokens=10, output_tokens=12),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, default_model="claude-3-haiku-20240307")
