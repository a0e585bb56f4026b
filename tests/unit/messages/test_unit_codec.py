# tests/unit/messages/test_unit_codec.py - v1
"""Tests for messages/codec.py: wire mapping in both directions."""

from __future__ import annotations

import base64
import json
import logging

import pytest

from claudia.messages.codec import (
    available_kinds,
    deserialize,
    serialize,
    stringify,
    to_json,
)
from claudia.messages.errors import MalformedDocument, MissingRequiredField, TypeMismatch
from claudia.messages.models import Request
from claudia.messages.response import MessageResponse

HELLO_JSON = (
    '{"model":"claude-3","max_tokens":1024,"messages":'
    '[{"role":"user","content":[{"type":"text","text":"Hello"}]}]}'
)


class TestSerialize:
    def test_required_only_document(self, hello_request):
        assert to_json(hello_request) == HELLO_JSON

    def test_absent_optionals_omitted(self, hello_request):
        doc = serialize(hello_request)
        assert list(doc) == ["model", "max_tokens", "messages"]

    def test_all_keys_in_order(self, full_request):
        doc = serialize(full_request)
        assert list(doc) == [
            "model", "max_tokens", "messages", "system", "metadata",
            "stop_sequences", "stream", "temperature", "top_p", "top_k",
        ]
        assert doc["metadata"] == {"user_id": "8f14e45f-ceea-467a-9af0-2d7a3a5f1e3b"}
        assert doc["stop_sequences"] == ["\n\nHuman:", "END"]

    def test_false_stream_is_emitted(self, hello_request):
        r = hello_request.model_copy(update={"stream": False})
        assert serialize(r)["stream"] is False

    def test_image_block(self, image_content, png_bytes):
        doc = serialize(image_content)
        assert doc == {
            "type": "image",
            "source": {
                "type": "base64",
                "media_type": "image/png",
                "data": base64.b64encode(png_bytes).decode("ascii"),
            },
        }
        assert "text" not in doc

    def test_text_block_has_no_source(self, hello_request):
        block = serialize(hello_request)["messages"][0]["content"][0]
        assert block == {"type": "text", "text": "Hello"}

    def test_document_is_json_compatible(self, full_request):
        assert json.loads(json.dumps(serialize(full_request))) == serialize(full_request)

    def test_indent(self, hello_request):
        text = to_json(hello_request, indent=2)
        assert "\n" in text
        assert json.loads(text) == json.loads(HELLO_JSON)

    def test_debug_log(self, hello_request, caplog):
        caplog.set_level(logging.DEBUG, logger="claudia.messages.codec")
        serialize(hello_request)
        assert any("Serialized Request" in r.getMessage() for r in caplog.records)

    def test_to_json_debug_log(self, hello_request, caplog):
        caplog.set_level(logging.DEBUG, logger="claudia.messages.codec")
        to_json(hello_request)
        assert any("Serialized Request to JSON" in r.getMessage() for r in caplog.records)


class TestStringify:
    def test_same_document_as_json(self, full_request):
        assert stringify(full_request) == to_json(full_request)

    def test_debug_log(self, hello_request, caplog):
        caplog.set_level(logging.DEBUG, logger="claudia.messages.codec")
        stringify(hello_request)
        assert any("Stringified Request" in r.getMessage() for r in caplog.records)

    def test_str(self, hello_request):
        assert str(hello_request) == HELLO_JSON


class TestDeserialize:
    def test_round_trip_minimal(self, hello_request):
        assert deserialize(serialize(hello_request)) == hello_request

    def test_round_trip_full_from_text(self, full_request):
        restored = deserialize(to_json(full_request))
        assert restored == full_request
        assert restored.messages[0].content[0].source.data == (
            full_request.messages[0].content[0].source.data
        )

    def test_round_trip_response(self, sample_response):
        restored = deserialize(to_json(sample_response), kind="response")
        assert isinstance(restored, MessageResponse)
        assert restored == sample_response

    def test_bytes_input(self):
        assert isinstance(deserialize(HELLO_JSON.encode()), Request)

    def test_string_content_shorthand(self):
        r = deserialize(
            {"model": "m", "max_tokens": 5, "messages": [{"role": "user", "content": "Hi"}]}
        )
        assert r.messages[0].content[0].text == "Hi"

    def test_unknown_keys_ignored(self):
        doc = json.loads(HELLO_JSON)
        doc["tool_choice"] = {"type": "auto"}
        assert deserialize(doc) == deserialize(HELLO_JSON)

    def test_missing_field(self):
        with pytest.raises(MissingRequiredField) as exc_info:
            deserialize('{"max_tokens": 5, "messages": []}')
        assert exc_info.value.field == "model"

    def test_nested_missing_field(self):
        with pytest.raises(MissingRequiredField) as exc_info:
            deserialize('{"model": "m", "max_tokens": 5, "messages": [{"role": "user"}]}')
        assert exc_info.value.field == "messages.0.content"

    def test_type_mismatch(self):
        with pytest.raises(TypeMismatch):
            deserialize('{"model": "m", "max_tokens": 5, "messages": 42}')

    def test_invalid_json(self):
        with pytest.raises(MalformedDocument, match="invalid JSON"):
            deserialize("{not json")

    def test_non_object_json(self):
        with pytest.raises(MalformedDocument, match="expected a JSON object"):
            deserialize("[1, 2, 3]")

    def test_unknown_kind(self):
        with pytest.raises(ValueError, match="Unknown document kind"):
            deserialize(HELLO_JSON, kind="completion")

    def test_available_kinds(self):
        assert available_kinds() == ["request", "response"]


class TestModelHelpers:
    def test_from_json_invalid_text(self):
        with pytest.raises(MalformedDocument):
            Request.from_json("{oops")

    @pytest.mark.parametrize("text", ["[1, 2]", "42", "null"])
    def test_from_json_non_object(self, text):
        with pytest.raises(MalformedDocument, match="expected a JSON object"):
            Request.from_json(text)

    def test_from_wire_non_object(self):
        with pytest.raises(MalformedDocument, match="expected a JSON object, got list"):
            Request.from_wire([1, 2])

    def test_from_json_matches_deserialize(self):
        with pytest.raises(MalformedDocument) as direct:
            Request.from_json("[1, 2]")
        with pytest.raises(MalformedDocument) as via_codec:
            deserialize("[1, 2]")
        assert str(direct.value) == str(via_codec.value)

    def test_from_wire(self, hello_request):
        assert Request.from_wire(hello_request.to_wire()) == hello_request
