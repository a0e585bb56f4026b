# src/messages/codec.py - v1
"""Serialize / deserialize wire shapes to and from JSON documents.

serialize() emits exactly the keys of supplied fields, in declaration
order, and deserialize() is its inverse:

    deserialize(serialize(request)) == request
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from claudia.messages.base import WireModel
from claudia.messages.models import Request
from claudia.messages.response import MessageResponse

logger = logging.getLogger(__name__)

# Registry of document kind → wire model.
_KINDS: dict[str, type[WireModel]] = {
    "request": Request,
    "response": MessageResponse,
}


def available_kinds() -> list[str]:
    return sorted(_KINDS)


def serialize(model: WireModel) -> dict[str, Any]:
    """Map a wire model to a JSON-compatible dict, unset optionals omitted."""
    document = model.to_wire()
    logger.debug("Serialized %s: keys=%s", type(model).__name__, list(document))
    return document


def to_json(model: WireModel, indent: int | None = None) -> str:
    """Serialize straight to JSON text."""
    text = model.to_json(indent=indent)
    logger.debug("Serialized %s to JSON: %d chars", type(model).__name__, len(text))
    return text


def stringify(model: WireModel) -> str:
    """Diagnostic text form: the same document as to_json(), compact."""
    text = model.to_json()
    logger.debug("Stringified %s: %d chars", type(model).__name__, len(text))
    return text


def deserialize(
    document: str | bytes | Mapping[str, Any],
    kind: str = "request",
) -> WireModel:
    """Rebuild a wire model from JSON text or an already parsed mapping.

    Args:
        document: JSON text (str/bytes) or a mapping of wire keys.
        kind: Document kind ("request" or "response").

    Returns:
        The constructed, immutable model.

    Raises:
        ValueError: If kind is not registered.
        MalformedDocument: If the input is not a JSON object.
        MissingRequiredField, TypeMismatch: If a field fails validation.
    """
    if kind not in _KINDS:
        raise ValueError(
            f"Unknown document kind: {kind!r}. Available: {', '.join(available_kinds())}"
        )
    model_cls = _KINDS[kind]

    if isinstance(document, (str, bytes)):
        model = model_cls.from_json(document)
    else:
        model = model_cls.from_wire(document)
    logger.debug("Deserialized %s", model_cls.__name__)
    return model
