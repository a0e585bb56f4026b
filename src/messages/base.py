# src/messages/base.py - v1
"""Immutable pydantic base for every wire shape.

All construction paths (keyword constructor, model_validate,
model_validate_json) raise the local SchemaError taxonomy instead of
pydantic's ValidationError.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from claudia.messages.errors import MalformedDocument, translate_validation_error


class WireModel(BaseModel):
    """Frozen value object with a JSON wire mapping."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise translate_validation_error(exc, type(self).__name__) from exc

    @classmethod
    def model_validate(cls, obj: Any, *args: Any, **kwargs: Any):  # type: ignore[override]
        try:
            return super().model_validate(obj, *args, **kwargs)
        except ValidationError as exc:
            raise translate_validation_error(exc, cls.__name__) from exc

    @classmethod
    def model_validate_json(cls, json_data: str | bytes, *args: Any, **kwargs: Any):  # type: ignore[override]
        try:
            return super().model_validate_json(json_data, *args, **kwargs)
        except ValidationError as exc:
            raise translate_validation_error(exc, cls.__name__) from exc

    # --- Wire mapping ---

    def to_wire(self) -> dict[str, Any]:
        """JSON-compatible dict with unset optionals omitted."""
        return self.model_dump(mode="json", exclude_none=True)

    def to_json(self, indent: int | None = None) -> str:
        return self.model_dump_json(exclude_none=True, indent=indent)

    @classmethod
    def from_wire(cls, document: Mapping[str, Any]):
        """Build from a parsed document; anything but a JSON object is malformed."""
        if not isinstance(document, Mapping):
            raise MalformedDocument(
                f"{cls.__name__}: expected a JSON object, got {type(document).__name__}",
                model_name=cls.__name__,
            )
        return cls.model_validate(document)

    @classmethod
    def from_json(cls, text: str | bytes):
        try:
            document = json.loads(text)
        except ValueError as e:
            raise MalformedDocument(
                f"{cls.__name__}: invalid JSON: {e}", model_name=cls.__name__
            ) from e
        return cls.from_wire(document)

    def __str__(self) -> str:
        return self.to_json()
