# src/messages/errors.py - v1
"""Construction-time failures of the wire schema.

Nothing raised here is retryable: the caller has to fix the input.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError


class SchemaError(ValueError):
    """Base class for every schema construction or parsing failure."""

    def __init__(
        self,
        message: str,
        model_name: str,
        field: str | None = None,
        errors: list[dict[str, Any]] | None = None,
        reason: str | None = None,
    ) -> None:
        self.model_name = model_name
        self.field = field
        self.errors = errors or []
        self.reason = reason or message
        super().__init__(message)


class MissingRequiredField(SchemaError):
    """A required field was not supplied."""


class TypeMismatch(SchemaError):
    """A supplied value does not satisfy the declared field type."""


class MalformedDocument(SchemaError):
    """Deserialization input is not a JSON object."""


def _format_loc(loc: tuple[int | str, ...]) -> str:
    return ".".join(str(part) for part in loc)


def _classify(err: dict[str, Any]) -> tuple[type[SchemaError], tuple[Any, ...], str]:
    """Return (error class, location, reason) for one pydantic error entry."""
    ctx = err.get("ctx") or {}
    loc = tuple(err["loc"])

    # A nested WireModel already raised a translated error; pydantic wraps
    # it as value_error at the nested location.
    inner = ctx.get("error")
    if err["type"] == "value_error" and isinstance(inner, SchemaError):
        if inner.field:
            loc = (*loc, inner.field)
        return type(inner), loc, inner.reason

    if err["type"] in ("missing", "missing_payload"):
        payload = ctx.get("field")
        if payload:
            loc = (*loc, payload)
        return MissingRequiredField, loc, "missing required field"

    if err["type"] == "json_invalid":
        return MalformedDocument, loc, err["msg"]

    return TypeMismatch, loc, f"{err['msg']} (got {type(err.get('input')).__name__})"


def translate_validation_error(exc: ValidationError, model_name: str) -> SchemaError:
    """Map a pydantic ValidationError onto the local error taxonomy.

    Any missing field wins over type errors so that an omitted field is
    reported as such even when other fields are also wrong. Errors from
    nested models keep their class; their field is prefixed with the
    nested location.
    """
    errors = exc.errors(include_url=False)
    classified = [_classify(e) for e in errors]
    missing = [c for c in classified if c[0] is MissingRequiredField]
    error_cls, loc, reason = missing[0] if missing else classified[0]

    field = _format_loc(loc) or None
    if error_cls is MissingRequiredField:
        message = f"{model_name}: missing required field {field!r}"
    else:
        where = f" field {field!r}" if field else ""
        message = f"{model_name}:{where} {reason}"

    return error_cls(
        message,
        model_name=model_name,
        field=field,
        errors=errors,
        reason=reason,
    )
