# src/messages/models.py - v1
"""Request shapes of the Messages API: Request, Message, Content, Source, Metadata.

Field names are the wire property names. Collections are tuples so a
constructed Request is immutable end to end and keeps turn order.
"""

from __future__ import annotations

import base64
from collections.abc import Iterable, Mapping
from pathlib import PurePath
from typing import Any, Literal

from pydantic import (
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    field_serializer,
    field_validator,
    model_validator,
)
from pydantic_core import PydanticCustomError

from claudia.messages.base import WireModel
from claudia.messages.errors import TypeMismatch

Role = Literal["user", "assistant"]
ContentType = Literal["text", "image"]
MediaType = Literal["image/jpeg", "image/png", "image/gif", "image/webp"]


class Roles:
    USER = "user"
    ASSISTANT = "assistant"


class ContentTypes:
    TEXT = "text"
    IMAGE = "image"


class MediaTypes:
    JPEG = "image/jpeg"
    PNG = "image/png"
    GIF = "image/gif"
    WEBP = "image/webp"


_SUFFIX_MEDIA_TYPES: dict[str, str] = {
    ".jpg": MediaTypes.JPEG,
    ".jpeg": MediaTypes.JPEG,
    ".png": MediaTypes.PNG,
    ".gif": MediaTypes.GIF,
    ".webp": MediaTypes.WEBP,
}


def media_type_for(path: str | PurePath) -> str | None:
    """Guess the image media type from a filename suffix."""
    return _SUFFIX_MEDIA_TYPES.get(PurePath(path).suffix.lower())


# === PAYLOADS ===


class Metadata(WireModel):
    """Metadata about the request.

    user_id is an opaque external identifier (uuid, hash). It must not
    contain names, email addresses or phone numbers.
    """

    user_id: StrictStr


class Source(WireModel):
    """Inline image payload. data holds raw bytes; the wire carries base64."""

    type: Literal["base64"] = "base64"
    media_type: MediaType
    data: bytes

    @field_validator("data", mode="before")
    @classmethod
    def decode_base64(cls, v: Any) -> Any:
        """A str is base64 text (the wire form); bytes are taken as-is."""
        if isinstance(v, str):
            try:
                return base64.b64decode(v, validate=True)
            except ValueError as e:
                raise ValueError(f"data is not valid base64: {e}") from e
        return v

    @field_serializer("data", when_used="json")
    def encode_base64(self, v: bytes) -> str:
        return base64.b64encode(v).decode("ascii")


class Content(WireModel):
    """One content block, tagged by type.

    Exactly one payload is populated: text for "text", source for
    "image". Read the payload only after branching on type.
    """

    type: ContentType
    text: StrictStr | None = None
    source: Source | None = None

    @model_validator(mode="before")
    @classmethod
    def coerce_str(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"type": ContentTypes.TEXT, "text": data}
        return data

    @model_validator(mode="after")
    def check_payload(self) -> Content:
        if self.type == ContentTypes.TEXT:
            expected, other = "text", "source"
        else:
            expected, other = "source", "text"
        if getattr(self, expected) is None:
            raise PydanticCustomError(
                "missing_payload",
                "{kind} block requires {field}",
                {"kind": self.type, "field": expected},
            )
        if getattr(self, other) is not None:
            raise ValueError(f"{self.type} block must not carry {other}")
        return self

    @classmethod
    def from_text(cls, text: str) -> Content:
        return cls(type=ContentTypes.TEXT, text=text)

    @classmethod
    def from_image(cls, media_type: str, data: bytes | str) -> Content:
        return cls(type=ContentTypes.IMAGE, source=Source(media_type=media_type, data=data))

    @property
    def is_text(self) -> bool:
        return self.type == ContentTypes.TEXT

    @property
    def is_image(self) -> bool:
        return self.type == ContentTypes.IMAGE

    @property
    def payload(self) -> str | Source:
        return self.text if self.is_text else self.source  # type: ignore[return-value]


def text_block(text: str) -> Content:
    """Wrap a bare string as a text content block."""
    return Content.from_text(text)


def as_contents(value: str | Content | Mapping[str, Any] | Iterable[Any]) -> tuple[Content, ...]:
    """Normalize message content to a tuple of blocks.

    A bare string, a block or a single block mapping becomes a one-element
    tuple.

    Raises:
        TypeMismatch: If value is none of the accepted shapes.
    """
    if isinstance(value, str):
        return (text_block(value),)
    if isinstance(value, Content):
        return (value,)
    if isinstance(value, Mapping):
        return (Content.model_validate(value),)
    if not isinstance(value, Iterable):
        raise TypeMismatch(
            f"Content: expected a string, block or sequence of blocks, "
            f"got {type(value).__name__}",
            model_name="Content",
            field="content",
        )
    return tuple(c if isinstance(c, Content) else Content.model_validate(c) for c in value)


# === CONVERSATION ===


class Message(WireModel):
    """A single conversation turn."""

    role: Role
    content: tuple[Content, ...]

    @field_validator("content", mode="before")
    @classmethod
    def coerce_content(cls, v: Any) -> Any:
        """Single string, block or block dict becomes a one-element tuple."""
        if isinstance(v, (str, Content, Mapping)):
            return (v,)
        return v


class Request(WireModel):
    """Outbound body of POST /v1/messages.

    Sampling parameters are type-checked only; their valid ranges are
    enforced by the remote service. An empty messages tuple is accepted.
    """

    model: StrictStr
    max_tokens: StrictInt
    messages: tuple[Message, ...]

    # --- Optional parameters ---
    system: StrictStr | None = None
    metadata: Metadata | None = None
    stop_sequences: tuple[StrictStr, ...] | None = None
    stream: StrictBool | None = None
    temperature: StrictFloat | None = None
    top_p: StrictFloat | None = None
    top_k: StrictInt | None = None

    @field_validator("stop_sequences", mode="before")
    @classmethod
    def coerce_stop_sequences(cls, v: Any) -> Any:
        if isinstance(v, str):
            return (v,)
        return v

    @property
    def last_message(self) -> Message | None:
        return self.messages[-1] if self.messages else None
