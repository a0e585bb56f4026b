"""
claudia - typed request/response schema for the Messages API.

Immutable pydantic models mirroring the provider's JSON contract, plus a
codec that maps them to and from wire documents. Transport, retries,
streaming and authentication belong to the HTTP client that sends the
serialized document.
"""

from claudia.messages.builder import RequestBuilder, build_request
from claudia.messages.codec import deserialize, serialize, stringify, to_json
from claudia.messages.errors import (
    MalformedDocument,
    MissingRequiredField,
    SchemaError,
    TypeMismatch,
)
from claudia.messages.models import (
    Content,
    ContentTypes,
    MediaTypes,
    Message,
    Metadata,
    Request,
    Roles,
    Source,
    as_contents,
    text_block,
)
from claudia.messages.response import MessageResponse, Usage
from claudia.version import __version__

__all__ = [
    # Request shapes
    "Request",
    "Message",
    "Content",
    "Source",
    "Metadata",
    "Roles",
    "ContentTypes",
    "MediaTypes",
    "text_block",
    "as_contents",
    # Response shapes
    "MessageResponse",
    "Usage",
    # Codec
    "serialize",
    "deserialize",
    "stringify",
    "to_json",
    # Construction
    "RequestBuilder",
    "build_request",
    # Errors
    "SchemaError",
    "MissingRequiredField",
    "TypeMismatch",
    "MalformedDocument",
    "__version__",
]
