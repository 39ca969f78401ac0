"""Request body encoding for the payload variants accepted by the client."""

from __future__ import annotations

import json
import os
from typing import IO, Any, Union

import httpx
from pydantic import BaseModel
from pydantic_core import PydanticSerializationError

from .exceptions import PayloadEncodingError


class FormData:
    """Multipart form body with a boundary fixed at construction.

    Parts are kept in insertion order and rendered once into an owned
    buffer; the buffer is rebuilt only after new parts are added, so every
    retry attempt sends the same bytes under the same boundary.
    """

    def __init__(self, *, boundary: str | None = None) -> None:
        self.boundary = boundary or os.urandom(16).hex()
        self._parts: list[tuple[str, tuple[Any, ...]]] = []
        self._buffer: bytes | None = None

    def add_field(self, name: str, value: str) -> "FormData":
        self._parts.append((name, (None, str(value))))
        self._buffer = None
        return self

    def add_file(
        self,
        name: str,
        filename: str,
        content: bytes | str | IO[bytes],
        content_type: str | None = None,
    ) -> "FormData":
        if hasattr(content, "read"):
            content = content.read()
        if content_type is None:
            content_type = "application/octet-stream"
        self._parts.append((name, (filename, content, content_type)))
        self._buffer = None
        return self

    @property
    def content_type(self) -> str:
        return f"multipart/form-data; boundary={self.boundary}"

    @property
    def body(self) -> bytes:
        if self._buffer is None:
            self._buffer = self._render()
        return self._buffer

    def _render(self) -> bytes:
        if not self._parts:
            return f"--{self.boundary}--\r\n".encode("ascii")
        # httpx picks the boundary up from the explicit content type.
        request = httpx.Request(
            "POST",
            "http://form.invalid/",
            files=self._parts,
            headers={"Content-Type": self.content_type},
        )
        return request.read()

    def __len__(self) -> int:
        return len(self._parts)


Payload = Union[FormData, bytes, str, Any]


def encode_json(value: Any) -> bytes:
    """Serialize ``value`` as compact JSON text.

    Pydantic models go through their own serializer. Values that are not
    representable in JSON (sets, arbitrary objects, NaN) raise
    ``PayloadEncodingError``.
    """
    try:
        if isinstance(value, BaseModel):
            return value.model_dump_json().encode("utf-8")
        text = json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError, PydanticSerializationError) as exc:
        raise PayloadEncodingError(f"payload could not be encoded as JSON: {exc}", cause=exc) from exc
    return text.encode("utf-8")


def encode_payload(payload: Payload) -> tuple[bytes, str | None]:
    """Return the request body and the content type the payload forces, if any."""
    if isinstance(payload, FormData):
        return payload.body, payload.content_type
    if isinstance(payload, (bytes, bytearray, memoryview)):
        return bytes(payload), None
    if isinstance(payload, str):
        return payload.encode("utf-8"), None
    return encode_json(payload), None
