"""Typed models exchanged with the client."""

from __future__ import annotations

import json
from typing import Any, Mapping

import httpx
from pydantic import BaseModel, ConfigDict, Field

from .exceptions import ResultDecodeError


class JHttpModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class Cookie(JHttpModel):
    """A single cookie sent with every HTTP request issued by a client."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str
    value: str

    def render(self) -> str:
        return f"{self.name}={self.value}"


class Result(JHttpModel):
    """Parsed outcome of one successful round-trip."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    status_code: int
    headers: Mapping[str, str] = Field(default_factory=dict)
    content: bytes = b""
    data: Any = None

    @classmethod
    def from_response(cls, response: httpx.Response) -> "Result":
        """Build a Result from a fully read response.

        JSON bodies are decoded when the content type says so, other bodies
        are kept as text and an empty body decodes to ``None``.
        """
        content = response.content
        content_type = response.headers.get("content-type", "")
        data: Any = None
        if content:
            if "json" in content_type.lower():
                try:
                    data = json.loads(content)
                except ValueError as exc:
                    raise ResultDecodeError(
                        "response body is not valid JSON",
                        status_code=response.status_code,
                        cause=exc,
                    ) from exc
            else:
                try:
                    data = response.text
                except UnicodeDecodeError as exc:
                    raise ResultDecodeError(
                        "response body could not be decoded",
                        status_code=response.status_code,
                        cause=exc,
                    ) from exc
        return cls(
            status_code=response.status_code,
            headers=dict(response.headers),
            content=content,
            data=data,
        )

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    def is_success(self) -> bool:
        """False only when a JSON object body carries ``"success": false``."""
        if isinstance(self.data, Mapping):
            flag = self.data.get("success")
            if isinstance(flag, bool):
                return flag
        return True
