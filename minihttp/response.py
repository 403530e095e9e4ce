"""HTTP responses and the status codes they carry."""

from __future__ import annotations

import enum
from collections.abc import Mapping
from typing import Any

from .jsonvalue import dumps

_LENGTH_HEADER = "Content-Lenght"


class HttpStatus(enum.Enum):
    """Supported response statuses."""

    OK = ("200", "OK")
    NOT_FOUND = ("404", "NOT_FOUND")
    INTERNAL_SYSTEM_ERROR = ("500", "INTERNAL_SYSTEM_ERROR")
    BAD_REQUEST = ("400", "BAD_REQUEST")

    def code(self) -> str:
        """Numeric status code as text."""
        return self.value[0]

    def reason(self) -> str:
        """Reason phrase written after the code."""
        return self.value[1]


def _to_bytes(content: Any) -> bytes:
    if content is None:
        return b""
    if isinstance(content, (bytes, bytearray, memoryview)):
        return bytes(content)
    if isinstance(content, str):
        return content.encode("utf-8")
    if hasattr(content, "__bytes__"):
        return bytes(content)
    return dumps(content).encode("utf-8")


class HttpResponse:
    """A status line, headers and an optional body."""

    def __init__(
        self,
        status: HttpStatus,
        content: Any = b"",
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self.status = status
        self.content = _to_bytes(content)
        self.headers: dict[str, str] = dict(headers or {})
        self.headers[_LENGTH_HEADER] = str(self.content_length())

    @classmethod
    def ok(cls, content: Any = b"") -> HttpResponse:
        return cls(HttpStatus.OK, content)

    @classmethod
    def not_found(cls, content: Any = b"") -> HttpResponse:
        return cls(HttpStatus.NOT_FOUND, content)

    @classmethod
    def err(cls, content: Any = b"") -> HttpResponse:
        return cls(HttpStatus.INTERNAL_SYSTEM_ERROR, content)

    @classmethod
    def bad(cls, content: Any = b"") -> HttpResponse:
        return cls(HttpStatus.BAD_REQUEST, content)

    def content_length(self) -> int:
        return len(self.content)

    def to_bytes(self) -> bytes:
        """The response as it goes on the wire."""
        first_line = f"HTTP/1.1 {self.status.code()} {self.status.reason()}\r\n"
        header_lines = "".join(f"{key}: {value}\r\n" for key, value in self.headers.items())
        data = (first_line + header_lines).encode("utf-8")
        if self.content:
            data += b"\r\n" + self.content
        return data

    def write(self, stream: Any) -> None:
        """Send the response to a socket or a binary file-like object."""
        data = self.to_bytes()
        if hasattr(stream, "sendall"):
            stream.sendall(data)
        else:
            stream.write(data)