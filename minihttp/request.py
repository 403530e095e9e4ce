"""Parsing of incoming HTTP requests, query parameters and multipart bodies."""

from __future__ import annotations

import enum
import json
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, BinaryIO, TypeVar, Union

from .errors import HttpError

T = TypeVar("T")

ParamValue = Union[str, list[str]]

_HEADER_END = b"\r\n\r\n"
_BOUNDARY_MARK = b"boundary="
_LINE_BREAKS = (ord("\r"), ord("\n"))


class HttpMethod(enum.Enum):
    """Request methods understood by the parser."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    OPTION = "OPTION"


@dataclass
class MultipartDistribution:
    """Where each part boundary of a multipart body starts."""

    boundary_indexes: list[int]
    boundary_len: int


@dataclass
class HttpRequest:
    """A parsed request: method, target, parameters, headers and body."""

    method: HttpMethod = HttpMethod.GET
    headers: dict[str, str] = field(default_factory=dict)
    uri: str = ""
    params: dict[str, ParamValue] = field(default_factory=dict)
    body: str = ""
    files: list[Path] = field(default_factory=list)

    def get_param(self, name: str, convert: Callable[[str], T] = str) -> T:
        """Return the single-valued parameter ``name`` converted with ``convert``."""
        if name not in self.params:
            raise HttpError(f"no param with name {name}")
        value = self.params[name]
        if not isinstance(value, str):
            raise HttpError(f"param: {name}:{value!r} was not singular")
        try:
            return convert(value)
        except (ValueError, TypeError) as exc:
            raise HttpError(f"couldn't parse param: {name}:{value!r}") from exc

    def body_as_json(self) -> Any:
        """Decode the body as JSON."""
        try:
            return json.loads(self.body)
        except json.JSONDecodeError as exc:
            raise HttpError(exc) from exc

    @staticmethod
    def parse(stream: Any) -> HttpRequest:
        """Read and parse one request from a socket or binary file-like object."""
        return parse_http_request(stream)


def _as_reader(stream: Any) -> BinaryIO:
    if hasattr(stream, "recv"):
        return stream.makefile("rb")
    return stream


def _take_until(reader: BinaryIO, term: bytes) -> bytes:
    """Read bytes up to and including ``term``, or up to end of input."""
    collected = bytearray()
    while True:
        chunk = reader.read(1)
        if not chunk:
            return bytes(collected)
        collected += chunk
        if collected.endswith(term):
            return bytes(collected)


def parse_http_request(stream: Any) -> HttpRequest:
    """Read one request from ``stream``; multipart parts are saved as files."""
    reader = _as_reader(stream)
    header_part = _take_until(reader, _HEADER_END)
    request = _parse_heading(header_part)

    raw_length = request.headers.get("Content-Length")
    if raw_length is None:
        return request
    try:
        length = int(raw_length)
    except ValueError as exc:
        raise HttpError(f"invalid Content-Length: {raw_length}") from exc
    if length == 0:
        return request

    content_type = request.headers.get("Content-Type")
    if content_type is not None and "multipart" in content_type.lower():
        boundary = parse_multipart_boundary(header_part)
        body_part = _take_until(reader, f"{boundary}--".encode())
        distribution = multipart_distribution(body_part, boundary.encode())
        request.files = parse_multipart_parts(body_part, distribution)
    else:
        try:
            request.body = reader.read(length).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise HttpError(exc) from exc
    return request


def parse_multipart_parts(
    buffer: bytes, distribution: MultipartDistribution, directory: Any = "."
) -> list[Path]:
    """Write the content of each part to ``imported_file_<n>`` in ``directory``."""
    target = Path(directory)
    indexes = distribution.boundary_indexes
    ends = indexes[1:] + [len(buffer)]
    paths = []
    for part_index, (start, part_end) in enumerate(zip(indexes, ends)):
        content_start = _content_start(buffer, start + distribution.boundary_len + 2)
        path = target / f"imported_file_{part_index}"
        path.write_bytes(buffer[content_start:part_end])
        paths.append(path)
    return paths


def _content_start(buffer: bytes, line_start: int) -> int:
    """Skip the part's header lines and return where its content begins."""
    try:
        while True:
            end = line_start
            while buffer[end] not in _LINE_BREAKS:
                end += 1
            if buffer[end + 2] in _LINE_BREAKS:
                return end + 4
            line_start = end + 2
    except IndexError as exc:
        raise HttpError("malformed multipart part") from exc


def _is_blank(line: str) -> bool:
    return not line.strip().strip("\0")


def _parse_heading(buffer: bytes) -> HttpRequest:
    try:
        text = buffer.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise HttpError(exc) from exc
    if _is_blank(text):
        raise HttpError("empty request")

    first_line, *header_lines = text.split("\n")
    parts = first_line.split(" ")
    method_name = parts[0]
    try:
        method = HttpMethod(method_name.strip())
    except ValueError as exc:
        raise HttpError(f"Wrong method {method_name}") from exc
    if len(parts) < 2:
        raise HttpError(f"no request target in: {first_line}")
    target = parts[1]

    headers = {}
    for line in header_lines:
        if _is_blank(line):
            break
        key, sep, value = line.partition(": ")
        if not sep:
            raise HttpError(f"couldn't parse header param: {line}")
        headers[key.strip()] = value.strip()

    return HttpRequest(
        method=method,
        headers=headers,
        uri=target.split("?")[0],
        params=parse_complex_params(target),
    )


def parse_multipart_boundary(buffer: bytes) -> str:
    """Extract the boundary named in a ``Content-Type`` header."""
    mark = buffer.find(_BOUNDARY_MARK)
    if mark < 0:
        raise HttpError("no multipart boundary")
    start = mark + len(_BOUNDARY_MARK)
    end = start + 1
    while True:
        if end >= len(buffer):
            raise HttpError("unterminated multipart boundary")
        if buffer[end] in (ord(";"), *_LINE_BREAKS):
            break
        end += 1
    try:
        return buffer[start:end].decode("utf-8")
    except UnicodeDecodeError as exc:
        raise HttpError(exc) from exc


def multipart_distribution(data: bytes, boundary: bytes) -> MultipartDistribution:
    """Locate every boundary in ``data``, leaving out the closing one."""
    indexes = []
    position = data.find(boundary)
    while position >= 0:
        indexes.append(position)
        position = data.find(boundary, position + len(boundary))
    if indexes:
        indexes.pop()
    return MultipartDistribution(boundary_indexes=indexes, boundary_len=len(boundary))


def parse_complex_params(uri: str) -> dict[str, ParamValue]:
    """Query parameters, with comma-separated values split into lists."""
    result: dict[str, ParamValue] = {}
    for key, value in parse_params(uri).items():
        if not value:
            continue
        result[key] = value.split(",") if "," in value else value
    return result


def parse_params(uri: str) -> dict[str, str]:
    """Raw query parameters of ``uri``; a bare value is stored under ``""``."""
    uri_parts = uri.split("?")
    if len(uri_parts) == 1:
        return {}
    params = {}
    for param in uri_parts[-1].split("&"):
        pieces = param.split("=")
        if len(pieces) == 1:
            params[""] = pieces[0]
        elif len(pieces) == 2:
            params[pieces[0]] = pieces[1]
    return params