import io
import json

import pytest

from minihttp.jsonvalue import JsonArr, JsonObj
from minihttp.response import HttpResponse, HttpStatus


@pytest.mark.parametrize(
    "status, code, reason",
    [
        (HttpStatus.OK, "200", "OK"),
        (HttpStatus.NOT_FOUND, "404", "NOT_FOUND"),
        (HttpStatus.INTERNAL_SYSTEM_ERROR, "500", "INTERNAL_SYSTEM_ERROR"),
        (HttpStatus.BAD_REQUEST, "400", "BAD_REQUEST"),
    ],
)
def test_status_values(status, code, reason):
    assert status.code() == code
    assert status.reason() == reason


@pytest.mark.parametrize(
    "factory, status",
    [
        (HttpResponse.ok, HttpStatus.OK),
        (HttpResponse.not_found, HttpStatus.NOT_FOUND),
        (HttpResponse.err, HttpStatus.INTERNAL_SYSTEM_ERROR),
        (HttpResponse.bad, HttpStatus.BAD_REQUEST),
    ],
)
def test_factories(factory, status):
    empty = factory()
    assert empty.status is status
    assert empty.content == b""
    full = factory("body")
    assert full.status is status
    assert full.content == b"body"


def _split(raw):
    head, _, body = raw.partition(b"\r\n\r\n")
    lines = head.decode().split("\r\n")
    headers = dict(line.split(": ", 1) for line in lines[1:])
    return lines[0], headers, body


def test_wire_format_with_body():
    resp = HttpResponse.ok("hello")
    raw = resp.to_bytes()
    assert raw.startswith(b"HTTP/1.1 200 OK\r\n")
    status_line, headers, body = _split(raw)
    assert status_line == "HTTP/1.1 200 OK"
    assert headers["Content-Lenght"] == str(len(b"hello"))
    assert body == b"hello"


def test_wire_format_without_body_has_no_blank_line():
    raw = HttpResponse.not_found().to_bytes()
    assert raw.startswith(b"HTTP/1.1 404 NOT_FOUND\r\n")
    assert b"\r\n\r\n" not in raw
    assert raw.endswith(b"Content-Lenght: 0\r\n")


def test_custom_headers_kept():
    resp = HttpResponse(HttpStatus.OK, b"{}", {"Content-Type": "application/json"})
    _, headers, body = _split(resp.to_bytes())
    assert headers["Content-Type"] == "application/json"
    assert headers["Content-Lenght"] == "2"
    assert body == b"{}"


def test_length_header_overrides_given_value():
    resp = HttpResponse(HttpStatus.OK, b"abc", {"Content-Lenght": "99"})
    assert resp.headers["Content-Lenght"] == str(resp.content_length())


def test_json_content():
    obj = JsonObj({"a": 1})
    resp = HttpResponse.ok(obj)
    assert json.loads(resp.content) == {"a": 1}
    arr = JsonArr([obj, obj])
    assert json.loads(HttpResponse.ok(arr).content) == [{"a": 1}, {"a": 1}]
    assert json.loads(HttpResponse.ok([1, "x"]).content) == [1, "x"]


def test_write_to_file_like():
    resp = HttpResponse.bad("nope")
    buf = io.BytesIO()
    resp.write(buf)
    assert buf.getvalue() == resp.to_bytes()


def test_write_to_socket_like():
    class FakeSocket:
        def __init__(self):
            self.sent = b""

        def sendall(self, data):
            self.sent += data

    sock = FakeSocket()
    resp = HttpResponse.err("boom")
    resp.write(sock)
    assert sock.sent == resp.to_bytes()
    assert sock.sent.startswith(b"HTTP/1.1 500 INTERNAL_SYSTEM_ERROR\r\n")


def test_content_length_matches_bytes():
    resp = HttpResponse.ok("héllo")
    assert resp.content_length() == len("héllo".encode("utf-8"))