# minihttp

Building blocks for HTTP/1.1 servers written on plain sockets. The package
reads one request from a connected stream and gives you its method, path,
query parameters, headers and body. It saves multipart uploads to files and
writes responses back to the stream.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## What it does not do

The package has no server of its own. It does not listen or accept
connections, it has no routing or threading, and it provides no command.
You accept connections yourself, for example with `socket.create_server`,
and pass each connection to `HttpRequest.parse`.

## Reading a request

```python
import socket

from minihttp.request import HttpRequest, HttpMethod
from minihttp.response import HttpResponse

with socket.create_server(("127.0.0.1", 8080)) as server:
    conn, _ = server.accept()
    with conn:
        request = HttpRequest.parse(conn)
        if request.method is HttpMethod.GET and request.uri == "/add":
            a = request.get_param("a", int)
            b = request.get_param("b", int)
            HttpResponse.ok(str(a + b)).write(conn)
        else:
            HttpResponse.not_found().write(conn)
```

`HttpRequest.parse(stream)` and `parse_http_request(stream)` accept a socket
or any binary file-like object. The result is an `HttpRequest` with these
fields:

- `method`: an `HttpMethod`, one of `GET`, `POST`, `PUT`, `PATCH` or
  `OPTION`. Any other method raises `HttpError`.
- `uri`: the request target without its query string.
- `params`: the query parameters. A value that contains commas becomes a
  list of strings. Parameters with empty values are dropped.
- `headers`: a dict that maps header names to values.
- `body`: the body decoded as UTF-8. Exactly `Content-Length` bytes are read,
  and only when that header is present and not zero.
- `files`: for a `multipart` content type, the paths of the saved parts.
  Each part's content goes to `imported_file_<n>` in the current directory.

Reading an HTTP request:

- `get_param(name, convert=str)` returns a single-valued parameter passed
  through `convert`. It raises `HttpError` if the parameter is missing, if it
  holds a list, or if the conversion fails.
- `body_as_json()` decodes the body with the standard `json` module. It
  raises `HttpError` if the body is not valid JSON.

The lower-level functions in `minihttp.request` can also be called on their
own:

- `parse_params(uri)` returns the raw query parameters. A value without a
  `=` is stored under the key `""`.
- `parse_complex_params(uri)` returns the parameters with comma-separated
  values split into lists.
- `parse_multipart_boundary(buffer)` extracts the `boundary=` value from the
  request head.
- `multipart_distribution(data, boundary)` returns a `MultipartDistribution`.
  It holds the start of every boundary except the closing one, and the
  boundary's length.
- `parse_multipart_parts(buffer, distribution, directory=".")` writes each
  part's content to `imported_file_<n>` in `directory` and returns the paths.

## Writing a response

`HttpResponse(status, content=b"", headers=None)` takes an `HttpStatus`:
`OK`, `NOT_FOUND`, `INTERNAL_SYSTEM_ERROR` or `BAD_REQUEST`. The shortcuts
`HttpResponse.ok`, `not_found`, `err` and `bad` give status 200, 404, 500 and
400 respectively. Content may be any of these:

- `bytes`
- `str`, encoded as UTF-8
- an object with `__bytes__`, such as `JsonObj`
- a dict, list or int, rendered with `jsonvalue.dumps`

Every response gets a length header, spelled `Content-Lenght`, that holds the
size of the content.

`to_bytes()` returns the encoded response: the status line, then the headers,
then a blank line and the content when there is content. `write(stream)`
sends it to a socket or a binary file-like object.

## JSON output

`minihttp.jsonvalue` builds compact JSON text. Strings are written between
quotes exactly as given, without escaping.

```python
from minihttp.jsonvalue import JsonObj, JsonArr, dumps
from minihttp.response import HttpResponse

user = JsonObj()
user.push("name", "Ada")
user.push("id", 7)
print(str(user))                  # {"name":"Ada","id":7}
print(str(JsonArr([user, user]))) # [{"name":"Ada","id":7},{"name":"Ada","id":7}]
print(dumps(["a", 1]))            # ["a",1]

HttpResponse.ok(bytes(user))
```

`dumps` accepts the following and raises `TypeError` for anything else:

- `JsonObj` and `JsonArr`
- dicts
- lists and tuples
- strings
- integers

## Errors

Failures while parsing raise `minihttp.errors.HttpError`. Its text has the
form `HttpError {\n\tmsg: ...\n}`, or `HttpError {}` when it has no message.