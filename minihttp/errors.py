"""Error type raised by the HTTP helpers."""

from __future__ import annotations


class HttpError(Exception):
    """An error while reading or handling an HTTP exchange.

    ``msg`` may be a string, another exception (its text is kept) or ``None``.
    """

    def __init__(self, msg: object = None) -> None:
        self.msg: str | None = None if msg is None else str(msg)
        super().__init__(*([] if self.msg is None else [self.msg]))

    def __str__(self) -> str:
        if self.msg is None:
            return "HttpError {}"
        return f"HttpError {{\n\tmsg: {self.msg}\n}}"