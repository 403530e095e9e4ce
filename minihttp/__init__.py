"""A small HTTP/1.1 toolkit: request parsing, multipart uploads, responses and JSON output."""

__version__ = "0.1.0"

__all__ = ["errors", "jsonvalue", "request", "response"]