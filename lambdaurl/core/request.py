"""
Canonical request passed to wrapped handlers.
"""

import io
from typing import Any, BinaryIO, Dict, List, Optional
from urllib.parse import parse_qs, urlsplit

from lambdaurl.core.headers import Header, is_token
from lambdaurl.models.function_url import LambdaFunctionURLRequest

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
# ASCII characters a host may hold unescaped; non-ASCII is passed through.
_HOST_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
    "-_.~!$&'()*+,;=:[]<>\"%"
)


def valid_method(method: str) -> bool:
    """Return True if method is a non-empty RFC 7230 token."""
    return is_token(method)


def validate_url(url: str) -> None:
    """
    Raise ValueError if url cannot be parsed as an absolute request URL.

    Only parseability is checked; the URL is never re-escaped.
    """
    for c in url:
        if c < " " or c == "\x7f":
            raise ValueError(f"invalid control character in URL: {url!r}")

    # urlsplit rejects malformed IPv6 literals, .port rejects bad ports.
    parts = urlsplit(url)
    _ = parts.port

    host = parts.netloc.rpartition("@")[2]
    for c in host:
        if c < "\x80" and c not in _HOST_CHARS:
            raise ValueError(f"invalid character {c!r} in host name: {host!r}")

    for name, value in (("host", host), ("path", parts.path), ("fragment", parts.fragment)):
        _check_escapes(name, value)


def _check_escapes(name: str, value: str) -> None:
    i = value.find("%")
    while i != -1:
        escape = value[i : i + 3]
        if len(escape) < 3 or escape[1] not in _HEX_DIGITS or escape[2] not in _HEX_DIGITS:
            raise ValueError(f"invalid URL escape {escape!r} in {name}")
        i = value.find("%", i + 3)


class Request:
    """
    HTTP request synthesized from a Function URL event.

    Attributes:
        method: HTTP method exactly as received
        url: Absolute URL (https://domain/rawPath?rawQueryString)
        body: Readable binary stream; base64 bodies are decoded on read
        headers: Header multimap, one entry per event header
        remote_addr: Source IP of the caller
        event: Original Function URL event
        context: Lambda invocation context object, if any
    """

    def __init__(
        self,
        method: str,
        url: str,
        body: Optional[BinaryIO] = None,
        context: Any = None,
        event: Optional[LambdaFunctionURLRequest] = None,
    ):
        if method == "":
            method = "GET"
        if not valid_method(method):
            raise ValueError(f"invalid method {method!r}")
        validate_url(url)

        self.method = method
        self.url = url
        self.body = body if body is not None else io.BytesIO(b"")
        self.headers = Header()
        self.remote_addr = ""
        self.context = context
        self.event = event

    @property
    def path(self) -> str:
        return urlsplit(self.url).path

    @property
    def query_string(self) -> str:
        return urlsplit(self.url).query

    @property
    def args(self) -> Dict[str, List[str]]:
        """Query parameters parsed from the raw query string."""
        return parse_qs(self.query_string, keep_blank_values=True)

    def read(self, size: int = -1) -> bytes:
        return self.body.read(size)

    def __repr__(self) -> str:
        return f"<Request {self.method} {self.url}>"
