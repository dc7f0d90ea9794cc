"""
Response writer capability and its in-memory implementation.

Handlers only see the ResponseWriter protocol. ResponseSink collects status,
headers and body in memory; the translator reads them back once the handler
returns.
"""

from typing import BinaryIO, Optional, Protocol, Union

from lambdaurl.core.headers import Header
from lambdaurl.exceptions import WriteResponseError

BytesLike = Union[bytes, bytearray, memoryview, str]


class ResponseWriter(Protocol):
    """Capability handed to handlers: headers, body bytes, status code."""

    @property
    def headers(self) -> Header: ...

    def write(self, data: BytesLike) -> int: ...

    def write_header(self, status_code: int) -> None: ...


class ResponseSink:
    """
    Buffered ResponseWriter.

    Bytes passed to write() are forwarded to the optional underlying writer
    and appended to the body buffer. The buffer never shrinks.
    """

    def __init__(self, writer: Optional[BinaryIO] = None):
        self._headers = Header()
        self._status_code = 200
        self._body = bytearray()
        self._writer = writer

    @property
    def headers(self) -> Header:
        return self._headers

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def body(self) -> bytes:
        return bytes(self._body)

    def write(self, data: BytesLike) -> int:
        """
        Append data to the response body.

        Returns:
            Number of bytes accepted

        Raises:
            TypeError: data is not str or bytes-like
            WriteResponseError: The underlying writer failed
        """
        if isinstance(data, str):
            data = data.encode("utf-8")
        elif isinstance(data, (bytes, bytearray, memoryview)):
            data = bytes(data)
        else:
            raise TypeError(f"write() argument must be str or bytes-like, not {type(data).__name__}")

        written = len(data)
        if self._writer is not None:
            try:
                result = self._writer.write(data)
            except Exception as e:
                raise WriteResponseError(e, written=0) from e
            if result is not None:
                written = result

        self._body += data[:written]
        return written

    def write_header(self, status_code: int) -> None:
        self._status_code = status_code
