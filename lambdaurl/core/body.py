"""
Request body streams.

The event body is a string. Plain bodies are exposed as their UTF-8 bytes;
base64 bodies are decoded lazily, chunk by chunk, while the handler reads.
Invalid base64 therefore surfaces as a read error on the handler side.
"""

import base64
import binascii
import io

# Multiple of 4 so every chunk decodes on its own.
_CHUNK_CHARS = 4096


class Base64BodyReader(io.RawIOBase):
    """Raw stream that decodes standard base64 text on read."""

    def __init__(self, encoded: str):
        self._source = io.StringIO(encoded)
        self._carry = ""
        self._pending = b""
        self._eof = False
        self._error = None
        self._padded = False

    def readable(self) -> bool:
        return True

    def readinto(self, b) -> int:
        if self._error is not None:
            raise self._error
        while not self._pending and not self._eof:
            try:
                self._fill()
            except binascii.Error as e:
                # Every later read fails the same way.
                self._error = e
                raise
        n = min(len(b), len(self._pending))
        b[:n] = self._pending[:n]
        self._pending = self._pending[n:]
        return n

    def _fill(self) -> None:
        chunk = self._source.read(_CHUNK_CHARS)
        if not chunk:
            self._eof = True
            if self._carry:
                # Leftover characters that never formed a full quantum.
                self._pending = self._decode(self._carry)
                self._carry = ""
            return

        # CR and LF are ignored like in any MIME base64 decoder.
        data = self._carry + chunk.replace("\r", "").replace("\n", "")
        if self._padded and data:
            raise binascii.Error("illegal base64 data in request body: excess data after padding")

        cut = len(data) - len(data) % 4
        self._carry = data[cut:]
        if cut:
            self._pending = self._decode(data[:cut])
            # Padding only ends the input; chunks are decoded separately.
            self._padded = data[cut - 1] == "="

    @staticmethod
    def _decode(text: str) -> bytes:
        try:
            return base64.b64decode(text.encode("ascii"), validate=True)
        except (binascii.Error, UnicodeEncodeError) as e:
            raise binascii.Error(f"illegal base64 data in request body: {e}") from e


def _encode_utf8(text: str) -> bytes:
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError:
        # Lone surrogates (JSON "\ud800" escapes) become U+FFFD.
        return text.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "replace").encode("utf-8")


def open_body(body: str, is_base64_encoded: bool = False) -> io.BufferedReader:
    """
    Return a readable binary stream over the event body.

    Args:
        body: Raw body string from the event
        is_base64_encoded: Whether the body is base64 encoded

    Returns:
        Buffered binary stream; decoding happens on read
    """
    if is_base64_encoded:
        return io.BufferedReader(Base64BodyReader(body))
    return io.BufferedReader(io.BytesIO(_encode_utf8(body)))
