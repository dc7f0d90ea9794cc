"""
Custom exception classes.

Represent the failures of the Function URL translation layer. Each error is
tagged with an ErrorKind so callers can match on the kind instead of walking
the cause chain.
"""

import enum
from typing import Optional


class ErrorKind(str, enum.Enum):
    """Failure kinds reported by the translation layer."""

    REQUEST_CONVERSION = "request_conversion"
    WRITE_RESPONSE = "write_response"


class LambdaURLError(Exception):
    """Base exception class for the translation layer."""

    kind: ErrorKind

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)
        self.__cause__ = cause


class RequestConversionError(LambdaURLError):
    """Raised when the Lambda event cannot be converted into a Request."""

    kind = ErrorKind.REQUEST_CONVERSION

    def __init__(self, cause: BaseException):
        super().__init__(f"failed to convert Lambda request to Request: {cause}", cause)


# Historical spelling of the conversion error.
RequestConvertionError = RequestConversionError


class WriteResponseError(LambdaURLError):
    """Raised when writing response bytes to the underlying writer fails."""

    kind = ErrorKind.WRITE_RESPONSE

    def __init__(self, cause: BaseException, written: int = 0):
        self.written = written
        super().__init__(f"failed to write response: {cause}", cause)


class RuntimeConfigError(Exception):
    """Raised when the Lambda Runtime API address is not configured."""

    def __init__(self, detail: str = "AWS_LAMBDA_RUNTIME_API is not set"):
        super().__init__(detail)
