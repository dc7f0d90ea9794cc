"""
lambdaurl converts a synchronous HTTP handler into a Lambda request handler.

Supports Lambda Function URLs configured with the buffered response mode.
"""

from .core import (
    Handler,
    Header,
    HTTPHandler,
    Request,
    ResponseSink,
    ResponseWriter,
    request_from_context,
    translate,
    wrap,
)
from .exceptions import (
    ErrorKind,
    LambdaURLError,
    RequestConversionError,
    RequestConvertionError,
    RuntimeConfigError,
    WriteResponseError,
)
from .models import LambdaFunctionURLRequest, LambdaFunctionURLResponse
from .runtime import start

__all__ = [
    "ErrorKind",
    "Handler",
    "Header",
    "HTTPHandler",
    "LambdaFunctionURLRequest",
    "LambdaFunctionURLResponse",
    "LambdaURLError",
    "Request",
    "RequestConversionError",
    "RequestConvertionError",
    "ResponseSink",
    "ResponseWriter",
    "RuntimeConfigError",
    "WriteResponseError",
    "request_from_context",
    "start",
    "translate",
    "wrap",
]
