"""
Core translation layer: request synthesis, response collection, context slots.
"""

from .headers import Header, canonical_header_key
from .request import Request
from .request_context import request_from_context
from .response_writer import ResponseSink, ResponseWriter
from .translator import Handler, HTTPHandler, build_request, build_response, translate, wrap

__all__ = [
    "Handler",
    "Header",
    "HTTPHandler",
    "Request",
    "ResponseSink",
    "ResponseWriter",
    "build_request",
    "build_response",
    "canonical_header_key",
    "request_from_context",
    "translate",
    "wrap",
]
