"""
RequestContext management.

ContextVar slots shared across one invocation:
- the original Function URL event, retrievable by handler code
- the Lambda request id and X-Ray trace id, picked up by the JSON log formatter

Each slot is its own ContextVar, so a value can only be reached through the
accessors below and never collides with unrelated context values.
"""

from contextvars import ContextVar, Token
from typing import Optional

from lambdaurl.core.trace import TraceId
from lambdaurl.models.function_url import LambdaFunctionURLRequest

_event_var: ContextVar[Optional[LambdaFunctionURLRequest]] = ContextVar("function_url_event", default=None)
# Context variable for Trace ID (full header format).
_trace_id_var: ContextVar[Optional[str]] = ContextVar("trace_id", default=None)
# Context variable for the Lambda request id.
_request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def request_from_context() -> Optional[LambdaFunctionURLRequest]:
    """Return the Function URL event of the current invocation, or None."""
    return _event_var.get()


def set_event(event: LambdaFunctionURLRequest) -> Token:
    """Bind the original event; pass the returned token to reset_event()."""
    return _event_var.set(event)


def reset_event(token: Token) -> None:
    _event_var.reset(token)


def get_trace_id() -> Optional[str]:
    """Get the current Trace ID."""
    return _trace_id_var.get()


def set_trace_id(trace_id_str: str) -> str:
    """
    Set the Trace ID.

    Args:
        trace_id_str: Lambda-Runtime-Trace-Id header string

    Returns:
        The normalized Trace ID string that was set
    """
    trace = str(TraceId.parse(trace_id_str))
    _trace_id_var.set(trace)
    return trace


def get_request_id() -> Optional[str]:
    """Get the current Request ID."""
    return _request_id_var.get()


def set_request_id(request_id: str) -> None:
    _request_id_var.set(request_id)


def clear_request_context() -> None:
    """Clear the Trace ID and Request ID slots."""
    _trace_id_var.set(None)
    _request_id_var.set(None)
