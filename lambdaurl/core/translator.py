"""
Function URL event translation.

Turns a Lambda Function URL event into a Request, runs a handler against a
ResponseSink and turns the collected state into a Function URL response.

Handlers are either callables taking (writer, request) or objects exposing
serve_http(writer, request). Exceptions raised by the handler are not caught
here; they belong to the dispatcher.
"""

import base64
from typing import Any, Callable, Dict, Mapping, Protocol, Union

from pydantic import ValidationError

from lambdaurl.core import request_context
from lambdaurl.core.body import open_body
from lambdaurl.core.request import Request
from lambdaurl.core.response_writer import ResponseSink, ResponseWriter
from lambdaurl.exceptions import RequestConversionError
from lambdaurl.models.function_url import LambdaFunctionURLRequest, LambdaFunctionURLResponse

SET_COOKIE = "set-cookie"


class HTTPHandler(Protocol):
    def serve_http(self, writer: ResponseWriter, request: Request) -> None: ...


HandlerFunc = Callable[[ResponseWriter, Request], None]
Handler = Union[HTTPHandler, HandlerFunc]

EventLike = Union[LambdaFunctionURLRequest, Mapping[str, Any]]


def _serve(handler: Handler) -> HandlerFunc:
    serve_http = getattr(handler, "serve_http", None)
    if serve_http is not None:
        return serve_http
    return handler


def build_url(event: LambdaFunctionURLRequest) -> str:
    """Synthesize https://domainName rawPath[?rawQueryString] without escaping."""
    url = "https://" + event.requestContext.domainName + event.rawPath
    if event.rawQueryString:
        url += "?" + event.rawQueryString
    return url


def build_request(event: EventLike, context: Any = None) -> Request:
    """
    Build a Request from a Function URL event.

    Raises:
        RequestConversionError: The event is malformed or yields an invalid request
    """
    try:
        if not isinstance(event, LambdaFunctionURLRequest):
            event = LambdaFunctionURLRequest.model_validate(event)
        body = open_body(event.body, event.isBase64Encoded)
        request = Request(
            event.requestContext.http.method,
            build_url(event),
            body,
            context=context,
            event=event,
        )
    except (ValidationError, ValueError) as e:
        raise RequestConversionError(e) from e

    request.remote_addr = event.requestContext.http.sourceIp
    # One header line per event entry; combined values are not split.
    for key, value in event.headers.items():
        request.headers.add(key, value)
    return request


def build_response(sink: ResponseSink) -> LambdaFunctionURLResponse:
    """Convert the state collected by a ResponseSink into a Function URL response."""
    body = sink.body
    try:
        text = body.decode("utf-8")
        is_base64 = False
    except UnicodeDecodeError:
        text = base64.b64encode(body).decode("ascii")
        is_base64 = True

    headers: Dict[str, str] = {}
    cookies = []
    for key, values in sink.headers.items():
        if key.lower() == SET_COOKIE:
            cookies.extend(values)
        else:
            headers[key] = ",".join(values)

    return LambdaFunctionURLResponse(
        statusCode=sink.status_code,
        headers=headers,
        body=text,
        isBase64Encoded=is_base64,
        cookies=cookies,
    )


def translate(handler: Handler, event: EventLike, context: Any = None) -> LambdaFunctionURLResponse:
    """
    Run handler for one Function URL event.

    Args:
        handler: Wrapped handler
        event: Function URL event (dict from the dispatcher or parsed model)
        context: Lambda invocation context, exposed as request.context

    Returns:
        Function URL response built from what the handler wrote

    Raises:
        RequestConversionError: The event could not be converted into a Request
    """
    request = build_request(event, context)

    sink = ResponseSink()
    token = request_context.set_event(request.event)
    try:
        _serve(handler)(sink, request)
    finally:
        request_context.reset_event(token)

    return build_response(sink)


def wrap(handler: Handler) -> Callable[[EventLike, Any], Dict[str, Any]]:
    """
    Convert a handler into a Lambda Function URL entry point.

    Usage:
        def hello(writer, request):
            writer.headers.set("Content-Type", "text/plain")
            writer.write(b"hello")

        lambda_handler = wrap(hello)
    """

    def invoke(event: EventLike, context: Any = None) -> Dict[str, Any]:
        return translate(handler, event, context).model_dump()

    return invoke
