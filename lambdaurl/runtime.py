"""
Lambda Runtime API glue.

start() hands a wrapped handler to the Lambda Runtime API run loop
(GET /invocation/next, POST /invocation/{id}/response|error) and blocks for
the lifetime of the process.
"""

import logging
import os
import time
import traceback
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

import httpx

from lambdaurl.config import RuntimeConfig
from lambdaurl.core import request_context
from lambdaurl.core.logging_config import setup_logging
from lambdaurl.core.translator import Handler, wrap
from lambdaurl.exceptions import RuntimeConfigError

logger = logging.getLogger(__name__)

EntryPoint = Callable[[Dict[str, Any], Any], Dict[str, Any]]


@dataclass
class InvocationContext:
    """Lambda context object built from the Lambda-Runtime-* headers."""

    aws_request_id: str
    deadline_ms: int = 0
    invoked_function_arn: str = ""
    trace_id: Optional[str] = None
    client_context: Optional[str] = None
    identity: Optional[str] = None
    function_name: str = field(default_factory=lambda: os.environ.get("AWS_LAMBDA_FUNCTION_NAME", ""))
    function_version: str = field(
        default_factory=lambda: os.environ.get("AWS_LAMBDA_FUNCTION_VERSION", "$LATEST")
    )
    memory_limit_in_mb: str = field(
        default_factory=lambda: os.environ.get("AWS_LAMBDA_FUNCTION_MEMORY_SIZE", "")
    )
    log_group_name: str = field(default_factory=lambda: os.environ.get("AWS_LAMBDA_LOG_GROUP_NAME", ""))
    log_stream_name: str = field(default_factory=lambda: os.environ.get("AWS_LAMBDA_LOG_STREAM_NAME", ""))

    def get_remaining_time_in_millis(self) -> int:
        return max(self.deadline_ms - int(time.time() * 1000), 0)


@dataclass
class Invocation:
    event: Dict[str, Any]
    context: InvocationContext


class RuntimeAPIClient:
    """
    Minimal client for the Lambda Runtime API.
    """

    def __init__(self, config: RuntimeConfig, client: Optional[httpx.Client] = None):
        if not config.AWS_LAMBDA_RUNTIME_API:
            raise RuntimeConfigError()
        self.base_url = config.runtime_api_base_url
        # /invocation/next long-polls until the next event arrives.
        self.client = client or httpx.Client(
            verify=config.VERIFY_SSL,
            trust_env=False,
            timeout=httpx.Timeout(10.0, read=config.RUNTIME_NEXT_TIMEOUT),
        )

    def next_invocation(self) -> Invocation:
        response = self.client.get(f"{self.base_url}/invocation/next")
        response.raise_for_status()

        headers = response.headers
        context = InvocationContext(
            aws_request_id=headers["Lambda-Runtime-Aws-Request-Id"],
            deadline_ms=int(headers.get("Lambda-Runtime-Deadline-Ms", "0")),
            invoked_function_arn=headers.get("Lambda-Runtime-Invoked-Function-Arn", ""),
            trace_id=headers.get("Lambda-Runtime-Trace-Id"),
            client_context=headers.get("Lambda-Runtime-Client-Context"),
            identity=headers.get("Lambda-Runtime-Cognito-Identity"),
        )
        return Invocation(event=response.json(), context=context)

    def post_response(self, request_id: str, payload: Dict[str, Any]) -> None:
        response = self.client.post(f"{self.base_url}/invocation/{request_id}/response", json=payload)
        response.raise_for_status()

    def post_error(self, request_id: str, exc: BaseException) -> None:
        error_type = type(exc).__name__
        payload = {
            "errorMessage": str(exc),
            "errorType": error_type,
            "stackTrace": traceback.format_tb(exc.__traceback__),
        }
        response = self.client.post(
            f"{self.base_url}/invocation/{request_id}/error",
            json=payload,
            headers={"Lambda-Runtime-Function-Error-Type": f"Unhandled.{error_type}"},
        )
        response.raise_for_status()

    def close(self) -> None:
        self.client.close()


class RuntimeLoop:
    """Fetch, invoke, report; one invocation at a time."""

    def __init__(self, entry: EntryPoint, client: RuntimeAPIClient):
        self.entry = entry
        self.client = client

    def run_once(self) -> None:
        invocation = self.client.next_invocation()
        context = invocation.context

        request_context.clear_request_context()
        request_context.set_request_id(context.aws_request_id)
        if context.trace_id:
            request_context.set_trace_id(context.trace_id)
            os.environ["_X_AMZN_TRACE_ID"] = context.trace_id
        else:
            os.environ.pop("_X_AMZN_TRACE_ID", None)

        try:
            result = self.entry(invocation.event, context)
        except Exception as e:
            logger.error(
                f"Invocation failed: {e}",
                exc_info=True,
                extra={"error_type": type(e).__name__},
            )
            self.client.post_error(context.aws_request_id, e)
            return

        self.client.post_response(context.aws_request_id, result)

    def run_forever(self) -> None:
        logger.info("Runtime loop started", extra={"runtime_api": self.client.base_url})
        while True:
            self.run_once()


def start(handler: Handler, config: Optional[RuntimeConfig] = None) -> None:
    """
    Serve handler through the Lambda Runtime API. Blocks forever.

    Raises:
        RuntimeConfigError: AWS_LAMBDA_RUNTIME_API is not set
    """
    config = config or RuntimeConfig()
    setup_logging(config.LOGGING_CONFIG_PATH, config.LOG_LEVEL)

    client = RuntimeAPIClient(config)
    try:
        RuntimeLoop(wrap(handler), client).run_forever()
    finally:
        client.close()
