import json
import os
import time
from unittest.mock import patch

import httpx
import pytest
import respx

from lambdaurl.config import RuntimeConfig
from lambdaurl.core import request_context
from lambdaurl.core.translator import wrap
from lambdaurl.exceptions import RuntimeConfigError
from lambdaurl.runtime import InvocationContext, RuntimeAPIClient, RuntimeLoop, start

BASE_URL = "http://127.0.0.1:9001/2018-06-01/runtime"
REQUEST_ID = "8476a536-e9f4-11e8-9739-2dfe598c3fcd"
TRACE_ID = "Root=1-5bef4de7-ad49b0e87f6ef6c87fc2e700;Parent=9a9197af755a6419;Sampled=1"


@pytest.fixture
def config(monkeypatch):
    # run_once exports the trace header; restore the environment afterwards.
    monkeypatch.setenv("_X_AMZN_TRACE_ID", "")
    return RuntimeConfig(AWS_LAMBDA_RUNTIME_API="127.0.0.1:9001", LOGGING_CONFIG_PATH="missing.yml")


def _mock_next(event, trace_id=TRACE_ID):
    headers = {
        "Lambda-Runtime-Aws-Request-Id": REQUEST_ID,
        "Lambda-Runtime-Deadline-Ms": "1542409706888",
        "Lambda-Runtime-Invoked-Function-Arn": "arn:aws:lambda:us-east-2:123456789012:function:hello",
    }
    if trace_id is not None:
        headers["Lambda-Runtime-Trace-Id"] = trace_id
    return respx.get(f"{BASE_URL}/invocation/next").mock(
        return_value=httpx.Response(200, json=event, headers=headers)
    )


def test_client_requires_runtime_api():
    with pytest.raises(RuntimeConfigError):
        RuntimeAPIClient(RuntimeConfig(AWS_LAMBDA_RUNTIME_API=""))


def test_start_requires_runtime_api():
    with pytest.raises(RuntimeConfigError):
        start(lambda w, r: None, RuntimeConfig(AWS_LAMBDA_RUNTIME_API="", LOGGING_CONFIG_PATH="missing.yml"))


@respx.mock
def test_next_invocation_builds_context(config, function_url_event):
    _mock_next(function_url_event)

    invocation = RuntimeAPIClient(config).next_invocation()

    assert invocation.event == function_url_event
    context = invocation.context
    assert context.aws_request_id == REQUEST_ID
    assert context.deadline_ms == 1542409706888
    assert context.invoked_function_arn.endswith(":function:hello")
    assert context.trace_id == TRACE_ID


@respx.mock
def test_run_once_posts_translated_response(config, function_url_event):
    _mock_next(function_url_event)
    response_route = respx.post(f"{BASE_URL}/invocation/{REQUEST_ID}/response").mock(
        return_value=httpx.Response(202)
    )
    seen = {}

    def handler(writer, request):
        seen["request_id"] = request_context.get_request_id()
        seen["trace_id"] = request_context.get_trace_id()
        seen["context"] = request.context
        writer.headers.add("Set-Cookie", "a=1")
        writer.write(b"hello")

    RuntimeLoop(wrap(handler), RuntimeAPIClient(config)).run_once()

    assert response_route.called
    payload = json.loads(response_route.calls.last.request.content)
    assert payload["statusCode"] == 200
    assert payload["body"] == "hello"
    assert payload["cookies"] == ["a=1"]
    assert seen["request_id"] == REQUEST_ID
    assert seen["trace_id"] == TRACE_ID
    assert isinstance(seen["context"], InvocationContext)


@respx.mock
def test_run_once_clears_stale_trace_env(config, function_url_event, monkeypatch):
    monkeypatch.setenv("_X_AMZN_TRACE_ID", "Root=1-stale")
    _mock_next(function_url_event, trace_id=None)
    respx.post(f"{BASE_URL}/invocation/{REQUEST_ID}/response").mock(return_value=httpx.Response(202))
    seen = {}

    def handler(writer, request):
        seen["env"] = os.environ.get("_X_AMZN_TRACE_ID")
        seen["trace_id"] = request_context.get_trace_id()

    RuntimeLoop(wrap(handler), RuntimeAPIClient(config)).run_once()

    assert seen == {"env": None, "trace_id": None}
    assert "_X_AMZN_TRACE_ID" not in os.environ


@respx.mock
def test_run_once_posts_conversion_error(config, function_url_event):
    function_url_event["requestContext"]["http"]["method"] = "BAD METHOD"
    _mock_next(function_url_event)
    error_route = respx.post(f"{BASE_URL}/invocation/{REQUEST_ID}/error").mock(
        return_value=httpx.Response(202)
    )

    RuntimeLoop(wrap(lambda w, r: None), RuntimeAPIClient(config)).run_once()

    assert error_route.called
    request = error_route.calls.last.request
    assert request.headers["Lambda-Runtime-Function-Error-Type"] == "Unhandled.RequestConversionError"
    payload = json.loads(request.content)
    assert payload["errorType"] == "RequestConversionError"
    assert "failed to convert Lambda request" in payload["errorMessage"]
    assert isinstance(payload["stackTrace"], list)


@respx.mock
def test_run_once_posts_handler_error(config, function_url_event):
    _mock_next(function_url_event)
    error_route = respx.post(f"{BASE_URL}/invocation/{REQUEST_ID}/error").mock(
        return_value=httpx.Response(202)
    )

    def handler(writer, request):
        raise KeyError("missing")

    RuntimeLoop(wrap(handler), RuntimeAPIClient(config)).run_once()

    payload = json.loads(error_route.calls.last.request.content)
    assert payload["errorType"] == "KeyError"


def test_start_runs_loop_until_it_stops(config):
    with patch.object(RuntimeLoop, "run_forever", side_effect=KeyboardInterrupt) as run_forever:
        with pytest.raises(KeyboardInterrupt):
            start(lambda w, r: None, config)

    run_forever.assert_called_once()


def test_remaining_time():
    deadline = int(time.time() * 1000) + 5000
    context = InvocationContext(aws_request_id="id", deadline_ms=deadline)

    assert 0 < context.get_remaining_time_in_millis() <= 5000
    assert InvocationContext(aws_request_id="id", deadline_ms=0).get_remaining_time_in_millis() == 0


def test_context_reads_function_metadata_from_env(monkeypatch):
    monkeypatch.delenv("AWS_LAMBDA_FUNCTION_VERSION", raising=False)
    monkeypatch.setenv("AWS_LAMBDA_FUNCTION_NAME", "hello")
    monkeypatch.setenv("AWS_LAMBDA_FUNCTION_MEMORY_SIZE", "128")

    context = InvocationContext(aws_request_id="id")

    assert context.function_name == "hello"
    assert context.memory_limit_in_mb == "128"
    assert context.function_version == "$LATEST"
