import copy

import pytest

from lambdaurl.core import request_context

FUNCTION_URL_EVENT = {
    "version": "2.0",
    "rawPath": "/items",
    "rawQueryString": "",
    "cookies": ["session=abc"],
    "headers": {
        "accept": "application/json",
        "host": "api.example.com",
        "x-forwarded-for": "203.0.113.7",
    },
    "requestContext": {
        "accountId": "anonymous",
        "apiId": "abcdefghijklmnop",
        "domainName": "api.example.com",
        "domainPrefix": "api",
        "requestId": "c7e1b2a0-0000-4000-8000-000000000001",
        "time": "17/Oct/2026:12:00:00 +0000",
        "timeEpoch": 1792238400000,
        "http": {
            "method": "GET",
            "path": "/items",
            "protocol": "HTTP/1.1",
            "sourceIp": "203.0.113.7",
            "userAgent": "pytest",
        },
    },
    "body": "",
    "isBase64Encoded": False,
}


@pytest.fixture
def function_url_event():
    """A fresh Function URL event dict per test."""
    return copy.deepcopy(FUNCTION_URL_EVENT)


@pytest.fixture(autouse=True)
def _clear_request_context():
    request_context.clear_request_context()
    yield
    request_context.clear_request_context()
