"""
Data model definitions package.

Aggregates Pydantic models for use in other modules.
"""

from .function_url import (
    LambdaFunctionURLRequest,
    LambdaFunctionURLRequestContext,
    LambdaFunctionURLRequestContextAuthorizerDescription,
    LambdaFunctionURLRequestContextAuthorizerIAMDescription,
    LambdaFunctionURLRequestContextHTTPDescription,
    LambdaFunctionURLResponse,
)

__all__ = [
    "LambdaFunctionURLRequest",
    "LambdaFunctionURLRequestContext",
    "LambdaFunctionURLRequestContextAuthorizerDescription",
    "LambdaFunctionURLRequestContextAuthorizerIAMDescription",
    "LambdaFunctionURLRequestContextHTTPDescription",
    "LambdaFunctionURLResponse",
]
