# lambdaurl/models/function_url.py

"""
Pydantic models for AWS Lambda Function URL event structure.

Reference: https://docs.aws.amazon.com/lambda/latest/dg/urls-invocation.html#urls-payloads

Every request field defaults to its zero value because the dispatcher omits
empty fields. Unknown fields are kept (extra="allow") so that the original
event can be handed to handler code unchanged.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LambdaFunctionURLRequestContextHTTPDescription(BaseModel):
    """HTTP description of the incoming request."""

    method: str = ""
    path: str = ""
    protocol: str = ""
    sourceIp: str = ""
    userAgent: str = ""

    model_config = ConfigDict(extra="allow")


class LambdaFunctionURLRequestContextAuthorizerIAMDescription(BaseModel):
    """IAM authorizer description (AWS_IAM auth type only)."""

    accessKey: str = ""
    accountId: str = ""
    callerId: str = ""
    cognitoIdentity: Optional[Dict[str, Any]] = None
    principalOrgId: Optional[str] = None
    userArn: str = ""
    userId: str = ""

    model_config = ConfigDict(extra="allow")


class LambdaFunctionURLRequestContextAuthorizerDescription(BaseModel):
    """Authorizer object."""

    iam: Optional[LambdaFunctionURLRequestContextAuthorizerIAMDescription] = None

    model_config = ConfigDict(extra="allow")


class LambdaFunctionURLRequestContext(BaseModel):
    """Request context object."""

    accountId: str = ""
    requestId: str = ""
    authorizer: Optional[LambdaFunctionURLRequestContextAuthorizerDescription] = None
    apiId: str = ""
    domainName: str = ""
    domainPrefix: str = ""
    time: str = ""
    timeEpoch: int = 0
    http: LambdaFunctionURLRequestContextHTTPDescription = Field(
        default_factory=LambdaFunctionURLRequestContextHTTPDescription
    )

    model_config = ConfigDict(extra="allow")


class LambdaFunctionURLRequest(BaseModel):
    """
    AWS Lambda Function URL request event (payload format 2.0).

    Headers carry a single combined value per name; multi-value headers are
    already collapsed by the dispatcher. Cookies arrive in their own list.
    """

    version: str = ""
    rawPath: str = ""
    rawQueryString: str = ""
    cookies: Optional[List[str]] = None
    headers: Dict[str, str] = Field(default_factory=dict)
    queryStringParameters: Optional[Dict[str, str]] = None
    requestContext: LambdaFunctionURLRequestContext = Field(
        default_factory=LambdaFunctionURLRequestContext
    )
    body: str = ""
    isBase64Encoded: bool = False

    model_config = ConfigDict(extra="allow", frozen=True)

    @field_validator("version", "rawPath", "rawQueryString", "body", mode="before")
    @classmethod
    def _null_to_empty_string(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("headers", mode="before")
    @classmethod
    def _null_to_empty_headers(cls, value: Any) -> Any:
        return {} if value is None else value


class LambdaFunctionURLResponse(BaseModel):
    """
    AWS Lambda Function URL response (buffered mode).

    Use model_dump() to convert to the dict returned to the dispatcher.
    """

    statusCode: int = 200
    headers: Dict[str, str] = Field(default_factory=dict)
    body: str = ""
    isBase64Encoded: bool = False
    cookies: List[str] = Field(default_factory=list)
