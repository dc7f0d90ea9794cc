"""
Runtime configuration definition.

Loads configuration from environment variables and provides a Pydantic model.
Uses pydantic-settings for type safety and defaults.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from lambdaurl.core.logging_config import DEFAULT_LOGGING_CONFIG


class RuntimeConfig(BaseSettings):
    """
    Settings for the Lambda Runtime API loop started by lambdaurl.start().
    """

    LOG_LEVEL: str = Field(default="INFO", description="Log level")
    LOGGING_CONFIG_PATH: str = Field(default=DEFAULT_LOGGING_CONFIG, description="Logging config file path")

    # Set by the Lambda execution environment, e.g. "127.0.0.1:9001".
    AWS_LAMBDA_RUNTIME_API: str = Field(default="", description="Lambda Runtime API host:port")
    RUNTIME_API_VERSION: str = Field(default="2018-06-01", description="Runtime API version")
    RUNTIME_NEXT_TIMEOUT: Optional[float] = Field(
        default=None, description="Read timeout for /invocation/next (None waits forever)"
    )
    VERIFY_SSL: bool = Field(default=False, description="Whether to verify SSL certificates")

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )

    @property
    def runtime_api_base_url(self) -> str:
        return f"http://{self.AWS_LAMBDA_RUNTIME_API}/{self.RUNTIME_API_VERSION}/runtime"
