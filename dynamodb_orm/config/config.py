"""
Client configuration.

Every field falls back to an environment variable (a ``.env`` file is loaded
first when present), so ``DynamoDBConfig()`` alone is enough in deployed
environments:

    AWS_ACCESS_KEY_ID / AWS_SECRET_ACCESS_KEY   credentials (optional, boto3 chain otherwise)
    AWS_REGION                                  region, "us-east-1" by default
    DYNAMODB_ENDPOINT_URL                       DynamoDB Local / LocalStack endpoint
    DYNAMODB_TABLE_PREFIX                       prefix of every table name
    ENVIRONMENT                                 dev | test | staging | prod
    DYNAMODB_DEBUG_LOGGING                      "true" to log tracking and requests
"""

import os
from typing import Any, Dict, Optional

from botocore.config import Config
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

load_dotenv()

VALID_ENVIRONMENTS = ['dev', 'test', 'staging', 'prod']
LOCAL_ENDPOINT_URL = "http://localhost:8000"


def _env(name: str, default: Optional[str] = None):
    return lambda: os.getenv(name, default)


class DynamoDBConfig(BaseModel):
    """Connection settings and table naming for a DynamoClient."""

    model_config = ConfigDict(validate_assignment=True)

    # Credentials and endpoint
    aws_access_key_id: Optional[str] = Field(default_factory=_env("AWS_ACCESS_KEY_ID"))
    aws_secret_access_key: Optional[str] = Field(default_factory=_env("AWS_SECRET_ACCESS_KEY"))
    region_name: str = Field(default_factory=_env("AWS_REGION", "us-east-1"))
    endpoint_url: Optional[str] = Field(
        default_factory=_env("DYNAMODB_ENDPOINT_URL"),
        description="Overrides the AWS endpoint, e.g. for DynamoDB Local"
    )

    # Table naming
    table_prefix: str = Field(default_factory=_env("DYNAMODB_TABLE_PREFIX", ""))
    environment: str = Field(
        default_factory=_env("ENVIRONMENT", "dev"),
        description="Deployment environment, part of every table name except in prod"
    )

    # botocore client settings
    max_pool_connections: int = 50
    retries: int = Field(3, description="Attempts botocore makes before giving up; no retry logic of our own")
    timeout_seconds: float = 30.0

    enable_debug_logging: bool = Field(
        default_factory=lambda: os.getenv("DYNAMODB_DEBUG_LOGGING", "false").lower() == "true"
    )

    @field_validator('region_name')
    @classmethod
    def validate_region(cls, v):
        if not v:
            raise ValueError("AWS region name is required")
        return v

    @field_validator('environment')
    @classmethod
    def validate_environment(cls, v):
        if v not in VALID_ENVIRONMENTS:
            raise ValueError(f"Environment must be one of: {VALID_ENVIRONMENTS}")
        return v

    def get_table_name(self, base_name: str) -> str:
        """Resolve the physical name of a table.

        Examples:
            >>> DynamoDBConfig(table_prefix="shop", environment="dev").get_table_name("users")
            'shop_dev_users'
            >>> DynamoDBConfig(table_prefix="shop", environment="prod").get_table_name("users")
            'shop_users'
        """
        parts = [self.table_prefix] if self.table_prefix else []
        if self.environment != "prod":
            parts.append(self.environment)
        parts.append(base_name)
        return "_".join(parts)

    def session_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for ``boto3.Session``."""
        return {
            'aws_access_key_id': self.aws_access_key_id,
            'aws_secret_access_key': self.aws_secret_access_key,
            'region_name': self.region_name,
        }

    def resource_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for ``session.resource('dynamodb', ...)``."""
        kwargs: Dict[str, Any] = {
            'region_name': self.region_name,
            'config': Config(
                retries={'max_attempts': self.retries},
                max_pool_connections=self.max_pool_connections,
                read_timeout=self.timeout_seconds,
                connect_timeout=self.timeout_seconds,
            ),
        }
        if self.endpoint_url:
            kwargs['endpoint_url'] = self.endpoint_url
        return kwargs

    @classmethod
    def from_env(cls) -> 'DynamoDBConfig':
        return cls()

    @classmethod
    def for_local_development(cls, endpoint_url: str = LOCAL_ENDPOINT_URL) -> 'DynamoDBConfig':
        """Configuration for DynamoDB Local with dummy credentials and debug logging."""
        return cls(
            aws_access_key_id="local",
            aws_secret_access_key="local",
            region_name="us-east-1",
            endpoint_url=endpoint_url,
            environment="dev",
            enable_debug_logging=True
        )
