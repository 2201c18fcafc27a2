import os
from unittest.mock import patch

import pytest

from dynamodb_orm.config import DynamoDBConfig


class TestDynamoDBConfig:
    """Test cases for DynamoDBConfig."""

    def test_default_config(self):
        """Test default configuration values."""
        with patch.dict(os.environ, {"AWS_REGION": "us-west-2", "ENVIRONMENT": "dev"}):
            config = DynamoDBConfig()

            assert config.region_name == "us-west-2"
            assert config.max_pool_connections == 50
            assert config.retries == 3
            assert config.timeout_seconds == 30.0
            assert config.environment == "dev"

    def test_config_from_env_vars(self):
        """Test configuration from environment variables."""
        env_vars = {
            "AWS_ACCESS_KEY_ID": "test_key",
            "AWS_SECRET_ACCESS_KEY": "test_secret",
            "AWS_REGION": "eu-west-1",
            "DYNAMODB_ENDPOINT_URL": "http://localhost:8000",
            "DYNAMODB_TABLE_PREFIX": "test",
            "ENVIRONMENT": "staging",
            "DYNAMODB_DEBUG_LOGGING": "true",
        }

        with patch.dict(os.environ, env_vars):
            config = DynamoDBConfig.from_env()

            assert config.aws_access_key_id == "test_key"
            assert config.aws_secret_access_key == "test_secret"
            assert config.region_name == "eu-west-1"
            assert config.endpoint_url == "http://localhost:8000"
            assert config.table_prefix == "test"
            assert config.environment == "staging"
            assert config.enable_debug_logging is True

    def test_table_name_generation(self):
        """Test table name generation with prefix and environment."""
        config = DynamoDBConfig(
            table_prefix="myapp",
            environment="dev"
        )

        assert config.get_table_name("users") == "myapp_dev_users"

    def test_table_name_generation_prod(self):
        """Test table name generation in production (no environment part)."""
        config = DynamoDBConfig(
            table_prefix="myapp",
            environment="prod"
        )

        assert config.get_table_name("users") == "myapp_users"

    def test_table_name_generation_no_prefix(self):
        """Test table name generation without prefix."""
        config = DynamoDBConfig(table_prefix="", environment="dev")

        assert config.get_table_name("users") == "dev_users"

    def test_local_development_config(self):
        """Test local development configuration."""
        config = DynamoDBConfig.for_local_development()

        assert config.aws_access_key_id == "local"
        assert config.aws_secret_access_key == "local"
        assert config.endpoint_url == "http://localhost:8000"
        assert config.environment == "dev"
        assert config.enable_debug_logging is True

    def test_environment_validation(self):
        """Test environment validation."""
        with pytest.raises(ValueError, match="Environment must be one of"):
            DynamoDBConfig(environment="invalid")

    def test_region_validation(self):
        """Test region validation."""
        with pytest.raises(ValueError, match="AWS region name is required"):
            DynamoDBConfig(region_name="")

    def test_assignment_is_validated(self):
        config = DynamoDBConfig(environment="dev")

        with pytest.raises(ValueError, match="Environment must be one of"):
            config.environment = "qa"

    def test_session_kwargs(self):
        config = DynamoDBConfig(aws_access_key_id="key", aws_secret_access_key="secret", region_name="eu-west-1")

        assert config.session_kwargs() == {
            'aws_access_key_id': "key",
            'aws_secret_access_key': "secret",
            'region_name': "eu-west-1",
        }

    def test_resource_kwargs(self):
        config = DynamoDBConfig(region_name="eu-west-1", endpoint_url=None, retries=5, timeout_seconds=10.0)

        kwargs = config.resource_kwargs()

        assert kwargs['region_name'] == "eu-west-1"
        assert 'endpoint_url' not in kwargs
        assert kwargs['config'].retries == {'max_attempts': 5}
        assert kwargs['config'].read_timeout == 10.0
        assert kwargs['config'].max_pool_connections == 50

    def test_resource_kwargs_with_local_endpoint(self):
        kwargs = DynamoDBConfig.for_local_development("http://localhost:4566").resource_kwargs()

        assert kwargs['endpoint_url'] == "http://localhost:4566"
