"""
Test configuration and fixtures for dynamodb_orm.

Provides entity definitions shared across unit tests and a moto-backed
DynamoDB table for integration tests.
"""

from datetime import datetime, timezone

import boto3
import pytest
from moto import mock_aws

from dynamodb_orm import (
    ComputedGetter,
    DynamoClient,
    DynamoDBConfig,
    define_entity,
)


def _age(record):
    return datetime(2023, 2, 4).year - record['birthdate'].year


@pytest.fixture
def user_entity():
    """Entity with a key derived from login and an age derived from birthdate."""
    return define_entity(
        name="TEST",
        computed={
            "pk": ComputedGetter(depends_on=["login"], get=lambda r: f"TEST#{r['login']}"),
            "age": ComputedGetter(depends_on=["birthdate"], get=_age),
        },
    )


@pytest.fixture
def user(user_entity):
    return user_entity({
        "name": "Damian",
        "login": "damsos",
        "email": "dam@wp.pl",
        "birthdate": datetime(1986, 1, 29, tzinfo=timezone.utc),
        "favColors": ["black", "red"],
        "address": {
            "city": "Lisbon",
            "street": "Avenida",
        },
    })


@pytest.fixture
def dynamodb_config():
    """DynamoDB configuration for testing."""
    return DynamoDBConfig(
        aws_access_key_id="test_key",
        aws_secret_access_key="test_secret",
        region_name="us-east-1",
        endpoint_url=None,
        environment="test",
        table_prefix="orm",
        enable_debug_logging=False,
    )


@pytest.fixture
def client(dynamodb_config):
    return DynamoClient(dynamodb_config)


@pytest.fixture
def account_entity():
    """Entity keyed by id (partition) and email (sort)."""
    return define_entity(
        name="ACCOUNT",
        computed={
            "pk": {"depends_on": ["id"], "get": lambda r: f"ACCOUNT#{r['id']}"},
            "sk": {"depends_on": ["email"], "get": lambda r: f"EMAIL#{r['email']}" if r.get('email') else None},
        },
    )


@pytest.fixture
def account_table(client, account_entity):
    return client.define_table(
        name="accounts",
        primary_key="pk",
        sort_key="sk",
        indexes={"ByOrg": {"primary_key": "orgId", "sort_key": "email"}},
        entities=[account_entity],
    )


@pytest.fixture
def mock_dynamodb_resource():
    """Mock DynamoDB resource."""
    with mock_aws():
        yield boto3.resource('dynamodb', region_name='us-east-1')


@pytest.fixture
def accounts_dynamodb_table(mock_dynamodb_resource):
    """Create the accounts table with its ByOrg index."""
    return mock_dynamodb_resource.create_table(
        TableName='orm_test_accounts',
        KeySchema=[
            {'AttributeName': 'pk', 'KeyType': 'HASH'},
            {'AttributeName': 'sk', 'KeyType': 'RANGE'}
        ],
        AttributeDefinitions=[
            {'AttributeName': 'pk', 'AttributeType': 'S'},
            {'AttributeName': 'sk', 'AttributeType': 'S'},
            {'AttributeName': 'orgId', 'AttributeType': 'S'},
            {'AttributeName': 'email', 'AttributeType': 'S'}
        ],
        GlobalSecondaryIndexes=[
            {
                'IndexName': 'ByOrg',
                'KeySchema': [
                    {'AttributeName': 'orgId', 'KeyType': 'HASH'},
                    {'AttributeName': 'email', 'KeyType': 'RANGE'}
                ],
                'Projection': {'ProjectionType': 'ALL'},
                'ProvisionedThroughput': {'ReadCapacityUnits': 5, 'WriteCapacityUnits': 5}
            }
        ],
        BillingMode='PROVISIONED',
        ProvisionedThroughput={'ReadCapacityUnits': 5, 'WriteCapacityUnits': 5}
    )
