"""
DynamoDB client

Caller-owned entry point tying configuration, entities and tables together:

```python
client = DynamoClient(DynamoDBConfig.for_local_development())
User = client.define_entity(name="USER", computed={...})
users = client.define_table(name="users", primary_key="pk", entities=[User])

user = users.get({"primary_key": "USER#damsos"}).send().item()
user["name"] = "Gucio"
users.update(user).send()
```

The client lazily creates the boto3 resource, executes commands built by
tables and maps botocore ClientErrors to domain exceptions. There is no
module-level client: every client owns its own connection state.
"""

import logging
from typing import Any, Dict, Optional

import boto3
from botocore.exceptions import ClientError

from ..commands import Command, Result
from ..config import DynamoDBConfig
from ..exceptions import (
    ConflictError,
    ConnectionError,
    ItemNotFoundError,
    RetryableError,
    ValidationError,
)
from ..models import Entity, define_entity
from .table import Table, TableConfig

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "dynamodb_orm"
WRITE_OPERATIONS = ("put_item", "update_item", "delete_item")


# Error code -> message label, grouped by the exception raised
CONFLICT_CODES = {
    'ConditionalCheckFailedException': "Conditional check failed",
    'TransactionConflictException': "Transaction conflict",
}
VALIDATION_CODES = {
    'ValidationException': "Validation failed",
    'ItemCollectionSizeLimitExceededException': "Item collection size limit exceeded",
}
RETRYABLE_CODES = {
    'ProvisionedThroughputExceededException': "Throttling",
    'RequestLimitExceeded': "Throttling",
    'ThrottlingException': "Throttling",
    'InternalServerError': "Service unavailable",
    'ServiceUnavailable': "Service unavailable",
    'RequestTimeoutException': "Service unavailable",
}
AUTH_CODES = ('UnrecognizedClientException', 'AccessDeniedException', 'ExpiredTokenException')


def map_dynamodb_error(
    error: ClientError,
    operation: str,
    table_name: str,
    resource_id: Optional[Any] = None
) -> Exception:
    """Translate a botocore ClientError raised by a command into a domain exception.

    Args:
        error: The boto3 ClientError
        operation: DynamoDB operation name ("GetItem", "UpdateItem", ...)
        table_name: Full table name
        resource_id: Key of the item the command targeted, if any

    Returns:
        The exception to raise; the original error is kept as original_error
    """
    code = error.response['Error']['Code']
    target = f"{operation} on {table_name}"
    if resource_id:
        target += f" (resource: {resource_id})"
    details = f"{target}: {error.response['Error']['Message']}"

    if code in CONFLICT_CODES:
        return ConflictError(f"{CONFLICT_CODES[code]} - {details}", resource_id, original_error=error)
    if code in VALIDATION_CODES:
        return ValidationError(f"{VALIDATION_CODES[code]} - {details}", original_error=error)
    if code in RETRYABLE_CODES:
        return RetryableError(f"{RETRYABLE_CODES[code]} - {details}", original_error=error)
    if code == 'ResourceNotFoundException':
        # Single-item commands carry a key; anything else means the table itself is missing
        if resource_id:
            return ItemNotFoundError(table_name, {'resource_id': resource_id}, original_error=error)
        return ConnectionError(f"Table not found - {details}", original_error=error)
    if code in AUTH_CODES:
        return ConnectionError(f"Authentication/authorization failed - {details}", original_error=error)

    logger.warning(f"Unknown DynamoDB error code '{code}' mapped to ConnectionError")
    return ConnectionError(f"DynamoDB operation failed - {details}", original_error=error)


class DynamoClient:
    """Connection state plus factories for entities and tables."""

    def __init__(self, config: Optional[DynamoDBConfig] = None):
        """Initialize the client.

        Args:
            config: DynamoDB configuration, read from the environment when omitted
        """
        self.config = config or DynamoDBConfig.from_env()
        self._dynamodb = None
        self._tables: Dict[str, Any] = {}

        if self.config.enable_debug_logging:
            logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG)

    @property
    def dynamodb(self):
        """Lazy initialization of DynamoDB resource."""
        if self._dynamodb is None:
            try:
                session = boto3.Session(**self.config.session_kwargs())
                self._dynamodb = session.resource('dynamodb', **self.config.resource_kwargs())
                logger.debug(f"Created DynamoDB resource in {self.config.region_name} ({self.config.endpoint_url or 'AWS'})")
            except Exception as e:
                logger.error(f"Failed to create DynamoDB resource: {e}")
                raise ConnectionError(f"Failed to connect to DynamoDB: {e}", e) from e
        return self._dynamodb

    def table_resource(self, table_name: str):
        """Get (and cache) the boto3 Table resource for a full table name."""
        if table_name not in self._tables:
            try:
                self._tables[table_name] = self.dynamodb.Table(table_name)
            except ConnectionError:
                raise
            except Exception as e:
                logger.error(f"Failed to access table '{table_name}': {e}")
                raise ConnectionError(f"Failed to access table '{table_name}': {e}", e) from e
        return self._tables[table_name]

    def define_entity(self, *args: Any, **kwargs: Any) -> Entity:
        """Shortcut for :func:`dynamodb_orm.models.define_entity`."""
        return define_entity(*args, **kwargs)

    def define_table(self, config: Optional[TableConfig] = None, **kwargs: Any) -> Table:
        """Create a table bound to this client.

        Args:
            config: Table definition, or its fields as keyword arguments
        """
        if config is None:
            config = TableConfig(**kwargs)
        return Table(self, config)

    def send_command(self, command: Command) -> Result:
        """Execute a command and wrap its response.

        Raises:
            DynamoORMError: Mapped from the botocore ClientError
        """
        table = self.table_resource(command.table.name)
        request = command.input()
        logger.debug(f"{command.operation_name} on {command.table.name}: {request}")
        try:
            output = getattr(table, command.operation)(**request)
        except ClientError as e:
            raise map_dynamodb_error(e, command.operation_name, command.table.name, request.get('Key')) from e

        if command.operation in WRITE_OPERATIONS:
            logger.info(f"{command.operation_name} completed on {command.table.name}: {request.get('Key') or request.get('Item')}")
        return command.result(output)
