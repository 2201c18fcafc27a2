"""
dynamodb_orm

Typed entities with change tracking for DynamoDB. Records are plain-looking
mappings whose mutations are reduced into minimal update expressions, and
tables build get/put/query/update/delete requests for them.
"""

from .config import DynamoDBConfig
from .exceptions import (
    ConflictError,
    ConnectionError,
    DynamoORMError,
    ItemNotFoundError,
    MissingMetadataError,
    RetryableError,
    SchemaViolationError,
    ValidationError,
)
from .models import (
    ChangeStatus,
    ComputedGetter,
    Entity,
    EntityConfig,
    EntityRecord,
    Key,
    UpdateData,
    calculate_update_data,
    define_entity,
)
from .core import (
    DynamoClient,
    IndexConfig,
    Table,
    TableConfig,
)
from .utils import marshall_item, unmarshall_item

__version__ = "1.0.0"
__all__ = [
    # Configuration
    "DynamoDBConfig",

    # Exceptions
    "ConflictError",
    "ConnectionError",
    "DynamoORMError",
    "ItemNotFoundError",
    "MissingMetadataError",
    "RetryableError",
    "SchemaViolationError",
    "ValidationError",

    # Entities and change tracking
    "ChangeStatus",
    "ComputedGetter",
    "Entity",
    "EntityConfig",
    "EntityRecord",
    "Key",
    "UpdateData",
    "calculate_update_data",
    "define_entity",

    # Client and tables
    "DynamoClient",
    "IndexConfig",
    "Table",
    "TableConfig",

    # Marshalling
    "marshall_item",
    "unmarshall_item",
]
