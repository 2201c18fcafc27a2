# Base exception class
from .base import DynamoORMError

from .domain_exceptions import (
    SchemaViolationError,
    MissingMetadataError,
    ValidationError,
    ItemNotFoundError,
    ConflictError,
    ConnectionError,
    RetryableError,
)

__all__ = [
    "DynamoORMError",
    "ConflictError",
    "ConnectionError",
    "ItemNotFoundError",
    "MissingMetadataError",
    "RetryableError",
    "SchemaViolationError",
    "ValidationError",
]
