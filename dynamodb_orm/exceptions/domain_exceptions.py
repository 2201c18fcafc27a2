"""
Domain-Specific Exceptions for dynamodb_orm

Organized by category:
1. Entity Tracking Errors
2. Data Validation Errors
3. Resource Not Found Errors
4. Conflict and Infrastructure Errors
"""

from typing import Any, Dict, Optional

from .base import DynamoORMError


# =============================================================================
# Entity Tracking Errors
# =============================================================================

class SchemaViolationError(DynamoORMError):
    """Raised when a record is mutated in a way its entity schema forbids.

    Used for:
    - Assigning to a computed attribute
    - Deleting a computed attribute
    """

    def __init__(self, entity_name: str, attribute: str, reason: str = "is a computed attribute and cannot be modified"):
        self.entity_name = entity_name
        self.attribute = attribute
        message = f"Attribute '{attribute}' of entity '{entity_name}' {reason}"
        context = {
            'entity': entity_name,
            'attribute': attribute
        }
        super().__init__(message, None, context)


class MissingMetadataError(DynamoORMError):
    """Raised when change tracking is requested for a value that is not a tracked record."""

    def __init__(self, value: Any):
        self.value_type = type(value).__name__
        message = f"Provided value of type '{self.value_type}' does not carry entity metadata"
        super().__init__(message, None, {'value_type': self.value_type})


# =============================================================================
# Data Validation Errors
# =============================================================================

class ValidationError(DynamoORMError):
    """Raised when request data is invalid.

    Used for:
    - Missing primary/sort key values
    - Empty update data
    - Items without a registered entity type
    - DynamoDB ValidationException responses
    """

    def __init__(self, message: str, errors: Optional[Dict[str, Any]] = None, original_error: Optional[Exception] = None):
        """Initialize validation error.

        Args:
            message: Human-readable error message
            errors: Dictionary of field-level validation errors
            original_error: The original exception that caused this error
        """
        self.errors = errors or {}
        context = {}
        if self.errors:
            context['validation_errors'] = self.errors
        super().__init__(message, original_error, context)


# =============================================================================
# Resource Not Found Errors
# =============================================================================

class ItemNotFoundError(DynamoORMError):
    """Raised when a specific item or resource is not found in DynamoDB."""

    def __init__(self, table_name: str, key: dict, original_error: Optional[Exception] = None):
        """Initialize item not found error.

        Args:
            table_name: Name of the DynamoDB table
            key: The key that was not found
            original_error: The original exception that caused this error
        """
        self.table_name = table_name
        self.key = key
        message = f"Item not found in table '{table_name}' with key: {key}"
        context = {
            'table_name': table_name,
            'key': key
        }
        super().__init__(message, original_error, context)


# =============================================================================
# Conflict and Infrastructure Errors
# =============================================================================

class ConflictError(DynamoORMError):
    """Raised when a conditional operation or transaction conflicts with stored data."""

    def __init__(self, message: str, resource_id: Optional[str] = None, original_error: Optional[Exception] = None):
        self.resource_id = resource_id
        context = {}
        if resource_id:
            context['resource_id'] = resource_id
        super().__init__(message, original_error, context)


class ConnectionError(DynamoORMError):
    """Raised when connection to DynamoDB fails.

    Used for:
    - Network connectivity issues
    - Authentication/authorization failures
    - Unknown DynamoDB error codes
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, original_error, context)


class RetryableError(DynamoORMError):
    """Raised when an operation fails due to throttling or temporary unavailability.

    botocore has already used up the configured ``retries`` when this is raised.
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message, original_error)
