"""
Core infrastructure components.

- DynamoClient: caller-owned connection, command execution and error mapping
- Table / TableConfig: table definitions, key composition and command building
"""

from .client import DynamoClient, map_dynamodb_error
from .table import IndexConfig, Table, TableConfig, match_key_to_table

__all__ = [
    "DynamoClient",
    "map_dynamodb_error",
    "IndexConfig",
    "Table",
    "TableConfig",
    "match_key_to_table",
]
