"""
Request builders for single-table operations.

Each command shapes the keyword arguments of one boto3 Table call and wraps
the response in a result that rehydrates items into entity records.
"""

from .base import Command, Result
from .delete import DeleteItemCommand, DeleteResult
from .get import GetItemCommand, GetResult
from .put import PutItemCommand, PutResult
from .query import QueryItemsCommand, QueryResult
from .update import UpdateItemCommand, UpdateResult, update_data_to_input

__all__ = [
    "Command",
    "Result",
    "DeleteItemCommand",
    "DeleteResult",
    "GetItemCommand",
    "GetResult",
    "PutItemCommand",
    "PutResult",
    "QueryItemsCommand",
    "QueryResult",
    "UpdateItemCommand",
    "UpdateResult",
    "update_data_to_input",
]
