"""
Conversion between Python values and DynamoDB document values.

The tracking layer keeps datetimes as opaque leaves; converting them to a wire
format happens here, right before a request is built, and in reverse when
items come back from the table.

DynamoDB Requirements:
- datetime -> ISO string in UTC with millisecond precision ('...T10:00:00.000Z')
- float -> Decimal (boto3 refuses Python floats)
- None -> dropped from maps (absent attribute, not a NULL value)
- Decimal -> preserved (boto3 handles the Number type)
"""

import re
from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict

from .timezone import format_iso, parse_iso

ISO_DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$')


def marshall_item(item: Mapping) -> Dict[str, Any]:
    """Convert a record or mapping into a DynamoDB-compatible item.

    Args:
        item: Tracked record or any mapping of attribute names to values

    Returns:
        Plain dictionary ready for boto3
    """
    return {key: marshall(value) for key, value in item.items() if value is not None}


def marshall(value: Any) -> Any:
    """Recursively convert a single value for DynamoDB storage."""
    if isinstance(value, datetime):
        return format_iso(value)
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, Mapping):
        return marshall_item(value)
    if isinstance(value, (list, tuple)):
        return [marshall(element) for element in value]
    return value


def unmarshall_item(item: Mapping) -> Dict[str, Any]:
    """Convert a DynamoDB item back into Python values.

    Args:
        item: Item as returned by boto3

    Returns:
        Dictionary with ISO date strings turned back into UTC datetimes
    """
    return {key: unmarshall(value) for key, value in item.items()}


def unmarshall(value: Any) -> Any:
    """Recursively convert a single value read from DynamoDB."""
    if isinstance(value, str):
        if ISO_DATE_PATTERN.match(value):
            try:
                return parse_iso(value)
            except ValueError:
                # Looks like a date but is not a valid one (e.g. February 30th)
                return value
        return value
    if isinstance(value, Mapping):
        return unmarshall_item(value)
    if isinstance(value, list):
        return [unmarshall(element) for element in value]
    return value
