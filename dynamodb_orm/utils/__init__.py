"""
Utility functions for dynamodb_orm.

- Marshalling between Python values and DynamoDB document values
- UTC timestamp helpers
"""

from .marshall import marshall, marshall_item, unmarshall, unmarshall_item
from .timezone import format_iso, parse_iso, to_utc, utcnow

__all__ = [
    "marshall",
    "marshall_item",
    "unmarshall",
    "unmarshall_item",
    "format_iso",
    "parse_iso",
    "to_utc",
    "utcnow",
]
