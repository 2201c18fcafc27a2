from typing import Any, Dict, List, Optional

from ..exceptions import ValidationError
from ..models import EntityRecord
from ..utils import marshall
from .base import Command, Result


class QueryItemsCommand(Command):
    """Query by key condition.

    The condition references names and values by placeholder, ``#name`` and
    ``:name``, for every key of ``values``:

        table.query("#orgId = :orgId", {"orgId": "ACME"}).index("ByOrg")
    """

    operation = "query"
    operation_name = "Query"

    def __init__(self, db, table, condition: str, values: Dict[str, Any]):
        super().__init__(db, table)
        self.condition = condition
        self.values = values

    def build_input(self) -> Dict[str, Any]:
        return {
            'KeyConditionExpression': self.condition,
            'ExpressionAttributeNames': {f"#{key}": key for key in self.values},
            'ExpressionAttributeValues': {f":{key}": marshall(value) for key, value in self.values.items()},
        }

    def index(self, index_name: str) -> "QueryItemsCommand":
        """Run the query against a secondary index declared on the table."""
        if index_name not in self.table.config().indexes:
            raise ValidationError(f"Index {index_name} is not defined on the table {self.table.name}")
        self.opts['IndexName'] = index_name
        return self

    def result(self, output: Dict[str, Any]) -> "QueryResult":
        return QueryResult(output, self.table)


class QueryResult(Result):
    def items(self) -> List[EntityRecord]:
        return [self._to_record(item) for item in self.raw() or []]

    def raw(self) -> Optional[List[Dict[str, Any]]]:
        return self.output.get('Items')
