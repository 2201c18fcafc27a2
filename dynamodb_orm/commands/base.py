"""
Base classes for table commands and their results.

A command only shapes the boto3 Table call (``operation`` + ``input()``);
executing it and mapping errors is the client's job (``DynamoClient.send_command``).
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

from ..exceptions import ValidationError
from ..models import TYPE_ATTRIBUTE, EntityRecord
from ..utils import unmarshall_item

if TYPE_CHECKING:
    from ..core.client import DynamoClient
    from ..core.table import Table


class Command(ABC):
    """A single DynamoDB request against one table."""

    # boto3 Table method name and the DynamoDB operation name used in errors/logs
    operation: str = ""
    operation_name: str = ""

    def __init__(self, db: "DynamoClient", table: "Table"):
        self.db = db
        self.table = table
        self.opts: Dict[str, Any] = {}

    def options(self, **options: Any) -> "Command":
        """Pass additional boto3 parameters through to the request."""
        self.opts.update(options)
        return self

    @abstractmethod
    def build_input(self) -> Dict[str, Any]:
        """Return the request parameters owned by this command."""

    def input(self) -> Dict[str, Any]:
        """Return the complete boto3 keyword arguments, options merged last."""
        return {**self.build_input(), **self.opts}

    @abstractmethod
    def result(self, output: Dict[str, Any]) -> "Result":
        """Wrap the raw boto3 response."""

    def send(self) -> "Result":
        return self.db.send_command(self)


class Result:
    """Raw boto3 response plus access to the table's entity registry."""

    def __init__(self, output: Dict[str, Any], table: "Table"):
        self.output = output
        self.table = table

    def get_output(self) -> Dict[str, Any]:
        return self.output

    def _to_record(self, item: Dict[str, Any]) -> EntityRecord:
        entity_type = item.get(TYPE_ATTRIBUTE)
        entity = self.table.entity(entity_type) if entity_type else None
        if entity is None:
            raise ValidationError(
                f"Item does not have {TYPE_ATTRIBUTE} attribute or no entity is registered for type: {entity_type}"
            )
        return entity.hydrate(unmarshall_item(item))


class SingleItemResult(Result):
    """Result carrying at most one item under ``item_field``."""

    item_field = "Attributes"

    def item(self) -> Optional[EntityRecord]:
        raw = self.raw()
        if raw:
            return self._to_record(raw)
        return None

    def raw(self) -> Optional[Dict[str, Any]]:
        return self.output.get(self.item_field)
