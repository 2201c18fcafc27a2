from typing import Any, Dict

from .base import Command, SingleItemResult


class GetItemCommand(Command):
    operation = "get_item"
    operation_name = "GetItem"

    def __init__(self, db, table, key: Dict[str, Any]):
        super().__init__(db, table)
        self.key = key

    def build_input(self) -> Dict[str, Any]:
        return {'Key': self.key}

    def consistent(self) -> "GetItemCommand":
        """Request a strongly consistent read."""
        self.opts['ConsistentRead'] = True
        return self

    def result(self, output: Dict[str, Any]) -> "GetResult":
        return GetResult(output, self.table)


class GetResult(SingleItemResult):
    item_field = "Item"
