from typing import Any, Dict

from .base import Command, SingleItemResult


class PutItemCommand(Command):
    operation = "put_item"
    operation_name = "PutItem"

    def __init__(self, db, table, item: Dict[str, Any]):
        super().__init__(db, table)
        self.item = item

    def build_input(self) -> Dict[str, Any]:
        return {'Item': self.item}

    def return_old(self) -> "PutItemCommand":
        """Return the overwritten item, if any."""
        self.opts['ReturnValues'] = 'ALL_OLD'
        return self

    def result(self, output: Dict[str, Any]) -> "PutResult":
        return PutResult(output, self.table)


class PutResult(SingleItemResult):
    pass
