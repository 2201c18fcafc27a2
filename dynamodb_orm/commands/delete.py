from typing import Any, Dict

from .base import Command, SingleItemResult


class DeleteItemCommand(Command):
    operation = "delete_item"
    operation_name = "DeleteItem"

    def __init__(self, db, table, key: Dict[str, Any]):
        super().__init__(db, table)
        self.key = key

    def build_input(self) -> Dict[str, Any]:
        return {'Key': self.key}

    def return_old(self) -> "DeleteItemCommand":
        """Return the deleted item."""
        self.opts['ReturnValues'] = 'ALL_OLD'
        return self

    def result(self, output: Dict[str, Any]) -> "DeleteResult":
        return DeleteResult(output, self.table)


class DeleteResult(SingleItemResult):
    pass
