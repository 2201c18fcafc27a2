import logging
from typing import Any, Dict

from ..exceptions import ValidationError
from ..models import UpdateData
from ..utils import marshall
from .base import Command, SingleItemResult

logger = logging.getLogger(__name__)


def update_data_to_input(update_data: UpdateData) -> Dict[str, Any]:
    """Build UpdateExpression and its placeholders from a patch.

    ``set`` entries holding None are removed instead of written, since None
    means an absent attribute.

    Example:
        >>> update_data_to_input(UpdateData(set={'name': 'A', 'sk': None}, remove=['email']))
        {'UpdateExpression': 'SET #s0 = :s0 REMOVE #r0, #r1',
         'ExpressionAttributeNames': {'#s0': 'name', '#r0': 'email', '#r1': 'sk'},
         'ExpressionAttributeValues': {':s0': 'A'}}

    Raises:
        ValidationError: If there is nothing to set or remove
    """
    to_set = {field: value for field, value in update_data.set.items() if value is not None}
    to_remove = list(update_data.remove)
    to_remove.extend(field for field, value in update_data.set.items() if value is None and field not in to_remove)

    if not to_set and not to_remove:
        raise ValidationError("Update data cannot be empty")

    expression_parts = []
    expression_names: Dict[str, str] = {}
    expression_values: Dict[str, Any] = {}

    if to_set:
        assignments = []
        for i, (field, value) in enumerate(to_set.items()):
            expression_names[f"#s{i}"] = field
            expression_values[f":s{i}"] = marshall(value)
            assignments.append(f"#s{i} = :s{i}")
        expression_parts.append("SET " + ", ".join(assignments))

    if to_remove:
        removals = []
        for i, field in enumerate(to_remove):
            expression_names[f"#r{i}"] = field
            removals.append(f"#r{i}")
        expression_parts.append("REMOVE " + ", ".join(removals))

    update_input: Dict[str, Any] = {
        'UpdateExpression': " ".join(expression_parts),
        'ExpressionAttributeNames': expression_names,
    }
    # DynamoDB rejects an empty ExpressionAttributeValues map
    if expression_values:
        update_input['ExpressionAttributeValues'] = expression_values
    return update_input


class UpdateItemCommand(Command):
    operation = "update_item"
    operation_name = "UpdateItem"

    def __init__(self, db, table, key: Dict[str, Any], update_data: UpdateData):
        super().__init__(db, table)
        self.key = key
        self.data = update_data

    def build_input(self) -> Dict[str, Any]:
        update_input = update_data_to_input(self.data)
        logger.debug(f"Update expression for {self.table.name} {self.key}: {update_input['UpdateExpression']}")
        return {
            'Key': self.key,
            'ReturnValues': 'ALL_NEW',
            **update_input,
        }

    def return_old(self) -> "UpdateItemCommand":
        """Return the item as it was before the update."""
        self.opts['ReturnValues'] = 'ALL_OLD'
        return self

    def result(self, output: Dict[str, Any]) -> "UpdateResult":
        return UpdateResult(output, self.table)


class UpdateResult(SingleItemResult):
    pass
