"""
Table definitions and key composition.

A Table knows its key attribute names, its secondary indexes and the entities
stored in it. Its operations only build commands; nothing is sent until
``command.send()`` is called.
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ..commands import (
    DeleteItemCommand,
    GetItemCommand,
    PutItemCommand,
    QueryItemsCommand,
    UpdateItemCommand,
)
from ..exceptions import ValidationError
from ..models import (
    CREATED_ATTRIBUTE,
    UPDATED_ATTRIBUTE,
    Entity,
    EntityRecord,
    Key,
    UpdateData,
    calculate_update_data,
)
from ..utils import marshall_item, utcnow

if TYPE_CHECKING:
    from .client import DynamoClient

logger = logging.getLogger(__name__)

KeyLike = Union[Key, Mapping[str, Any]]


class IndexConfig(BaseModel):
    """Key attribute names of a secondary index."""

    primary_key: str
    sort_key: Optional[str] = None


class TableConfig(BaseModel):
    """Definition of a DynamoDB table and the entities stored in it."""

    name: str = Field(..., description="Base table name, prefixed by DynamoDBConfig.get_table_name")
    primary_key: str = Field(..., description="Partition key attribute name")
    sort_key: Optional[str] = Field(None, description="Sort key attribute name")
    entities: List[Entity] = Field(default_factory=list)
    indexes: Dict[str, IndexConfig] = Field(default_factory=dict)

    model_config = ConfigDict(arbitrary_types_allowed=True)


def match_key_to_table(key: KeyLike, config: TableConfig) -> Dict[str, Any]:
    """Translate key values into the table's key attribute names.

    Raises:
        ValidationError: If the table has a sort key and none is given
    """
    if not isinstance(key, Key):
        key = Key.model_validate(key)

    matched_key = {config.primary_key: key.primary_key}
    if config.sort_key:
        if key.sort_key is None:
            raise ValidationError(f"Missing sort key for the operation on table {config.name}")
        matched_key[config.sort_key] = key.sort_key
    return matched_key


class Table:
    """Request builder for one DynamoDB table."""

    def __init__(self, db: "DynamoClient", config: TableConfig):
        self._db = db
        self._config = config
        self.name = db.config.get_table_name(config.name)
        self._entities: Dict[str, Entity] = {entity.entity_name: entity for entity in config.entities}

    def entity(self, type_name: str) -> Optional[Entity]:
        return self._entities.get(type_name)

    def config(self) -> TableConfig:
        return self._config

    def _record_key(self, record: EntityRecord) -> Key:
        primary_key = record.get(self._config.primary_key)
        if not primary_key:
            raise ValidationError(
                f"Entity is missing {self._config.primary_key} attribute that is used as primary key"
            )
        sort_key = None
        if self._config.sort_key:
            sort_key = record.get(self._config.sort_key)
            if not sort_key:
                raise ValidationError(
                    f"Entity is missing {self._config.sort_key} attribute that is used as sort key"
                )
        return Key(primary_key=primary_key, sort_key=sort_key)

    def get(self, key: KeyLike) -> GetItemCommand:
        return GetItemCommand(self._db, self, match_key_to_table(key, self._config))

    def query(self, condition: str, values: Dict[str, Any]) -> QueryItemsCommand:
        return QueryItemsCommand(self._db, self, condition, values)

    def put(self, record: EntityRecord) -> PutItemCommand:
        """Build a full-item write, stamping creation and update times."""
        now = utcnow()
        record[CREATED_ATTRIBUTE] = now
        record[UPDATED_ATTRIBUTE] = now
        return PutItemCommand(self._db, self, marshall_item(record))

    def update(self, record: EntityRecord) -> UpdateItemCommand:
        """Build a partial write from the record's tracked changes."""
        key = self._record_key(record)
        record[UPDATED_ATTRIBUTE] = utcnow()
        update_data = calculate_update_data(record)
        logger.debug(f"Tracked changes for {self.name}: set={list(update_data.set)}, remove={update_data.remove}")
        return self.update_by_id(key, update_data)

    def update_by_id(self, key: KeyLike, update_data: Union[UpdateData, Mapping[str, Any]]) -> UpdateItemCommand:
        if not isinstance(update_data, UpdateData):
            update_data = UpdateData.model_validate(update_data)
        return UpdateItemCommand(self._db, self, match_key_to_table(key, self._config), update_data)

    def delete(self, record: EntityRecord) -> DeleteItemCommand:
        return self.delete_by_id(self._record_key(record))

    def delete_by_id(self, key: KeyLike) -> DeleteItemCommand:
        return DeleteItemCommand(self._db, self, match_key_to_table(key, self._config)).return_old()

    def __repr__(self) -> str:
        return f"Table(name={self.name!r}, entities={list(self._entities)!r})"
