"""
Entity definitions and tracked records.

An entity is defined once from an EntityConfig and then called with plain data
to produce EntityRecord instances:

```python
User = define_entity(
    name="USER",
    computed={
        "pk": ComputedGetter(depends_on=["login"], get=lambda r: f"USER#{r['login']}"),
    },
)

user = User({"login": "damsos", "tags": ["a"]})
user["login"] = "kucyk"
user["tags"].append("b")

calculate_update_data(user)
# UpdateData(set={'login': 'kucyk', 'pk': 'USER#kucyk', 'tags': ['a', 'b']}, remove=[])
```

Records behave like plain mappings (iteration, equality, dict()) and include
computed attributes, which are evaluated on every read. Tracking metadata is
kept in a slot of the record and never shows up as mapping content.
"""

import logging
from collections.abc import MutableMapping
from typing import Any, Callable, Dict, Iterator, List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from ..exceptions import MissingMetadataError, SchemaViolationError
from ..utils.timezone import to_utc, utcnow
from .dtos import UpdateData
from .tracking import ChangeStatus, EntityMetadata, build_attr_deps, wrap_value

logger = logging.getLogger(__name__)

CREATED_ATTRIBUTE = "_created"
UPDATED_ATTRIBUTE = "_updated"
TYPE_ATTRIBUTE = "_type"
EXPIRES_ATTRIBUTE = "_expires"
DEFAULT_TTL_ATTRIBUTE = "_ttl"


class ComputedGetter(BaseModel):
    """Read-only attribute derived from other attributes of the record."""

    depends_on: List[str] = Field(default_factory=list, description="Attributes whose changes mark this one as updated")
    get: Callable[[Any], Any] = Field(..., description="Called with the live record on every read")


class EntityConfig(BaseModel):
    """Schema of an entity type."""

    name: str = Field(..., description="Entity type name, stored in the _type attribute")
    ttl: str = Field(DEFAULT_TTL_ATTRIBUTE, description="Name of the computed TTL attribute")
    computed: Dict[str, ComputedGetter] = Field(default_factory=dict)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v:
            raise ValueError("Entity name is required")
        return v

    @field_validator('ttl', mode='before')
    @classmethod
    def default_ttl(cls, v):
        return v or DEFAULT_TTL_ATTRIBUTE


def _ttl_value(record: "EntityRecord") -> Optional[int]:
    """Expiry as epoch seconds, the unit DynamoDB TTL reads (not milliseconds)."""
    expires = record.get(EXPIRES_ATTRIBUTE)
    if expires is None:
        return None
    return int(to_utc(expires).timestamp())


class EntityRecord(MutableMapping):
    """A record of an entity whose mutations are tracked.

    Top-level writes mark the attribute UPDATED. Deleting it, or writing None
    over a value that is not None, marks it REMOVED. Writing or deleting a
    computed attribute raises SchemaViolationError before anything is recorded.
    """

    __slots__ = ("_data", "_entity", "_metadata")

    def __init__(self, entity: "Entity", data: Dict[str, Any], metadata: EntityMetadata):
        self._entity = entity
        self._metadata = metadata
        self._data = {key: wrap_value(value, metadata, key) for key, value in data.items()}

    @property
    def entity_name(self) -> str:
        return self._entity.entity_name

    def _check_writable(self, key: str) -> None:
        if key in self._entity.computed:
            raise SchemaViolationError(self._entity.entity_name, key)

    def __getitem__(self, key):
        getter = self._entity.computed.get(key)
        if getter is not None:
            return getter.get(self)
        return self._data[key]

    def __setitem__(self, key, value):
        self._check_writable(key)
        removed = value is None and self._data.get(key) is not None
        self._data[key] = wrap_value(value, self._metadata, key)
        status = ChangeStatus.REMOVED if removed else ChangeStatus.UPDATED
        self._metadata.record_change(key, status)

    def __delitem__(self, key):
        self._check_writable(key)
        del self._data[key]
        self._metadata.record_change(key, ChangeStatus.REMOVED)

    def __contains__(self, key):
        return key in self._data or key in self._entity.computed

    def __iter__(self) -> Iterator[str]:
        yield from self._data
        for key in self._entity.computed:
            if key not in self._data:
                yield key

    def __len__(self) -> int:
        return len(self._data) + sum(1 for key in self._entity.computed if key not in self._data)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._entity.entity_name!r}, {dict(self)!r})"

    def to_dict(self) -> Dict[str, Any]:
        """Return a plain, untracked deep copy including computed attributes."""
        def unwrap(value):
            if isinstance(value, dict):
                return {k: unwrap(v) for k, v in value.items()}
            if isinstance(value, list):
                return [unwrap(v) for v in value]
            return value

        return {key: unwrap(value) for key, value in self.items()}


class Entity:
    """Callable factory producing tracked records for one entity type."""

    def __init__(self, config: EntityConfig):
        self.config = config
        self.entity_name = config.name
        self.computed: Dict[str, ComputedGetter] = {
            **config.computed,
            config.ttl: ComputedGetter(depends_on=[EXPIRES_ATTRIBUTE], get=_ttl_value),
        }

    def __call__(self, data: Optional[Dict[str, Any]] = None) -> EntityRecord:
        """Create a new record, stamping fresh timestamps and the entity type."""
        now = utcnow()
        payload = self._strip_computed(data or {})
        payload.update({
            CREATED_ATTRIBUTE: now,
            UPDATED_ATTRIBUTE: now,
            TYPE_ATTRIBUTE: self.entity_name,
        })
        return self._build(payload)

    def hydrate(self, item: Dict[str, Any]) -> EntityRecord:
        """Rebuild a record from stored data, keeping its stored timestamps."""
        now = utcnow()
        payload = {
            CREATED_ATTRIBUTE: now,
            UPDATED_ATTRIBUTE: now,
            TYPE_ATTRIBUTE: self.entity_name,
        }
        payload.update(self._strip_computed(item))
        return self._build(payload)

    def _strip_computed(self, data: Dict[str, Any]) -> Dict[str, Any]:
        payload = {}
        for key, value in data.items():
            if key in self.computed:
                logger.debug(f"Ignoring value supplied for computed attribute '{key}' of {self.entity_name}")
                continue
            payload[key] = value
        return payload

    def _build(self, payload: Dict[str, Any]) -> EntityRecord:
        metadata = EntityMetadata(attr_deps=build_attr_deps(self.computed))
        return EntityRecord(self, payload, metadata)

    def __repr__(self) -> str:
        return f"Entity(name={self.entity_name!r}, computed={list(self.computed)!r})"


def define_entity(
    config: Union[EntityConfig, str, None] = None,
    *,
    name: Optional[str] = None,
    computed: Optional[Dict[str, Union[ComputedGetter, Dict[str, Any]]]] = None,
    ttl: Optional[str] = None,
) -> Entity:
    """Compile an entity schema into a record factory.

    Args:
        config: A ready EntityConfig, or the entity name
        name: Entity name (when config is not given)
        computed: Computed attributes as ComputedGetter or dicts with depends_on/get
        ttl: Name of the TTL attribute, '_ttl' by default

    Returns:
        Entity factory
    """
    if isinstance(config, EntityConfig):
        return Entity(config)
    return Entity(EntityConfig(name=config or name, ttl=ttl, computed=computed or {}))


def calculate_update_data(record: EntityRecord) -> UpdateData:
    """Reduce the tracked changes of a record into a patch.

    The current value of every UPDATED attribute still present goes to
    ``set``; every REMOVED attribute goes to ``remove``. Tracking state is
    left untouched, so repeated calls return the same patch.

    Raises:
        MissingMetadataError: If the value was not produced by an Entity
    """
    metadata = getattr(record, "_metadata", None) if isinstance(record, EntityRecord) else None
    if metadata is None:
        raise MissingMetadataError(record)

    updated = {
        attribute: record[attribute]
        for attribute, status in metadata.changes.items()
        if status is ChangeStatus.UPDATED and attribute in record
    }
    removed = [attribute for attribute, status in metadata.changes.items() if status is ChangeStatus.REMOVED]
    return UpdateData(set=updated, remove=removed)
