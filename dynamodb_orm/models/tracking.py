"""
Change tracking for entity records.

Every record owns one EntityMetadata instance. Nested dict and list values of
a record are replaced by TrackedDict / TrackedList copies that share that
metadata and remember which top-level attribute they belong to, so a mutation
at any depth is recorded against the top-level attribute name.

Status rules:
- writing None over a value that is not None marks the owner REMOVED, at any depth
- any other write, and any delete, inside a nested container marks the owner UPDATED
- the last recorded status of an attribute wins
- after each change, computed attributes depending on the changed attribute
  are marked UPDATED (one level only)
"""

import logging
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)


class ChangeStatus(str, Enum):
    """Status of a top-level attribute since the record was created."""

    UPDATED = "Updated"
    REMOVED = "Removed"


class EntityMetadata:
    """Per-record change state and reverse dependency index."""

    __slots__ = ("changes", "attr_deps")

    def __init__(self, attr_deps: Optional[Dict[str, List[str]]] = None):
        self.changes: Dict[str, ChangeStatus] = {}
        self.attr_deps: Dict[str, List[str]] = attr_deps or {}

    def record_change(self, attribute: str, status: ChangeStatus) -> None:
        """Mark a top-level attribute and fan out to its dependent computed attributes."""
        self.changes[attribute] = status
        dependents = self.attr_deps.get(attribute, [])
        for dependent in dependents:
            self.changes[dependent] = ChangeStatus.UPDATED
        logger.debug(f"Tracked {status.value} on '{attribute}' (dependents: {dependents})")

    def __repr__(self) -> str:
        return f"EntityMetadata(changes={self.changes!r}, attr_deps={self.attr_deps!r})"


def build_attr_deps(computed: Dict[str, Any]) -> Dict[str, List[str]]:
    """Reverse computed-attribute dependencies into source -> dependents.

    Args:
        computed: Mapping of computed attribute name to a getter exposing depends_on

    Returns:
        Mapping of source attribute name to the computed attributes it affects
    """
    attr_deps: Dict[str, List[str]] = {}
    for name, getter in computed.items():
        for source in getter.depends_on:
            attr_deps.setdefault(source, []).append(name)
    return attr_deps


def wrap_value(value: Any, metadata: EntityMetadata, parent_key: str) -> Any:
    """Wrap dict and list values so their mutations are tracked under parent_key.

    Any other value (datetime included) is returned unchanged.
    """
    if isinstance(value, dict):
        return TrackedDict(value, metadata, parent_key)
    if isinstance(value, list):
        return TrackedList(value, metadata, parent_key)
    return value


def _wrap_all(values: Iterable[Any], metadata: EntityMetadata, parent_key: str) -> List[Any]:
    return [wrap_value(value, metadata, parent_key) for value in values]


class TrackedDict(dict):
    """A dict nested inside a record; mutations are recorded against the owning attribute."""

    __slots__ = ("_metadata", "_parent_key")

    def __init__(self, data: Dict[str, Any], metadata: EntityMetadata, parent_key: str):
        super().__init__((key, wrap_value(value, metadata, parent_key)) for key, value in data.items())
        self._metadata = metadata
        self._parent_key = parent_key

    def _touch(self, status: ChangeStatus = ChangeStatus.UPDATED) -> None:
        self._metadata.record_change(self._parent_key, status)

    def __setitem__(self, key, value):
        removed = value is None and self.get(key) is not None
        super().__setitem__(key, wrap_value(value, self._metadata, self._parent_key))
        self._touch(ChangeStatus.REMOVED if removed else ChangeStatus.UPDATED)

    def __delitem__(self, key):
        super().__delitem__(key)
        self._touch()

    def pop(self, key, *default):
        if key not in self:
            return super().pop(key, *default)
        value = super().pop(key)
        self._touch()
        return value

    def popitem(self):
        item = super().popitem()
        self._touch()
        return item

    def clear(self):
        if self:
            super().clear()
            self._touch()

    def update(self, *args, **kwargs):
        for key, value in dict(*args, **kwargs).items():
            self[key] = value

    def setdefault(self, key, default=None):
        if key not in self:
            self[key] = default
        return self[key]

    def __ior__(self, other):
        self.update(other)
        return self

    def __reduce__(self):
        # Copies and pickles are plain, untracked dicts
        return (dict, (dict(self),))


class TrackedList(list):
    """A list nested inside a record; mutations are recorded against the owning attribute."""

    __slots__ = ("_metadata", "_parent_key")

    def __init__(self, data: Iterable[Any], metadata: EntityMetadata, parent_key: str):
        super().__init__(_wrap_all(data, metadata, parent_key))
        self._metadata = metadata
        self._parent_key = parent_key

    def _touch(self, status: ChangeStatus = ChangeStatus.UPDATED) -> None:
        self._metadata.record_change(self._parent_key, status)

    def _wrap(self, value):
        return wrap_value(value, self._metadata, self._parent_key)

    def __setitem__(self, index, value):
        if isinstance(index, slice):
            super().__setitem__(index, _wrap_all(value, self._metadata, self._parent_key))
            self._touch()
            return
        removed = value is None and self[index] is not None
        super().__setitem__(index, self._wrap(value))
        self._touch(ChangeStatus.REMOVED if removed else ChangeStatus.UPDATED)

    def __delitem__(self, index):
        super().__delitem__(index)
        self._touch()

    def append(self, value):
        super().append(self._wrap(value))
        self._touch()

    def extend(self, values):
        super().extend(_wrap_all(values, self._metadata, self._parent_key))
        self._touch()

    def insert(self, index, value):
        super().insert(index, self._wrap(value))
        self._touch()

    def pop(self, index=-1):
        value = super().pop(index)
        self._touch()
        return value

    def remove(self, value):
        super().remove(value)
        self._touch()

    def clear(self):
        if self:
            super().clear()
            self._touch()

    def sort(self, *, key=None, reverse=False):
        super().sort(key=key, reverse=reverse)
        self._touch()

    def reverse(self):
        super().reverse()
        self._touch()

    def __iadd__(self, values):
        self.extend(values)
        return self

    def __imul__(self, count):
        super().__imul__(count)
        self._touch()
        return self

    def __reduce__(self):
        return (list, (list(self),))
