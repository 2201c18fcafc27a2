from .dtos import Key, UpdateData
from .entity import (
    CREATED_ATTRIBUTE,
    DEFAULT_TTL_ATTRIBUTE,
    EXPIRES_ATTRIBUTE,
    TYPE_ATTRIBUTE,
    UPDATED_ATTRIBUTE,
    ComputedGetter,
    Entity,
    EntityConfig,
    EntityRecord,
    calculate_update_data,
    define_entity,
)
from .tracking import ChangeStatus, EntityMetadata, TrackedDict, TrackedList

__all__ = [
    # Entity definitions
    "ComputedGetter",
    "Entity",
    "EntityConfig",
    "EntityRecord",
    "define_entity",
    "calculate_update_data",
    # Tracking
    "ChangeStatus",
    "EntityMetadata",
    "TrackedDict",
    "TrackedList",
    # DTOs
    "Key",
    "UpdateData",
    # Reserved attribute names
    "CREATED_ATTRIBUTE",
    "UPDATED_ATTRIBUTE",
    "TYPE_ATTRIBUTE",
    "EXPIRES_ATTRIBUTE",
    "DEFAULT_TTL_ATTRIBUTE",
]
