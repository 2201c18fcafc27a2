"""
Write-side DTOs shared by tables and commands.

- Key: primary/sort key values of a single item
- UpdateData: the patch produced by change tracking ({set, remove})
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class Key(BaseModel):
    """Key values of a single item, independent of the table's attribute names."""

    primary_key: Any = Field(..., description="Partition key value")
    sort_key: Optional[Any] = Field(None, description="Sort key value, required by tables with a sort key")


class UpdateData(BaseModel):
    """Minimal description of the changes to apply to a stored item.

    Attributes:
        set: Attribute name -> value to write
        remove: Attribute names to remove
    """

    set: Dict[str, Any] = Field(default_factory=dict)
    remove: List[str] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.set and not self.remove
