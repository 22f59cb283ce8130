"""Parsed object-definition records."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ObjectRecord(BaseModel):
    """One ``define <type> { ... }`` block.

    ``attributes`` keeps the order in which attributes first appeared in
    the block.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    object_type: str
    attributes: dict[str, str] = Field(default_factory=dict)

    @field_validator("object_type")
    @classmethod
    def _non_empty_type(cls, value: str) -> str:
        if not value:
            raise ValueError("object_type must be non-empty")
        return value

    def name(self, name_attribute: str) -> str | None:
        """Unique name of the record within its type, if it has one."""
        value = self.attributes.get(name_attribute)
        return value if value else None

    def data(self, name_attribute: str) -> dict[str, str]:
        """Attributes without the name attribute."""
        return {k: v for k, v in self.attributes.items() if k != name_attribute}


ObjectSet = dict[str, list[ObjectRecord]]
"""Object type -> records of that type, in file order."""
