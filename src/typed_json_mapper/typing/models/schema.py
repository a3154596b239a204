"""Schema declaration models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from typed_json_mapper.registry import TemplateRegistry
from typed_json_mapper.typing.enums import ExpectedType


class FieldDescriptor(BaseModel):
    """Single declared field of a schema."""

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    name: str
    annotation: Any = None
    default: Any = None
    has_default: bool = True
    expected_type: ExpectedType = ExpectedType.UNKNOWN
    map_targets: tuple[Any, ...] = ()
    ignore_error: bool = False


class SchemaDefinition(BaseModel):
    """Field table and template registry of one schema class."""

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    name: str
    declared: list[FieldDescriptor] = Field(default_factory=list)
    registry: TemplateRegistry = Field(default_factory=TemplateRegistry)

    @property
    def fields(self) -> list[FieldDescriptor]:
        """Return decodable fields, i.e. declared fields carrying a default value."""
        return [field for field in self.declared if field.has_default]

    @property
    def field_names(self) -> set[str]:
        """Return names of decodable fields."""
        return {field.name for field in self.fields}
