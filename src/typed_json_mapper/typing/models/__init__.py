"""Core domain model exports."""

from typed_json_mapper.typing.models.options import DecodeOptions
from typed_json_mapper.typing.models.rules import CoerceRule, ConvertRule, MapperRule, NestedRule
from typed_json_mapper.typing.models.schema import FieldDescriptor, SchemaDefinition

__all__ = [
    "CoerceRule",
    "ConvertRule",
    "DecodeOptions",
    "FieldDescriptor",
    "MapperRule",
    "NestedRule",
    "SchemaDefinition",
]
