"""Typing-centric domain modules."""

from typed_json_mapper.typing.enums import ExpectedType, PrimitiveKind, RuleKind
from typed_json_mapper.typing.models import (
    CoerceRule,
    ConvertRule,
    DecodeOptions,
    FieldDescriptor,
    MapperRule,
    NestedRule,
    SchemaDefinition,
)
from typed_json_mapper.typing.protocol import ConvertFunc, Errors

__all__ = [
    "CoerceRule",
    "ConvertFunc",
    "ConvertRule",
    "DecodeOptions",
    "Errors",
    "ExpectedType",
    "FieldDescriptor",
    "MapperRule",
    "NestedRule",
    "PrimitiveKind",
    "RuleKind",
    "SchemaDefinition",
]
