"""Schema-directed decoding of parsed JSON values.

Decoding never raises for data problems. Every field receives a value and
every mismatch is reported as a message prefixed with its field path.
"""

from __future__ import annotations

import json
import math
import sys
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, TypeVar

from typed_json_mapper.exceptions import SchemaDeclarationError
from typed_json_mapper.logging import get_logger
from typed_json_mapper.mapper import JsonMapper, is_schema, schema_definition
from typed_json_mapper.processing.coercion import RULE_CONVERTERS, coerce
from typed_json_mapper.processing.keys import wire_key
from typed_json_mapper.typing.enums import ExpectedType
from typed_json_mapper.typing.models.options import DecodeOptions
from typed_json_mapper.typing.models.rules import CoerceRule, ConvertRule, NestedRule

if TYPE_CHECKING:
    from typed_json_mapper.typing.models.rules import MapperRule
    from typed_json_mapper.typing.models.schema import FieldDescriptor, SchemaDefinition
    from typed_json_mapper.typing.protocol import Errors

logger = get_logger(__name__)

T = TypeVar("T", bound=JsonMapper)


def decode(
    schema: type[T],
    data: object,
    options: DecodeOptions | Mapping[str, Any] | None = None,
) -> tuple[T, Errors]:
    """Decode a parsed JSON value with a schema.

    Args:
        schema: Schema class to instantiate.
        data: Parsed JSON value.
        options: Decode options, as a model or a plain mapping.

    Returns:
        tuple[T, Errors]: Populated instance and the ordered error messages,
        or None when no error was found.
    """
    definition = schema_definition(schema)
    decode_options = DecodeOptions.coerce(options)
    instance = schema()
    errors: list[str] = []

    for field in definition.fields:
        key = wire_key(field.name, transform_keys=not decode_options.disable_transform_keys)
        ignored = definition.registry.is_error_ignored(field.name)

        if not isinstance(data, Mapping) or key not in data:
            if not ignored:
                errors.append(f"`{definition.name}.{field.name}` not exists mapping value.")
            continue

        value = _decode_field(definition, field, data[key], decode_options, errors, ignored=ignored)
        setattr(instance, field.name, value)

    logger.debug("Decoded schema", extra={"schema": definition.name, "error_count": len(errors)})
    return instance, errors or None


def _decode_field(
    definition: SchemaDefinition,
    field: FieldDescriptor,
    raw: object,
    options: DecodeOptions,
    errors: list[str],
    *,
    ignored: bool,
) -> Any:
    expected_type = field.expected_type
    rule = definition.registry.lookup_mapper(field.name)

    if expected_type is ExpectedType.ARRAY:
        if not isinstance(raw, list):
            if not ignored:
                errors.append(_type_mismatch(definition.name, field.name, expected_type, raw))
            return []
        if rule is None:
            return []

        values = []
        for index, element in enumerate(raw):
            value, element_errors = apply_rule(rule, element, options)
            if element_errors and not ignored:
                errors.extend(_nested(definition.name, f"{field.name}.{index}", element_errors))
            values.append(value)
        return values

    if rule is not None:
        value, rule_errors = apply_rule(rule, raw, options)
        if rule_errors and not ignored:
            errors.extend(_nested(definition.name, field.name, rule_errors))
        return value

    if expected_type.is_primitive:
        value, invalid = coerce(expected_type, raw)
        if invalid and not ignored:
            errors.append(_type_mismatch(definition.name, field.name, expected_type, raw))
        return value

    # Unknown types without a rule are passed through as is.
    return raw


def apply_rule(rule: MapperRule, raw: object, options: DecodeOptions | None = None) -> tuple[Any, Errors]:
    """Convert one raw value with a custom rule.

    Args:
        rule: Conversion rule.
        raw: Raw value.
        options: Options forwarded to nested decodes.

    Raises:
        SchemaDeclarationError: If a nested schema referenced by name cannot be found.

    Returns:
        tuple[Any, Errors]: Converted value and the rule's errors.
    """
    match rule:
        case CoerceRule(primitive=primitive):
            return RULE_CONVERTERS[primitive](raw), None
        case NestedRule():
            return decode(resolve_nested_schema(rule), raw, options)
        case ConvertRule(func=func):
            result = func(raw)
            if isinstance(result, tuple) and len(result) == 2:  # noqa: PLR2004
                value, rule_errors = result
                return value, list(rule_errors) if rule_errors else None
            return result, None
    message = f"Unsupported conversion rule: {rule!r}"
    raise SchemaDeclarationError(message=message)


def resolve_nested_schema(rule: NestedRule) -> type[JsonMapper]:
    """Return the schema class a nested rule refers to.

    Args:
        rule: Nested rule holding a class or a schema name.

    Raises:
        SchemaDeclarationError: If the name does not resolve to a schema class.

    Returns:
        type[JsonMapper]: Schema class.
    """
    if not isinstance(rule.schema_ref, str):
        return rule.schema_ref
    module = sys.modules.get(rule.module or "")
    schema = getattr(module, rule.schema_ref, None)
    if not is_schema(schema):
        message = f"Map target '{rule.schema_ref}' is not a JsonMapper subclass of module '{rule.module}'"
        raise SchemaDeclarationError(message=message)
    return schema  # type: ignore[return-value]


def to_json_text(value: object) -> str:
    """Render a raw value as compact JSON for error messages.

    Integral floats render without a fraction and non-finite numbers as `null`.
    Values JSON cannot represent render as `undefined`.
    """
    try:
        return json.dumps(
            _json_compatible(value),
            ensure_ascii=False,
            separators=(",", ":"),
            allow_nan=False,
            default=_json_default,
        )
    except (TypeError, ValueError):
        return "undefined"


def _json_compatible(value: object) -> Any:
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        if value.is_integer() and abs(value) < 1e21:  # noqa: PLR2004
            return int(value)
        return value
    if isinstance(value, (list, tuple)):
        return [_json_compatible(item) for item in value]
    if isinstance(value, Mapping):
        return {key: _json_compatible(item) for key, item in value.items()}
    return value


def _json_default(value: object) -> Any:
    if isinstance(value, JsonMapper):
        return _json_compatible(value.to_dict())
    message = f"Object of type {type(value).__name__} is not JSON serializable"
    raise TypeError(message)


def _type_mismatch(class_name: str, field_name: str, expected_type: ExpectedType, raw: object) -> str:
    return (
        f"`{class_name}.{field_name}` type mismatch. "
        f"expected-type: `{expected_type}` actual: `{to_json_text(raw)}`"
    )


def _nested(class_name: str, path: str, nested_errors: list[str]) -> list[str]:
    return [f"`{class_name}.{path}` -> {error}" for error in nested_errors]
