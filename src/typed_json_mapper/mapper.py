"""Schema declaration: the `JsonMapper` base class and its field markers.

A schema is a `JsonMapper` subclass whose annotated class attributes with a
default value are its fields::

    class User(JsonMapper):
        name: str = ""

    class Team(JsonMapper):
        title: str = ""
        leader: Annotated[User, Map(User)] = User()
        members: Annotated[list[User], Map(User)] = []
        motto: Annotated[str, IgnoreError] = "none"

The field table and the template registry are built once, when the class is
created, and stored on the class as `__json_mapper__`.
"""

from __future__ import annotations

import copy
import inspect
import sys
import typing
from collections.abc import Mapping
from typing import Annotated, Any, ClassVar, Self

from typed_json_mapper.exceptions import SchemaDeclarationError
from typed_json_mapper.processing.keys import wire_key
from typed_json_mapper.registry import TemplateRegistry
from typed_json_mapper.typing.enums import ExpectedType, PrimitiveKind
from typed_json_mapper.typing.models.rules import CoerceRule, ConvertRule, MapperRule, NestedRule
from typed_json_mapper.typing.models.schema import FieldDescriptor, SchemaDefinition
from typed_json_mapper.typing.protocol import Errors

if typing.TYPE_CHECKING:
    from typed_json_mapper.typing.models.options import DecodeOptions

_PRIMITIVE_TARGETS: dict[type[Any], PrimitiveKind] = {
    str: PrimitiveKind.STRING,
    int: PrimitiveKind.NUMBER,
    float: PrimitiveKind.NUMBER,
    bool: PrimitiveKind.BOOLEAN,
}


class Map:
    """Annotation marker binding a custom conversion rule to a field.

    The target is `str`, `int`, `float` or `bool` for primitive coercion, a
    `JsonMapper` subclass (or its name, for self references) for nested
    decoding, or a callable returning `(value, errors)`.
    """

    __slots__ = ("target",)

    def __init__(self, target: object) -> None:
        self.target = target

    def __repr__(self) -> str:
        return f"Map({self.target!r})"


class IgnoreError:
    """Annotation marker silencing decode errors of a field.

    Usable bare (`Annotated[str, IgnoreError]`) or instantiated.
    """

    def __repr__(self) -> str:
        return "IgnoreError"


class JsonMapper:
    """Base class of schema definitions."""

    __json_mapper__: ClassVar[SchemaDefinition]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.__json_mapper__ = _declare(cls, parent_namespace=_parent_frame_namespace())

    def __init__(self, **values: Any) -> None:
        definition = schema_definition(type(self))
        for field in definition.fields:
            setattr(self, field.name, copy.deepcopy(field.default))
        for name, value in values.items():
            if name not in definition.field_names:
                message = f"{type(self).__name__}() got an unexpected field '{name}'"
                raise TypeError(message)
            setattr(self, name, value)

    @classmethod
    def map(
        cls,
        data: object,
        options: DecodeOptions | Mapping[str, Any] | None = None,
    ) -> tuple[Self, Errors]:
        """Decode raw JSON data into a new instance of this schema.

        Args:
            data: Parsed JSON value.
            options: Decode options.

        Returns:
            tuple[Self, Errors]: Populated instance and its errors, or None when valid.
        """
        from typed_json_mapper.decoder import decode  # noqa: PLC0415

        return decode(cls, data, options)

    def to_dict(self, *, transform_keys: bool = True) -> dict[str, Any]:
        """Dump the instance to JSON-compatible data.

        Args:
            transform_keys: Write snake_case keys, as `decode` reads them by default.

        Returns:
            dict[str, Any]: Plain data.
        """
        return {
            wire_key(field.name, transform_keys=transform_keys): _dump(
                getattr(self, field.name),
                transform_keys=transform_keys,
            )
            for field in schema_definition(type(self)).fields
        }

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return all(
            getattr(self, field.name) == getattr(other, field.name)
            for field in schema_definition(type(self)).fields
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        values = ", ".join(
            f"{field.name}={getattr(self, field.name)!r}" for field in schema_definition(type(self)).fields
        )
        return f"{type(self).__name__}({values})"


def schema_definition(schema: object) -> SchemaDefinition:
    """Return the declaration of a schema class.

    Args:
        schema: Schema class.

    Raises:
        SchemaDeclarationError: If the object is not a `JsonMapper` subclass.

    Returns:
        SchemaDefinition: Field table and registry.
    """
    if not is_schema(schema):
        message = f"{schema!r} is not a JsonMapper subclass"
        raise SchemaDeclarationError(message=message)
    return schema.__json_mapper__  # type: ignore[union-attr]


def is_schema(obj: object) -> bool:
    """Return whether an object is a schema class."""
    return isinstance(obj, type) and issubclass(obj, JsonMapper) and obj is not JsonMapper


def build_rule(target: object, *, module: str | None = None) -> MapperRule:
    """Turn a `Map` target into a tagged conversion rule.

    Args:
        target: Value given to `Map`.
        module: Module resolving schema names given as strings.

    Raises:
        SchemaDeclarationError: If the target cannot be used as a rule.

    Returns:
        MapperRule: Conversion rule.
    """
    if isinstance(target, type) and target in _PRIMITIVE_TARGETS:
        return CoerceRule(primitive=_PRIMITIVE_TARGETS[target], python_type=target)
    if isinstance(target, str):
        return NestedRule(schema_ref=target, module=module)
    if is_schema(target):
        return NestedRule(schema_ref=target)  # type: ignore[arg-type]
    if callable(target):
        return ConvertRule(func=target)
    message = f"Map target must be a primitive type, a JsonMapper subclass or a callable, got {target!r}"
    raise SchemaDeclarationError(message=message)


def _parent_frame_namespace(depth: int = 2) -> dict[str, Any]:
    """Return the locals of the frame a schema class is declared in.

    Module-level declarations return an empty namespace, since their names are
    already visible through the module globals.
    """
    frame = sys._getframe(depth)  # noqa: SLF001
    if frame.f_locals is frame.f_globals:
        return {}
    return dict(frame.f_locals)


def _declare(cls: type[JsonMapper], *, parent_namespace: Mapping[str, Any] | None = None) -> SchemaDefinition:
    localns = {**(parent_namespace or {}), cls.__name__: cls}
    try:
        hints = typing.get_type_hints(cls, localns=localns, include_extras=True)
    except NameError as exc:
        message = f"Cannot resolve annotations of {cls.__qualname__}: {exc}"
        raise SchemaDeclarationError(message=message) from exc

    declared: dict[str, FieldDescriptor] = {}
    for base in reversed(cls.__mro__[1:]):
        if is_schema(base):
            declared.update((field.name, field) for field in base.__json_mapper__.declared)

    for name in inspect.get_annotations(cls):
        if name.startswith("__"):
            continue
        annotation, metadata = _split_annotated(hints[name])
        if annotation is ClassVar or typing.get_origin(annotation) is ClassVar:
            continue
        has_default = name in cls.__dict__
        default = cls.__dict__.get(name)
        declared[name] = FieldDescriptor(
            name=name,
            annotation=annotation,
            default=default,
            has_default=has_default,
            expected_type=ExpectedType.of(default) if has_default else ExpectedType.UNKNOWN,
            map_targets=tuple(marker.target for marker in metadata if isinstance(marker, Map)),
            ignore_error=any(marker is IgnoreError or isinstance(marker, IgnoreError) for marker in metadata),
        )

    definition = SchemaDefinition(
        name=cls.__name__,
        declared=list(declared.values()),
        registry=TemplateRegistry(cls.__name__),
    )
    for field in definition.fields:
        for target in field.map_targets:
            definition.registry.register_mapper(field.name, build_rule(target, module=cls.__module__))
        if field.ignore_error:
            definition.registry.register_ignore_error(field.name)
    return definition


def _split_annotated(hint: Any) -> tuple[Any, tuple[Any, ...]]:
    if typing.get_origin(hint) is Annotated:
        base, *metadata = typing.get_args(hint)
        return base, tuple(metadata)
    return hint, ()


def _dump(value: Any, *, transform_keys: bool) -> Any:
    if isinstance(value, JsonMapper):
        return value.to_dict(transform_keys=transform_keys)
    if isinstance(value, (list, tuple)):
        return [_dump(item, transform_keys=transform_keys) for item in value]
    if isinstance(value, Mapping):
        return {key: _dump(item, transform_keys=transform_keys) for key, item in value.items()}
    return value
