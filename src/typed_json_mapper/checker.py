"""Advisory consistency checks over schema declarations.

The checker inspects type hints only and never decodes data. For every field
it compares the annotation with the return type of the field's `Map` target
and reports declarations the decoder cannot honour.
"""

from __future__ import annotations

import glob
import hashlib
import importlib.util
import sys
import types
import typing
from pathlib import Path
from typing import TYPE_CHECKING, Any, NoReturn

from typed_json_mapper.exceptions import CheckerError, PackageError
from typed_json_mapper.mapper import build_rule, is_schema, schema_definition
from typed_json_mapper.typing.models.rules import CoerceRule, ConvertRule, NestedRule

if TYPE_CHECKING:
    from collections.abc import Iterable

    from typed_json_mapper.typing.models.schema import FieldDescriptor

ErrorsBySchema = dict[str, list[str]]

_PRIMITIVE_ANNOTATIONS = (str, int, float, bool, type(None), None)
_IGNORED_DIRECTORIES = frozenset({".git", ".venv", "venv", "__pycache__", "site-packages", "node_modules"})
_UNSET = object()


def check_schema(schema: type[Any]) -> list[str]:
    """Check the fields of one schema.

    Args:
        schema: Schema class.

    Returns:
        list[str]: Diagnostic lines; each field block ends with an empty line.
    """
    definition = schema_definition(schema)
    lines: list[str] = []
    for field in definition.declared:
        lines.extend(_check_field(field, schema.__module__))
    return lines


def check_module(module: types.ModuleType) -> ErrorsBySchema:
    """Check every schema declared in a module.

    Args:
        module: Imported module.

    Returns:
        ErrorsBySchema: Diagnostics per schema name, for schemas with problems only.
    """
    results: ErrorsBySchema = {}
    for name, obj in vars(module).items():
        if not is_schema(obj) or obj.__module__ != module.__name__ or obj.__name__ != name:
            continue
        errors = check_schema(obj)
        if errors:
            results[name] = errors
    return results


def check_file(path: Path) -> ErrorsBySchema:
    """Import a Python file and check the schemas it declares.

    Args:
        path: Python source file.

    Returns:
        ErrorsBySchema: Diagnostics per schema name.
    """
    return check_module(load_module(path))


def load_module(path: Path) -> types.ModuleType:
    """Import a Python file under a private module name.

    Args:
        path: Python source file.

    Raises:
        CheckerError: If the file is not Python or fails to import.

    Returns:
        types.ModuleType: Imported module.
    """
    resolved = path.resolve()
    if resolved.suffix != ".py" or not resolved.is_file():
        raise CheckerError(path=str(path), message="not a Python source file")

    digest = hashlib.sha256(str(resolved).encode("utf-8")).hexdigest()[:12]
    module_name = f"_typed_json_mapper_check_{resolved.stem}_{digest}"
    spec = importlib.util.spec_from_file_location(module_name, resolved)
    if spec is None or spec.loader is None:
        raise CheckerError(path=str(path), message="cannot build an import spec")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        sys.modules.pop(module_name, None)
        raise CheckerError(path=str(path), message=f"{type(exc).__name__}: {exc}") from exc
    return module


def expand_patterns(patterns: Iterable[str]) -> list[Path]:
    """Expand glob patterns into Python files.

    Args:
        patterns: File paths or glob patterns; `**` matches recursively.

    Returns:
        list[Path]: Matching `.py` files in first-match order, without duplicates.
    """
    files: dict[Path, None] = {}
    for pattern in patterns:
        for match in sorted(glob.glob(pattern, recursive=True)):  # noqa: PTH207
            path = Path(match)
            if path.suffix != ".py" or not path.is_file():
                continue
            if _IGNORED_DIRECTORIES.intersection(path.parts):
                continue
            files.setdefault(path, None)
    return list(files)


def _check_field(field: FieldDescriptor, module: str) -> list[str]:
    messages = _detect_errors(field, module)
    return [*messages, ""] if messages else []


def _detect_errors(field: FieldDescriptor, module: str) -> list[str]:
    annotation = field.annotation
    name = field.name

    if annotation in (NoReturn, typing.Never):
        return [_error(name, "can't use only Never type. use `None` instead")]

    if not field.has_default:
        return [_error(name, "can't declare a field without default value. field initialization is required")]

    if len(field.map_targets) > 1:
        return [_error(name, "`Map` is declared multiple times. it must be declared only once.")]

    mapper_type = _mapper_return_type(field.map_targets[0], module) if field.map_targets else None
    has_mapper = bool(field.map_targets)

    if typing.get_origin(annotation) in (list, tuple) or annotation in (list, tuple):
        if not has_mapper:
            return [_error(name, "`Map` required if list type field")]
        args = typing.get_args(annotation)
        element_type = args[0] if args else Any
        if mapper_type is not _UNSET and not _same_type(element_type, mapper_type):
            return _mismatch(name, element_type, mapper_type)
        return []

    if not has_mapper and annotation in _PRIMITIVE_ANNOTATIONS:
        return []

    if not has_mapper:
        return [_error(name, "`Map` required if union type or custom type")]

    if mapper_type is not _UNSET and not _same_type(annotation, mapper_type):
        return _mismatch(name, annotation, mapper_type)

    return []


def _mapper_return_type(target: object, module: str) -> Any:
    """Return the type a `Map` target produces, or `_UNSET` when unknown."""
    try:
        rule = build_rule(target, module=module)
    except PackageError:
        return _UNSET

    if isinstance(rule, CoerceRule):
        return rule.python_type
    if isinstance(rule, NestedRule):
        if isinstance(rule.schema_ref, str):
            resolved = getattr(sys.modules.get(module), rule.schema_ref, None)
            return resolved if is_schema(resolved) else _UNSET
        return rule.schema_ref
    if isinstance(rule, ConvertRule):
        return _function_return_type(rule.func)
    return _UNSET


def _function_return_type(func: Any) -> Any:
    try:
        hints = typing.get_type_hints(func)
    except Exception:  # noqa: BLE001
        return _UNSET
    if "return" not in hints:
        return _UNSET
    returned = hints["return"]
    if typing.get_origin(returned) is tuple:
        args = typing.get_args(returned)
        return args[0] if args else _UNSET
    return returned


def _same_type(left: Any, right: Any) -> bool:
    return _normalize(left) == _normalize(right)


def _normalize(annotation: Any) -> Any:
    if annotation is None:
        return type(None)
    # int and float both decode JSON numbers
    if annotation is float:
        return int
    return annotation


def type_name(annotation: Any) -> str:
    """Render an annotation the way it is written in source."""
    if annotation is None or annotation is type(None):
        return "None"
    if annotation is Any:
        return "Any"
    origin = typing.get_origin(annotation)
    if origin in {types.UnionType, typing.Union}:
        return " | ".join(type_name(arg) for arg in typing.get_args(annotation))
    if origin is not None:
        args = ", ".join(type_name(arg) for arg in typing.get_args(annotation))
        return f"{type_name(origin)}[{args}]"
    if isinstance(annotation, type):
        return annotation.__name__
    return repr(annotation).removeprefix("typing.")


def _error(field_name: str, message: str) -> str:
    return f"× field: {field_name}  message: {message}"


def _mismatch(field_name: str, annotation: Any, mapper_type: Any) -> list[str]:
    return [
        _error(field_name, "type mismatch"),
        f"   property type: {type_name(annotation)}",
        f"   custom mapper type: {type_name(mapper_type)}",
    ]
