"""Primitive coercion helpers.

Every coercer returns `(value, invalid)`. The flag is strict: it is set whenever
the raw value does not already have the expected JSON type. The value is a
lenient best-effort conversion following JavaScript `Number()`/`String()`
semantics, so a partially valid payload still yields usable data.

`RULE_CONVERTERS` back the primitive `Map` targets: they apply the bare
JavaScript conversions, without invalid flags or fallbacks.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Mapping
from typing import Any

from typed_json_mapper.typing.enums import ExpectedType, PrimitiveKind

Coercer = Callable[[Any], tuple[Any, bool]]

_DECIMAL_LITERAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_RADIX_PREFIXES = {"0x": 16, "0o": 8, "0b": 2}
_INFINITIES = {"Infinity": math.inf, "+Infinity": math.inf, "-Infinity": -math.inf}


def js_number(value: object) -> int | float:
    """Convert a value the way JavaScript `Number(value)` does.

    Args:
        value (object): Raw value.

    Returns:
        int | float: Converted number, NaN when not convertible.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        return _parse_numeric_string(value)
    if isinstance(value, (list, tuple)):
        return js_number(js_string(value))
    return math.nan


def _parse_numeric_string(text: str) -> int | float:
    stripped = text.strip()
    if not stripped:
        return 0
    if stripped in _INFINITIES:
        return _INFINITIES[stripped]
    if "_" in stripped:
        return math.nan

    base = _RADIX_PREFIXES.get(stripped[:2].lower())
    if base is not None:
        try:
            return int(stripped[2:], base)
        except ValueError:
            return math.nan

    if not _DECIMAL_LITERAL.fullmatch(stripped):
        return math.nan
    number = float(stripped)
    if math.isfinite(number) and number.is_integer():
        return int(number)
    return number


def js_string(value: object) -> str:
    """Convert a value the way JavaScript `String(value)` does.

    Args:
        value (object): Raw value.

    Returns:
        str: String form.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, (list, tuple)):
        return ",".join("" if item is None else js_string(item) for item in value)
    if isinstance(value, Mapping):
        return "[object Object]"
    return str(value)


def js_boolean(value: object) -> bool:
    """Convert a value the way JavaScript `Boolean(value)` does.

    Args:
        value (object): Raw value.

    Returns:
        bool: Truthiness of the value; only null, false, 0, NaN and "" are falsy.
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return not (value == 0 or math.isnan(value))
    if isinstance(value, str):
        return value != ""
    return True


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:  # noqa: PLR2004
        return str(int(value))
    return repr(value)


def to_number(value: object) -> tuple[int | float, bool]:
    """Coerce to a number; NaN falls back to 0."""
    invalid = isinstance(value, bool) or not isinstance(value, (int, float))
    number = js_number(value)
    if isinstance(number, float) and math.isnan(number):
        return 0, invalid
    return number, invalid


def to_string(value: object) -> tuple[str, bool]:
    """Coerce to a string; None falls back to the empty string."""
    invalid = not isinstance(value, str)
    return ("" if value is None else js_string(value)), invalid


def to_boolean(value: object) -> tuple[bool, bool]:
    """Coerce to a boolean; only a value whose string form is `true` is True."""
    invalid = not isinstance(value, bool)
    return js_string(value) == "true", invalid


def to_null(value: object) -> tuple[None, bool]:
    """Coerce to None."""
    return None, value is not None


COERCERS: dict[ExpectedType, Coercer] = {
    ExpectedType.NUMBER: to_number,
    ExpectedType.STRING: to_string,
    ExpectedType.BOOLEAN: to_boolean,
    ExpectedType.NULL: to_null,
}

# `Map(int)`, `Map(str)` and `Map(bool)` convert without fallbacks and never fail.
RULE_CONVERTERS: dict[PrimitiveKind, Callable[[Any], Any]] = {
    PrimitiveKind.NUMBER: js_number,
    PrimitiveKind.STRING: js_string,
    PrimitiveKind.BOOLEAN: js_boolean,
}


def coerce(expected_type: ExpectedType, value: object) -> tuple[Any, bool]:
    """Coerce a raw value to a primitive expected type.

    Args:
        expected_type (ExpectedType): Primitive expected type.
        value (object): Raw value.

    Raises:
        ValueError: If the expected type is not primitive.

    Returns:
        tuple[Any, bool]: Coerced value and whether the raw value was invalid.
    """
    coercer = COERCERS.get(expected_type)
    if coercer is None:
        message = f"No primitive coercion for expected type '{expected_type}'"
        raise ValueError(message)
    return coercer(value)
