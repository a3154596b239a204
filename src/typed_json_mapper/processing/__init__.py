"""Decoding helpers for keys and primitive values."""

from typed_json_mapper.processing.coercion import (
    coerce,
    js_boolean,
    js_number,
    js_string,
    to_boolean,
    to_null,
    to_number,
    to_string,
)
from typed_json_mapper.processing.keys import to_snake_case, wire_key

__all__ = [
    "coerce",
    "js_boolean",
    "js_number",
    "js_string",
    "to_boolean",
    "to_null",
    "to_number",
    "to_snake_case",
    "to_string",
    "wire_key",
]
