from __future__ import annotations

import pytest

from typed_json_mapper.processing.keys import to_snake_case, wire_key


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("camelCaseProp", "camel_case_prop"),
        ("name", "name"),
        ("already_snake", "already_snake"),
        ("URL", "_u_r_l"),
        ("arrayOfString2", "array_of_string2"),
        ("", ""),
    ],
)
def test_to_snake_case(name: str, expected: str) -> None:
    assert to_snake_case(name) == expected


def test_wire_key_respects_transform_flag() -> None:
    assert wire_key("camelCase", transform_keys=True) == "camel_case"
    assert wire_key("camelCase", transform_keys=False) == "camelCase"
