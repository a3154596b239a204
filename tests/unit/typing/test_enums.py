from __future__ import annotations

import pytest

from typed_json_mapper.typing.enums import ExpectedType, PrimitiveKind, RuleKind


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, ExpectedType.NULL),
        ([], ExpectedType.ARRAY),
        ((1, 2), ExpectedType.ARRAY),
        ("", ExpectedType.STRING),
        (0, ExpectedType.NUMBER),
        (1.5, ExpectedType.NUMBER),
        (False, ExpectedType.BOOLEAN),
        ({}, ExpectedType.UNKNOWN),
        (object(), ExpectedType.UNKNOWN),
    ],
)
def test_expected_type_of_default_value(value: object, expected: ExpectedType) -> None:
    assert ExpectedType.of(value) is expected


def test_expected_type_is_primitive() -> None:
    assert ExpectedType.NULL.is_primitive
    assert ExpectedType.BOOLEAN.is_primitive
    assert not ExpectedType.ARRAY.is_primitive
    assert not ExpectedType.UNKNOWN.is_primitive


def test_rule_kind_from_str() -> None:
    assert RuleKind.from_str("nested") == RuleKind.NESTED
    assert PrimitiveKind.NUMBER.to_str() == "number"


def test_expected_type_from_str_raises_on_invalid_value() -> None:
    with pytest.raises(ValueError, match="Unsupported ExpectedType value"):
        ExpectedType.from_str("object")
