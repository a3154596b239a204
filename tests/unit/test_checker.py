from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, Any

import pytest

from typed_json_mapper import JsonMapper, Map
from typed_json_mapper.checker import check_file, check_schema, expand_patterns, load_module, type_name
from typed_json_mapper.exceptions import CheckerError

if TYPE_CHECKING:
    from pathlib import Path


def test_check_file_reports_wrong_declarations(fixtures_dir: Path) -> None:
    actual = check_file(fixtures_dir / "wrong_schemas.py")

    assert actual == {
        "WrongTypeClass": [
            "× field: never_type  message: can't use only Never type. use `None` instead",
            "",
            "× field: no_default  message: can't declare a field without default value. "
            "field initialization is required",
            "",
            "× field: union_without_map  message: `Map` required if union type or custom type",
            "",
            "× field: custom_without_map  message: `Map` required if union type or custom type",
            "",
            "× field: list_without_map  message: `Map` required if list type field",
            "",
            "× field: wrong_type1  message: type mismatch",
            "   property type: str",
            "   custom mapper type: int",
            "",
            "× field: wrong_type2  message: type mismatch",
            "   property type: int | None",
            "   custom mapper type: str | None",
            "",
            "× field: wrong_type3  message: type mismatch",
            "   property type: str",
            "   custom mapper type: User",
            "",
            "× field: multiple_map  message: `Map` is declared multiple times. it must be declared only once.",
            "",
        ],
        "WrongTypeClass2": [
            "× field: wrong_type  message: type mismatch",
            "   property type: int",
            "   custom mapper type: str",
            "",
        ],
    }


def test_check_file_accepts_consistent_declarations(fixtures_dir: Path) -> None:
    assert check_file(fixtures_dir / "clean_schemas.py") == {}


def untyped(data):  # noqa: ANN001, ANN201
    return data, None


class Loose(JsonMapper):
    value: Annotated[dict[str, Any], Map(untyped)] = {}
    ratio: Annotated[float, Map(int)] = 0.0


def test_check_schema_skips_unannotated_functions_and_treats_numbers_alike() -> None:
    assert check_schema(Loose) == []


def test_load_module_rejects_non_python_file(tmp_path: Path) -> None:
    text_file = tmp_path / "schemas.txt"
    text_file.write_text("x = 1", encoding="utf-8")

    with pytest.raises(CheckerError, match="not a Python source file"):
        load_module(text_file)


def test_load_module_wraps_import_errors(tmp_path: Path) -> None:
    broken = tmp_path / "broken.py"
    broken.write_text("raise RuntimeError('boom')\n", encoding="utf-8")

    with pytest.raises(CheckerError, match="RuntimeError: boom"):
        load_module(broken)


def test_expand_patterns_matches_python_files_once(tmp_path: Path) -> None:
    (tmp_path / "pkg").mkdir()
    (tmp_path / "pkg" / "a.py").write_text("", encoding="utf-8")
    (tmp_path / "pkg" / "b.txt").write_text("", encoding="utf-8")
    (tmp_path / ".venv").mkdir()
    (tmp_path / ".venv" / "c.py").write_text("", encoding="utf-8")

    files = expand_patterns([f"{tmp_path}/**/*.py", f"{tmp_path}/pkg/a.py"])

    assert files == [tmp_path / "pkg" / "a.py"]


def test_expand_patterns_without_match_is_empty(tmp_path: Path) -> None:
    assert expand_patterns([f"{tmp_path}/*.py"]) == []


@pytest.mark.parametrize(
    ("annotation", "expected"),
    [
        (str, "str"),
        (None, "None"),
        (type(None), "None"),
        (int | None, "int | None"),
        (list[int], "list[int]"),
        (dict[str, list[int]], "dict[str, list[int]]"),
        (Any, "Any"),
    ],
)
def test_type_name(annotation: object, expected: str) -> None:
    assert type_name(annotation) == expected
