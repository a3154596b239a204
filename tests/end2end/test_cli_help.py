from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from subprocess import CompletedProcess  # noqa: S404
from subprocess import run as subprocess_run  # noqa: S404

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


def _run_cli(*args: str) -> CompletedProcess[str]:
    return subprocess_run(  # noqa: S603
        [sys.executable, "-m", "typed_json_mapper.cli", *args],
        capture_output=True,
        text=True,
        check=False,
        env={**os.environ, "LOG_JSON": "false"},
    )


def test_cli_help() -> None:
    result = _run_cli("--help")

    assert result.returncode == 0
    assert "usage" in result.stdout.lower()


def test_cli_lint_reports_wrong_declarations() -> None:
    result = _run_cli("lint", str(FIXTURES_DIR / "*.py"))

    assert result.returncode == 2
    assert "● " in result.stdout
    assert "clean_schemas.py" not in result.stdout
    assert "× field: never_type  message: can't use only Never type. use `None` instead" in result.stdout


def test_cli_decode_round_trip(tmp_path: Path) -> None:
    payload = tmp_path / "member.json"
    payload.write_text(json.dumps({"name": "ann", "age": 40}), encoding="utf-8")

    schema = f"{FIXTURES_DIR / 'clean_schemas.py'}:Member"

    result = _run_cli("decode", "--schema", schema, "--input", str(payload))

    assert result.returncode == 0
    assert json.loads(result.stdout) == {"name": "ann", "age": 40}
