"""CLI entry point for typed-json-mapper."""

from __future__ import annotations

import argparse
import importlib
import json
import sys
from pathlib import Path
from typing import Any

from typed_json_mapper import __version__, logger
from typed_json_mapper.checker import check_file, expand_patterns, load_module
from typed_json_mapper.decoder import decode
from typed_json_mapper.exceptions import PackageError, SchemaDeclarationError
from typed_json_mapper.logging import configure_logging
from typed_json_mapper.mapper import JsonMapper, is_schema
from typed_json_mapper.settings import Settings, get_settings
from typed_json_mapper.typing.models import DecodeOptions

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_VIOLATIONS = 2


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser.

    Returns:
        argparse.ArgumentParser: The configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="typed-json-mapper")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at debug level")

    subparsers = parser.add_subparsers(dest="command")

    lint_parser = subparsers.add_parser("lint", help="Check schema declarations for inconsistencies")
    lint_parser.add_argument("patterns", nargs="+", metavar="PATTERN", help="Python files or glob patterns")
    lint_parser.add_argument("-q", "--quiet", action="store_true", help="Hide diagnostics, keep the exit status")

    decode_parser = subparsers.add_parser("decode", help="Decode a JSON file with a schema")
    decode_parser.add_argument(
        "--schema",
        required=True,
        dest="schema",
        help="Schema as 'module:ClassName' or 'file.py:ClassName'",
    )
    decode_parser.add_argument("--input", required=True, type=Path, dest="input_path")
    decode_parser.add_argument(
        "--disable-transform-keys",
        action="store_true",
        default=None,
        dest="disable_transform_keys",
    )

    return parser


def load_schema(reference: str) -> type[JsonMapper]:
    """Import a schema class from a `module:ClassName` or `path/to/file.py:ClassName` reference.

    Args:
        reference (str): Schema reference.

    Raises:
        SchemaDeclarationError: If the reference does not name a schema class.

    Returns:
        type[JsonMapper]: Schema class.
    """
    module_name, _, class_name = reference.rpartition(":")
    if not module_name or not class_name:
        raise SchemaDeclarationError(message=f"Schema reference must look like 'module:ClassName', got '{reference}'")
    if module_name.endswith(".py"):
        module = load_module(Path(module_name))
    else:
        try:
            module = importlib.import_module(module_name)
        except ImportError as exc:
            raise SchemaDeclarationError(message=f"Cannot import schema module '{module_name}': {exc}") from exc

    schema = getattr(module, class_name, None)
    if not is_schema(schema):
        raise SchemaDeclarationError(message=f"'{reference}' is not a JsonMapper subclass")
    return schema  # type: ignore[return-value]


def _run_lint(args: argparse.Namespace) -> int:
    """Check declaration files and print diagnostics.

    Args:
        args (argparse.Namespace): Parsed CLI args.

    Returns:
        int: Exit code.
    """
    files = expand_patterns(args.patterns)
    if not files:
        logger.info("No schema files matched", extra={"patterns": args.patterns})
        return EXIT_OK

    exit_code = EXIT_OK
    for path in files:
        try:
            errors_by_schema = check_file(path)
        except PackageError:
            logger.exception("Schema file could not be checked", extra={"path": str(path)})
            exit_code = EXIT_FAILURE
            continue

        if not errors_by_schema:
            continue
        if exit_code == EXIT_OK:
            exit_code = EXIT_VIOLATIONS
        if args.quiet:
            continue

        print(f"● {path}")  # noqa: T201
        for schema_name, errors in errors_by_schema.items():
            print(f" class: {schema_name}")  # noqa: T201
            for error in errors:
                print(f"  {error}")  # noqa: T201

    return exit_code


def _run_decode(args: argparse.Namespace, settings: Settings) -> int:
    """Decode a JSON file and print the result.

    Args:
        args (argparse.Namespace): Parsed CLI args.
        settings (Settings): Runtime settings.

    Returns:
        int: Exit code.
    """
    try:
        schema = load_schema(args.schema)
        data: Any = json.loads(args.input_path.read_text(encoding="utf-8"))
    except PackageError:
        logger.exception("Schema could not be loaded", extra={"schema": args.schema})
        return EXIT_FAILURE
    except (OSError, ValueError):
        logger.exception("Input could not be read", extra={"input_path": str(args.input_path)})
        return EXIT_FAILURE

    disable_transform_keys = args.disable_transform_keys
    if disable_transform_keys is None:
        disable_transform_keys = settings.disable_transform_keys

    instance, errors = decode(schema, data, DecodeOptions(disable_transform_keys=disable_transform_keys))
    print(  # noqa: T201
        json.dumps(
            instance.to_dict(transform_keys=not disable_transform_keys),
            indent=2,
            ensure_ascii=False,
            default=str,
        ),
    )
    for error in errors or []:
        print(error, file=sys.stderr)  # noqa: T201

    logger.info("Decode completed", extra={"schema": args.schema, "error_count": len(errors or [])})
    return EXIT_VIOLATIONS if errors else EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Run the CLI.

    Args:
        argv (list[str] | None): Arguments, defaults to `sys.argv[1:]`.

    Returns:
        int: Exit code (0 when clean, 1 on failure, 2 when violations were found).
    """
    settings = get_settings()
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(settings=settings, level="DEBUG" if args.verbose else None, force=args.verbose)

    try:
        if args.command == "lint":
            return _run_lint(args)
        if args.command == "decode":
            return _run_decode(args, settings)
    except KeyboardInterrupt:
        logger.info("Aborted by user")
        return 130

    parser.print_help()
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
