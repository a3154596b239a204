"""typed-json-mapper package."""

from typed_json_mapper.decoder import decode
from typed_json_mapper.exceptions import (
    CheckerError,
    PackageError,
    SchemaDeclarationError,
    SettingsError,
)
from typed_json_mapper.logging import configure_logging, get_logger
from typed_json_mapper.mapper import IgnoreError, JsonMapper, Map
from typed_json_mapper.settings import Settings, get_settings
from typed_json_mapper.typing.models import DecodeOptions
from typed_json_mapper.typing.protocol import Errors

__version__ = "0.1.0"

# Initialize package logger at import time via `get_logger`.
logger = get_logger("typed_json_mapper")

__all__ = [
    "CheckerError",
    "DecodeOptions",
    "Errors",
    "IgnoreError",
    "JsonMapper",
    "Map",
    "PackageError",
    "SchemaDeclarationError",
    "Settings",
    "SettingsError",
    "__version__",
    "configure_logging",
    "decode",
    "get_logger",
    "get_settings",
    "logger",
]
