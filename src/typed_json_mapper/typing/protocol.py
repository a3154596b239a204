"""Conversion function interfaces."""

from __future__ import annotations

from typing import Any, Protocol

Errors = list[str] | None


class ConvertFunc(Protocol):
    """Custom conversion function bound to a field with `Map`."""

    def __call__(self, source: Any, /) -> tuple[Any, Errors]:
        """Convert a raw JSON value.

        Args:
            source: Raw value found under the field's key.

        Returns:
            tuple[Any, Errors]: Converted value and its errors, or None when valid.
        """
