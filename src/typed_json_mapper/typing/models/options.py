"""Decode options model."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class DecodeOptions(BaseModel):
    """Options accepted by `decode`."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    disable_transform_keys: bool = Field(
        default=False,
        alias="disableTransformKeys",
        description="Look up field names verbatim instead of converting them to snake_case.",
    )

    @classmethod
    def coerce(cls, options: DecodeOptions | Mapping[str, Any] | None) -> DecodeOptions:
        """Build options from an instance, a plain mapping or None.

        Args:
            options: Options in any accepted form.

        Returns:
            DecodeOptions: Validated options.
        """
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        return cls.model_validate(dict(options))
