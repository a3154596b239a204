"""Custom conversion rule variants."""

from __future__ import annotations

from collections.abc import Callable
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from typed_json_mapper.typing.enums import PrimitiveKind, RuleKind


class CoerceRule(BaseModel):
    """Convert a value with primitive coercion; never reports errors."""

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    kind: Literal[RuleKind.COERCE] = RuleKind.COERCE
    primitive: PrimitiveKind
    python_type: type[Any] = Field(description="Python type the rule was declared with.")


class ConvertRule(BaseModel):
    """Convert a value with a user function returning `(value, errors)`."""

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    kind: Literal[RuleKind.CONVERT] = RuleKind.CONVERT
    func: Callable[..., Any]


class NestedRule(BaseModel):
    """Decode a value with another schema.

    `schema_ref` is either the schema class or the name of a schema declared in
    `module`, which allows a schema to refer to itself.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    kind: Literal[RuleKind.NESTED] = RuleKind.NESTED
    schema_ref: type[Any] | str
    module: str | None = None


MapperRule = Annotated[CoerceRule | ConvertRule | NestedRule, Field(discriminator="kind")]
