"""Project enums."""

from __future__ import annotations

from enum import StrEnum


class _EnumMixin(StrEnum):
    """Shared conversion helpers for user-facing enums."""

    @classmethod
    def from_str(cls, value: str) -> _EnumMixin:
        """Parse enum from string.

        Args:
            value: Raw string value.

        Raises:
            ValueError: If the value is not supported.

        Returns:
            _EnumMixin: Parsed enum value.
        """
        try:
            return cls(value)
        except ValueError as exc:
            supported = ", ".join(member.value for member in cls)
            message = f"Unsupported {cls.__name__} value '{value}'. Expected one of: {supported}"
            raise ValueError(message) from exc

    def to_str(self) -> str:
        """Return string representation.

        Returns:
            str: Enum string value.
        """
        return self.value


class ExpectedType(_EnumMixin):
    """Type category inferred from a field's default value."""

    NULL = "null"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    UNKNOWN = "unknown"

    @classmethod
    def of(cls, value: object) -> ExpectedType:
        """Infer the expected type of a default value.

        Args:
            value: Template default value.

        Returns:
            ExpectedType: Inferred type category.
        """
        if value is None:
            return cls.NULL
        if isinstance(value, (list, tuple)):
            return cls.ARRAY
        # bool subclasses int
        if isinstance(value, bool):
            return cls.BOOLEAN
        if isinstance(value, (int, float)):
            return cls.NUMBER
        if isinstance(value, str):
            return cls.STRING
        return cls.UNKNOWN

    @property
    def is_primitive(self) -> bool:
        """Return whether values of this type are decoded by primitive coercion."""
        return self in {ExpectedType.NULL, ExpectedType.STRING, ExpectedType.NUMBER, ExpectedType.BOOLEAN}


class PrimitiveKind(_EnumMixin):
    """Primitive coercion targets usable as custom rules."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"


class RuleKind(_EnumMixin):
    """Custom conversion rule variants."""

    COERCE = "coerce"
    CONVERT = "convert"
    NESTED = "nested"
