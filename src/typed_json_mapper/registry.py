"""Per-schema template registry of custom rules and ignore flags."""

from __future__ import annotations

from typing import TYPE_CHECKING

from typed_json_mapper.logging import get_logger

if TYPE_CHECKING:
    from typed_json_mapper.typing.models.rules import MapperRule

logger = get_logger(__name__)


class TemplateRegistry:
    """Custom rules and ignore flags of one schema, keyed by field name.

    Written while the schema class is declared and read-only afterwards.
    """

    def __init__(self, schema_name: str = "") -> None:
        self.schema_name = schema_name
        self._mappers: dict[str, MapperRule] = {}
        self._ignored: set[str] = set()
        self.declaration_errors: list[str] = []

    def register_mapper(self, field_name: str, rule: MapperRule) -> bool:
        """Record the custom rule of a field.

        Args:
            field_name: Declared field name.
            rule: Conversion rule.

        Returns:
            bool: False when the field already had a rule; the first rule is kept.
        """
        if field_name in self._mappers:
            message = f"`{self.schema_name}.{field_name}` has more than one `Map` declaration."
            self.declaration_errors.append(message)
            logger.warning(
                "Duplicate Map declaration ignored",
                extra={"schema": self.schema_name, "field": field_name},
            )
            return False
        self._mappers[field_name] = rule
        return True

    def register_ignore_error(self, field_name: str) -> None:
        """Record that decode failures on a field are tolerated silently."""
        self._ignored.add(field_name)

    def lookup_mapper(self, field_name: str) -> MapperRule | None:
        """Return the custom rule of a field, if any."""
        return self._mappers.get(field_name)

    def is_error_ignored(self, field_name: str) -> bool:
        """Return whether decode failures on a field are tolerated."""
        return field_name in self._ignored

    def __repr__(self) -> str:
        return (
            f"TemplateRegistry(schema_name={self.schema_name!r}, "
            f"mappers={sorted(self._mappers)!r}, ignored={sorted(self._ignored)!r})"
        )


def lookup_mapper(instance: object, field_name: str) -> MapperRule | None:
    """Return the custom rule of a field through an instance's schema.

    Args:
        instance: Schema instance.
        field_name: Declared field name.

    Returns:
        MapperRule | None: Registered rule.
    """
    return _registry_of(instance).lookup_mapper(field_name)


def is_error_ignored(instance: object, field_name: str) -> bool:
    """Return whether a field of an instance's schema ignores decode errors.

    Args:
        instance: Schema instance.
        field_name: Declared field name.

    Returns:
        bool: True when errors are ignored.
    """
    return _registry_of(instance).is_error_ignored(field_name)


def _registry_of(instance: object) -> TemplateRegistry:
    return type(instance).__json_mapper__.registry  # type: ignore[attr-defined]
