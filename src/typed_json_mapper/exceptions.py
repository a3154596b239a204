"""Package exceptions."""

from __future__ import annotations

from dataclasses import dataclass


class PackageError(Exception):
    """Root exception for the package."""


@dataclass(frozen=True)
class SettingsError(PackageError):
    """Raised when settings cannot be loaded or validated."""

    message: str = "Failed to load settings"
    exc: BaseException | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.exc}" if self.exc else self.message


@dataclass(frozen=True)
class SchemaDeclarationError(PackageError):
    """Raised when a schema is declared or referenced in an unusable way."""

    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message


@dataclass(frozen=True)
class CheckerError(PackageError):
    """Raised when a declaration file cannot be loaded for checking."""

    path: str
    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Cannot check '{self.path}': {self.message}"
