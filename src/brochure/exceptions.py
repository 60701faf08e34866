"""Brochure exceptions."""

from pathlib import Path
from typing import Any

from brochure.enums import ContextKey


class BrochureError(Exception):
    """Base exception for Brochure errors."""


# =============================================================================
# Template Exceptions
# =============================================================================


class TemplateError(BrochureError):
    """Base exception for template processing errors."""

    @property
    def recovery_suggestion(self) -> str:
        """A short hint on how the caller can fix the problem."""
        return "Check the template syntax and structure"


class MissingContextValueError(TemplateError):
    """Raised when a required context key has no value."""

    def __init__(self, key: ContextKey) -> None:
        """Initialize with the missing key."""
        super().__init__(f"Missing required template value: {key.display_name}")
        self.key: ContextKey = key

    @property
    def recovery_suggestion(self) -> str:
        return f"Provide a value for '{self.key.value}'"


class UnknownContextKeyError(TemplateError):
    """Raised when a name outside the closed key set is used as a context key."""

    def __init__(self, name: str) -> None:
        """Initialize with the offending name."""
        super().__init__(f"Unknown context key: {name!r}")
        self.name: str = name

    @property
    def recovery_suggestion(self) -> str:
        return "Use one of the names defined by ContextKey"


class InvalidContextValueError(TemplateError):
    """Raised when a context value is not a supported value kind."""

    def __init__(
        self,
        message: str,
        *,
        key: ContextKey,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
    ) -> None:
        """Initialize with error message and the rejected value."""
        super().__init__(message)
        self.key: ContextKey = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]

    @property
    def recovery_suggestion(self) -> str:
        return (
            "Use a string, boolean, number, date, sequence, or string-keyed "
            "mapping value"
        )


class InvalidTemplateError(TemplateError):
    """Raised when template content or metadata is malformed."""

    def __init__(self, reason: str) -> None:
        """Initialize with the reason the template is invalid."""
        super().__init__(f"Invalid template: {reason}")
        self.reason: str = reason


class RenderingFailedError(TemplateError):
    """Raised when a template cannot be rendered."""

    def __init__(self, reason: str, *, cause: Exception | None = None) -> None:
        """Initialize with the failure reason and optional underlying cause."""
        super().__init__(f"Template rendering failed: {reason}")
        self.reason: str = reason
        self.cause: Exception | None = cause

    @property
    def recovery_suggestion(self) -> str:
        return "Verify template variables and syntax"


class FileWriteFailedError(TemplateError):
    """Raised by materializers when a generated file cannot be written."""

    def __init__(self, path: str, cause: Exception) -> None:
        """Initialize with the target path and the underlying I/O error."""
        super().__init__(f"Failed to write file '{path}': {cause}")
        self.path: str = path
        self.cause: Exception = cause

    @property
    def recovery_suggestion(self) -> str:
        return "Check file permissions and available disk space"


# =============================================================================
# Version Exceptions
# =============================================================================


class TemplateVersionError(BrochureError):
    """Base exception for template version errors."""


class InvalidVersionFormatError(TemplateVersionError, ValueError):
    """Raised when a version string is not major.minor.patch."""

    def __init__(self, message: str, *, value: str) -> None:
        """Initialize with error message and the rejected string."""
        super().__init__(f"Invalid version format: {message}")
        self.value: str = value


class IncompatibleVersionError(TemplateVersionError):
    """Raised when a template version does not match a required major version."""

    def __init__(self, message: str, *, current: str, target: str) -> None:
        """Initialize with error message and both version strings."""
        super().__init__(f"Incompatible version: {message}")
        self.current: str = current
        self.target: str = target


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(BrochureError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
