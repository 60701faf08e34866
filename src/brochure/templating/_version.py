"""Semantic versions for templates."""

import re
from dataclasses import dataclass

from brochure.exceptions import InvalidVersionFormatError

_COMPONENT_PATTERN = re.compile(r"[0-9]+")
"""A single non-negative integer version component."""

VERSION_COMPONENTS = 3
"""Number of dot-separated components in a version string."""

MIGRATION_NOTE_MAJOR = (
    "Major version upgrade may include breaking changes. Manual review recommended."
)
MIGRATION_NOTE_MINOR = "Minor version upgrade includes new features and improvements."
MIGRATION_NOTE_PATCH = (
    "Patch version upgrade includes bug fixes and minor improvements."
)
MIGRATION_NOTE_NONE = "No migration needed - versions are identical."
MIGRATION_NOTE_DOWNGRADE = (
    "Downgrade detected - this may remove features or cause compatibility issues."
)


@dataclass(slots=True, frozen=True, order=True)
class TemplateVersion:
    """A major.minor.patch version.

    Negative components are clamped to zero. Ordering is lexicographic on
    (major, minor, patch); two versions are compatible when their major
    components match.
    """

    major: int = 1
    minor: int = 0
    patch: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "major", max(0, self.major))
        object.__setattr__(self, "minor", max(0, self.minor))
        object.__setattr__(self, "patch", max(0, self.patch))

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    @classmethod
    def parse(cls, value: str) -> "TemplateVersion":  # noqa: UP037
        """Parse a ``major.minor.patch`` string.

        Args:
            value: Version string like "1.2.3".

        Returns:
            The parsed version.

        Raises:
            InvalidVersionFormatError: If the string does not have exactly three
                dot-separated non-negative integer components.

        Example:
            >>> TemplateVersion.parse("2.1.0")
            TemplateVersion(major=2, minor=1, patch=0)
        """
        components = value.split(".")
        if len(components) != VERSION_COMPONENTS:
            msg = "Version must be in format major.minor.patch"
            raise InvalidVersionFormatError(msg, value=value)

        if not all(_COMPONENT_PATTERN.fullmatch(part) for part in components):
            msg = "All version components must be non-negative integers"
            raise InvalidVersionFormatError(msg, value=value)

        major, minor, patch = (int(part) for part in components)
        return cls(major=major, minor=minor, patch=patch)

    def is_compatible(self, other: "TemplateVersion") -> bool:  # noqa: UP037
        """Whether both versions share a major component."""
        return self.major == other.major

    def migration_note(self, target: "TemplateVersion") -> str:  # noqa: UP037
        """Describe what moving from this version to `target` involves.

        The first matching rule wins: a higher target major, then minor, then
        patch; identical versions; otherwise a downgrade.
        """
        if self.major < target.major:
            return MIGRATION_NOTE_MAJOR
        if self.minor < target.minor:
            return MIGRATION_NOTE_MINOR
        if self.patch < target.patch:
            return MIGRATION_NOTE_PATCH
        if self == target:
            return MIGRATION_NOTE_NONE
        return MIGRATION_NOTE_DOWNGRADE

    def migration_info(self, target: "TemplateVersion") -> "TemplateMigrationInfo":  # noqa: UP037
        """Summarize a migration from this version to `target`."""
        return TemplateMigrationInfo(
            from_version=self,
            to_version=target,
            is_breaking=self.major != target.major,
            can_auto_migrate=self.is_compatible(target),
            notes=self.migration_note(target),
        )


@dataclass(slots=True, frozen=True)
class TemplateMigrationInfo:
    """Migration details between two template versions.

    Attributes:
        from_version: The current version.
        to_version: The target version.
        is_breaking: True when the major components differ.
        can_auto_migrate: True when the versions are compatible.
        notes: Human-readable migration note.
    """

    from_version: TemplateVersion
    to_version: TemplateVersion
    is_breaking: bool
    can_auto_migrate: bool
    notes: str
