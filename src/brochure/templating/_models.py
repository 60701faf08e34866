"""Pydantic models describing a scaffoldable project template."""

import base64
import codecs
from pathlib import PurePosixPath, PureWindowsPath
from typing import Annotated, ClassVar, Literal

from pydantic import (
    AfterValidator,
    AnyUrl,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    PlainValidator,
    field_validator,
)

from brochure.enums import ContextKey, TemplateCategory, TemplateFeature
from brochure.exceptions import IncompatibleVersionError, InvalidTemplateError

from ._context import ContextStore
from ._version import TemplateMigrationInfo, TemplateVersion

# =============================================================================
# Permissions
# =============================================================================

DEFAULT_PERMISSIONS = 0o644
"""Regular files and assets."""

EXECUTABLE_PERMISSIONS = 0o755
"""Scripts that should be runnable."""

READONLY_PERMISSIONS = 0o444
"""Files that should not be edited."""

DIRECTORY_PERMISSIONS = 0o755
"""Directories."""

Permissions = Annotated[int, Field(ge=0, le=0o7777)]

# =============================================================================
# Field Types
# =============================================================================


def _check_relative_path(value: str) -> str:
    if not value:
        msg = "path must not be empty"
        raise ValueError(msg)
    if PurePosixPath(value).is_absolute() or PureWindowsPath(value).anchor:
        msg = f"path must be relative: {value!r}"
        raise ValueError(msg)
    if ".." in PurePosixPath(value.replace("\\", "/")).parts:
        msg = f"path must not leave the project root: {value!r}"
        raise ValueError(msg)
    return value


def _to_version(value: object) -> TemplateVersion:
    if isinstance(value, TemplateVersion):
        return value
    if isinstance(value, str):
        return TemplateVersion.parse(value)
    if isinstance(value, dict):
        try:
            return TemplateVersion(**value)  # pyright: ignore[reportUnknownArgumentType]
        except TypeError as e:
            msg = f"invalid version mapping: {e}"
            raise ValueError(msg) from e
    msg = f"expected a version string or mapping, got {type(value).__name__}"
    raise ValueError(msg)


RelativePath = Annotated[str, AfterValidator(_check_relative_path)]

Version = Annotated[
    TemplateVersion,
    PlainValidator(_to_version),
    PlainSerializer(str, return_type=str),
]


class _FrozenModel(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(
        frozen=True, extra="ignore", arbitrary_types_allowed=True
    )


# =============================================================================
# Content Variants
# =============================================================================


class TemplateText(_FrozenModel):
    """Text passed through the renderer before it is written."""

    kind: Literal["template"] = "template"
    text: str


class StaticText(_FrozenModel):
    """Text written verbatim."""

    kind: Literal["static"] = "static"
    text: str


class BinaryData(_FrozenModel):
    """Bytes written verbatim, with no text processing."""

    kind: Literal["binary"] = "binary"
    data: bytes


FileContent = Annotated[
    TemplateText | StaticText | BinaryData, Field(discriminator="kind")
]


class EmbeddedAsset(_FrozenModel):
    """Asset bytes carried inline."""

    kind: Literal["embedded"] = "embedded"
    data: bytes


class Base64Asset(_FrozenModel):
    """Asset bytes carried as a base64 string."""

    kind: Literal["base64"] = "base64"
    data: str

    def decode(self) -> bytes:
        """Decode the payload.

        Raises:
            InvalidTemplateError: If the payload is not valid base64.
        """
        try:
            return base64.b64decode(self.data, validate=True)
        except ValueError as e:
            msg = f"invalid base64 data: {e}"
            raise InvalidTemplateError(msg) from e


class ExternalAsset(_FrozenModel):
    """Asset fetched from a URL by the materializer."""

    kind: Literal["external"] = "external"
    url: AnyUrl


AssetContent = Annotated[
    EmbeddedAsset | Base64Asset | ExternalAsset, Field(discriminator="kind")
]

# =============================================================================
# Structure
# =============================================================================


class DirectoryTemplate(_FrozenModel):
    """A directory to create, relative to the project root."""

    path: RelativePath
    permissions: Permissions = DIRECTORY_PERMISSIONS


class FileTemplate(_FrozenModel):
    """A file to generate, relative to the project root."""

    path: RelativePath
    content: FileContent
    encoding: str = "utf-8"
    permissions: Permissions = DEFAULT_PERMISSIONS

    @field_validator("encoding")
    @classmethod
    def _known_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as e:
            msg = f"unknown encoding: {value!r}"
            raise ValueError(msg) from e
        return value


class AssetTemplate(_FrozenModel):
    """An asset to copy or download, relative to the project root."""

    path: RelativePath
    content: AssetContent
    permissions: Permissions = DEFAULT_PERMISSIONS


class TemplateStructure(_FrozenModel):
    """Ordered directories, files, and assets making up a template."""

    directories: tuple[DirectoryTemplate, ...] = ()
    files: tuple[FileTemplate, ...] = ()
    assets: tuple[AssetTemplate, ...] = ()


# =============================================================================
# Template
# =============================================================================


class Template(_FrozenModel):
    """A project template.

    Attributes:
        id: Unique identifier.
        name: Human-readable name.
        description: What the template provides.
        category: Kind of project.
        structure: Directories, files, and assets to generate.
        features: Features the template advertises.
        required_context: Keys that must be present before rendering.
        optional_context: Keys that enhance the output when present.
        version: Template version.
    """

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    description: str = ""
    category: TemplateCategory
    structure: TemplateStructure = Field(default_factory=TemplateStructure)
    features: frozenset[TemplateFeature] = frozenset()
    required_context: tuple[ContextKey, ...] = ()
    optional_context: tuple[ContextKey, ...] = ()
    version: Version = Field(default_factory=TemplateVersion)

    def is_compatible(self, target: TemplateVersion) -> bool:
        """Whether this template's version shares a major version with `target`."""
        return self.version.is_compatible(target)

    def ensure_compatible(self, target: TemplateVersion) -> None:
        """Require compatibility with `target`.

        Raises:
            IncompatibleVersionError: If the major versions differ.
        """
        if not self.is_compatible(target):
            msg = (
                f"template {self.id!r} is at {self.version}, "
                f"which is not compatible with {target}"
            )
            raise IncompatibleVersionError(
                msg, current=str(self.version), target=str(target)
            )

    def migration_info(self, target: TemplateVersion) -> TemplateMigrationInfo:
        """Describe a migration from this template's version to `target`."""
        return self.version.migration_info(target)

    def version_metadata(self) -> dict[str, object]:
        """Version details suitable for writing into generated metadata."""
        return {
            "version": str(self.version),
            "major": self.version.major,
            "minor": self.version.minor,
            "patch": self.version.patch,
            "template_id": self.id,
            "template_name": self.name,
            "category": self.category.value,
        }

    def validate_context(self, context: ContextStore) -> None:
        """Check that `context` holds every required key.

        Raises:
            MissingContextValueError: For the first missing key.
        """
        context.validate(self.required_context)
