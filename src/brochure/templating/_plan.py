"""Resolve a template's structure into concrete output without touching disk.

A plan tells a materializer exactly what to create: directories, files with
their final bytes, and assets that must be downloaded. Building a plan never
performs I/O.
"""

from dataclasses import dataclass
from functools import cache
from typing import TYPE_CHECKING, assert_never

from brochure.exceptions import InvalidTemplateError, RenderingFailedError, TemplateError
from brochure.utils import create_logger

from ._context import ContextStore
from ._models import (
    AssetTemplate,
    Base64Asset,
    BinaryData,
    EmbeddedAsset,
    ExternalAsset,
    FileTemplate,
    StaticText,
    Template,
    TemplateText,
)
from ._renderer import TemplateRenderer

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger


@dataclass(slots=True, frozen=True)
class PlannedDirectory:
    """A directory to create."""

    path: str
    permissions: int


@dataclass(slots=True, frozen=True)
class PlannedFile:
    """A file (or embedded asset) with its final bytes."""

    path: str
    data: bytes
    permissions: int


@dataclass(slots=True, frozen=True)
class PlannedDownload:
    """An asset the materializer must fetch from `url`."""

    path: str
    url: str
    permissions: int


@dataclass(slots=True, frozen=True)
class PlanError:
    """A file or asset that could not be resolved."""

    path: str
    error: TemplateError


@dataclass(slots=True, frozen=True)
class ProjectPlan:
    """Everything needed to materialize one template.

    Attributes:
        template_id: Id of the planned template.
        directories: Directories in template order.
        files: Resolved files, then resolved inline assets, in template order.
        downloads: External assets in template order.
        errors: Files and assets that failed; their siblings are still planned.
    """

    template_id: str
    directories: tuple[PlannedDirectory, ...]
    files: tuple[PlannedFile, ...]
    downloads: tuple[PlannedDownload, ...]
    errors: tuple[PlanError, ...] = ()

    @property
    def ok(self) -> bool:
        """True when every file and asset resolved."""
        return not self.errors


@cache
def _default_logger() -> "FilteringBoundLogger":  # noqa: UP037
    return create_logger("brochure.plan")


def _resolve_file(
    file: FileTemplate,
    context: ContextStore,
    renderer: TemplateRenderer,
) -> bytes:
    match file.content:
        case TemplateText(text=text):
            rendered = renderer.render(text, context)
        case StaticText(text=text):
            rendered = text
        case BinaryData(data=data):
            return data
        case _:
            assert_never(file.content)

    try:
        return rendered.encode(file.encoding)
    except UnicodeEncodeError as e:
        msg = f"cannot encode {file.path!r} as {file.encoding}: {e.reason}"
        raise InvalidTemplateError(msg) from e


def _resolve_asset(asset: AssetTemplate) -> PlannedFile | PlannedDownload:
    match asset.content:
        case EmbeddedAsset(data=data):
            return PlannedFile(path=asset.path, data=data, permissions=asset.permissions)
        case Base64Asset():
            try:
                data = asset.content.decode()
            except InvalidTemplateError as e:
                msg = f"invalid base64 data for asset: {asset.path}"
                raise InvalidTemplateError(msg) from e
            return PlannedFile(path=asset.path, data=data, permissions=asset.permissions)
        case ExternalAsset(url=url):
            return PlannedDownload(
                path=asset.path, url=str(url), permissions=asset.permissions
            )
        case _:
            assert_never(asset.content)


def plan_project(
    template: Template,
    context: ContextStore,
    *,
    renderer: TemplateRenderer | None = None,
    fail_fast: bool = False,
    logger: "FilteringBoundLogger | None" = None,  # noqa: UP037
) -> ProjectPlan:
    """Resolve every directory, file, and asset of `template`.

    Required context is validated before anything is rendered. A file or
    asset that fails is recorded in :attr:`ProjectPlan.errors` and the rest
    are still planned, unless `fail_fast` is set.

    Args:
        template: The template to plan.
        context: Values for rendering ``template`` files.
        renderer: Renderer for ``template`` files. Defaults to a new renderer.
        fail_fast: Raise the first file or asset error instead of collecting it.
        logger: Logger for progress messages.

    Returns:
        The resolved plan.

    Raises:
        MissingContextValueError: If a required context key is absent.
        InvalidTemplateError: With `fail_fast`, for the first bad file or asset.
        RenderingFailedError: With `fail_fast`, for the first file that fails
            to render.
    """
    log = logger if logger is not None else _default_logger()
    renderer = renderer if renderer is not None else TemplateRenderer()

    log.info("Planning project", template=template.id, version=str(template.version))
    template.validate_context(context)

    structure = template.structure
    directories = tuple(
        PlannedDirectory(path=directory.path, permissions=directory.permissions)
        for directory in structure.directories
    )

    files: list[PlannedFile] = []
    downloads: list[PlannedDownload] = []
    errors: list[PlanError] = []

    for file in structure.files:
        log.debug("Resolving file", path=file.path, kind=file.content.kind)
        try:
            data = _resolve_file(file, context, renderer)
        except (InvalidTemplateError, RenderingFailedError) as e:
            if fail_fast:
                raise
            log.warning("File skipped", path=file.path, error=str(e))
            errors.append(PlanError(path=file.path, error=e))
            continue
        files.append(PlannedFile(path=file.path, data=data, permissions=file.permissions))

    for asset in structure.assets:
        log.debug("Resolving asset", path=asset.path, kind=asset.content.kind)
        try:
            resolved = _resolve_asset(asset)
        except InvalidTemplateError as e:
            if fail_fast:
                raise
            log.warning("Asset skipped", path=asset.path, error=str(e))
            errors.append(PlanError(path=asset.path, error=e))
            continue
        if isinstance(resolved, PlannedDownload):
            downloads.append(resolved)
        else:
            files.append(resolved)

    log.info(
        "Project planned",
        template=template.id,
        files=len(files),
        downloads=len(downloads),
        errors=len(errors),
    )
    return ProjectPlan(
        template_id=template.id,
        directories=directories,
        files=tuple(files),
        downloads=tuple(downloads),
        errors=tuple(errors),
    )
