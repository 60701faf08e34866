r"""Brochure templating engine.

Renders template text against a typed context store and describes project
templates as pydantic models.

Basic usage:
    from brochure.enums import ContextKey
    from brochure.templating import ContextStore, render_template_string

    context = ContextStore({
        ContextKey.PROJECT_NAME: "Acme",
        ContextKey.SKILLS: ["Python", "Rust"],
    })
    result = render_template_string(
        "# {{projectName}}\n{{#each skills}}- {{this}}\n{{/each}}",
        context,
    )

With a template model:
    from brochure.templating import Template, plan_project

    template = Template.model_validate({
        "id": "landing-page",
        "name": "Landing Page",
        "category": "landing-page",
        "required_context": ["projectName"],
        "structure": {
            "files": [
                {"path": "README.md", "content": {"kind": "template", "text": "# {{projectName}}"}},
            ],
        },
    })
    plan = plan_project(template, context)
"""

from ._context import ContextStore, SystemDefaults, process_defaults
from ._models import (
    DEFAULT_PERMISSIONS,
    DIRECTORY_PERMISSIONS,
    EXECUTABLE_PERMISSIONS,
    READONLY_PERMISSIONS,
    AssetContent,
    AssetTemplate,
    Base64Asset,
    BinaryData,
    DirectoryTemplate,
    EmbeddedAsset,
    ExternalAsset,
    FileContent,
    FileTemplate,
    StaticText,
    Template,
    TemplateStructure,
    TemplateText,
)
from ._parser import parse_template
from ._plan import (
    PlannedDirectory,
    PlannedDownload,
    PlannedFile,
    PlanError,
    ProjectPlan,
    plan_project,
)
from ._renderer import TemplateRenderer, cleanup_placeholders, render_template_string
from ._values import ContextValue, format_value, is_truthy
from ._version import TemplateMigrationInfo, TemplateVersion

__all__ = [
    "DEFAULT_PERMISSIONS",
    "DIRECTORY_PERMISSIONS",
    "EXECUTABLE_PERMISSIONS",
    "READONLY_PERMISSIONS",
    "AssetContent",
    "AssetTemplate",
    "Base64Asset",
    "BinaryData",
    "ContextStore",
    "ContextValue",
    "DirectoryTemplate",
    "EmbeddedAsset",
    "ExternalAsset",
    "FileContent",
    "FileTemplate",
    "PlanError",
    "PlannedDirectory",
    "PlannedDownload",
    "PlannedFile",
    "ProjectPlan",
    "StaticText",
    "SystemDefaults",
    "Template",
    "TemplateMigrationInfo",
    "TemplateRenderer",
    "TemplateStructure",
    "TemplateText",
    "TemplateVersion",
    "cleanup_placeholders",
    "format_value",
    "is_truthy",
    "parse_template",
    "plan_project",
    "process_defaults",
    "render_template_string",
]
