"""Template rendering engine.

Supported constructs:

- ``{{key}}`` - the formatted value of a context key
- ``{{key|default:literal}}`` - the key's value, else the value of `literal`
  read as a key name, else `literal` verbatim
- ``{{#if key}}...{{/if}}`` - kept when the key is present and truthy
- ``{{#unless key}}...{{/unless}}`` - kept when the key is absent or falsy
- ``{{#each key}}...{{/each}}`` - repeated for each item of a sequence, with
  ``{{this}}``, ``{{this.field}}``, ``{{@index}}``, ``{{@first}}`` and
  ``{{@last}}`` bound to the innermost loop

Anything left over that still looks like ``{{...}}`` is removed from the
output, so unresolved placeholders render as empty strings.
"""

import re
from dataclasses import dataclass
from functools import cache
from types import MappingProxyType
from typing import TYPE_CHECKING

from brochure.config import Config
from brochure.exceptions import RenderingFailedError
from brochure.utils import create_logger

from ._context import ContextStore
from ._parser import (
    Default,
    Each,
    If,
    LoopRef,
    Node,
    Text,
    Unknown,
    Unless,
    Variable,
    parse_template,
)
from ._values import ContextValue, format_value, is_truthy

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

_CLEANUP_PATTERN = re.compile(r"\{\{[^}]*\}\}")
"""Any remaining placeholder span."""


@dataclass(slots=True, frozen=True)
class _LoopScope:
    item: ContextValue
    index: int
    length: int


@cache
def _default_logger() -> "FilteringBoundLogger":  # noqa: UP037
    return create_logger("brochure.templating")


def cleanup_placeholders(text: str) -> str:
    """Remove every ``{{...}}`` span, repeating until none remain."""
    while True:
        text, count = _CLEANUP_PATTERN.subn("", text)
        if count == 0:
            return text


class TemplateRenderer:
    """Renders template text against a context store.

    Rendering is a pure function of (template, context): the renderer keeps no
    per-render state and never mutates the context, so one renderer may be
    shared across threads.
    """

    def __init__(self, logger: "FilteringBoundLogger | None" = None) -> None:  # noqa: UP037
        """Initialize the renderer.

        Args:
            logger: Logger for diagnostics. Defaults to a stderr logger.
        """
        self._logger: FilteringBoundLogger = (
            logger if logger is not None else _default_logger()
        )

    @classmethod
    def from_config(cls, config: Config) -> "TemplateRenderer":  # noqa: UP037
        """Create a renderer whose logger follows the logging configuration."""
        logger = create_logger(
            "brochure.templating",
            level=config.logging.level.value,
            log_format=config.logging.format.value,
        )
        return cls(logger=logger)

    def render(self, template: str, context: ContextStore) -> str:
        """Render a template string with the given context.

        Args:
            template: Template text.
            context: Values for placeholders.

        Returns:
            The rendered text, with no ``{{...}}`` spans remaining.

        Raises:
            RenderingFailedError: If a value cannot be formatted or the
                template nests too deeply to evaluate.
        """
        buffer: list[str] = []
        try:
            self._evaluate(parse_template(template), context, None, buffer)
        except RecursionError as e:
            msg = "template blocks are nested too deeply"
            raise RenderingFailedError(msg, cause=e) from e
        except (TypeError, ValueError, OverflowError) as e:
            raise RenderingFailedError(str(e), cause=e) from e

        return cleanup_placeholders("".join(buffer))

    def _evaluate(
        self,
        nodes: tuple[Node, ...],
        context: ContextStore,
        scope: _LoopScope | None,
        out: list[str],
    ) -> None:
        for node in nodes:
            match node:
                case Text(value=value):
                    out.append(value)
                case Variable(name=name):
                    value = context.get(name)
                    if value is None:
                        self._logger.debug("Unknown template variable", variable=name)
                    else:
                        out.append(format_value(value))
                case Default(name=name, fallback=fallback):
                    out.append(self._resolve_default(name, fallback, context))
                case LoopRef():
                    out.append(self._resolve_loop_ref(node, scope))
                case If(name=name, body=body):
                    if self._condition(name, context):
                        self._evaluate(body, context, scope, out)
                case Unless(name=name, body=body):
                    if not self._condition(name, context):
                        self._evaluate(body, context, scope, out)
                case Each(name=name, body=body):
                    self._expand_each(name, body, context, out)
                case Unknown(tag=tag):
                    self._logger.debug("Unresolved template tag", tag=tag)

    def _condition(self, name: str, context: ContextStore) -> bool:
        value = context.get(name)
        return value is not None and is_truthy(value)

    def _resolve_default(self, name: str, fallback: str, context: ContextStore) -> str:
        value = context.get(name)
        if value is not None:
            return format_value(value)

        # One level of indirection: the fallback may itself name a key
        fallback_value = context.get(fallback)
        if fallback_value is not None:
            return format_value(fallback_value)

        return fallback

    def _resolve_loop_ref(self, ref: LoopRef, scope: _LoopScope | None) -> str:
        if scope is None:
            self._logger.debug("Loop token outside of a loop", token=ref.kind)
            return ""

        match ref.kind:
            case "this":
                return format_value(scope.item)
            case "field":
                item = scope.item
                if isinstance(item, MappingProxyType) and ref.field in item:
                    return format_value(item[ref.field])
                return ""
            case "index":
                return str(scope.index)
            case "first":
                return "true" if scope.index == 0 else "false"
            case _:
                return "true" if scope.index == scope.length - 1 else "false"

    def _expand_each(
        self,
        name: str,
        body: tuple[Node, ...],
        context: ContextStore,
        out: list[str],
    ) -> None:
        items = context.get(name)
        if not isinstance(items, tuple):
            if items is not None:
                self._logger.debug("Loop source is not a sequence", variable=name)
            return

        for index, item in enumerate(items):
            scope = _LoopScope(item=item, index=index, length=len(items))
            self._evaluate(body, context, scope, out)


def render_template_string(
    template_str: str,
    context: ContextStore,
    *,
    renderer: TemplateRenderer | None = None,
) -> str:
    """Render a template string with a context store.

    Args:
        template_str: The template text.
        context: Values for placeholders.
        renderer: Optional renderer. Defaults to one with the default logger.

    Returns:
        Rendered string.
    """
    return (renderer or TemplateRenderer()).render(template_str, context)
