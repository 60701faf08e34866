"""Placeholder tokenizer and block parser.

Templates are scanned once for ``{{...}}`` placeholders. Block tags
(``#each``, ``#if``, ``#unless``) open a frame on a stack and the matching
closing tag pops it, so blocks of the same kind nest correctly.

Malformed structure never raises:

- A closing tag that does not match the innermost open block becomes an
  :class:`Unknown` node (rendered as nothing).
- An opening tag that is never closed becomes an :class:`Unknown` node and its
  body is spliced inline into the enclosing block.
"""

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Literal

type BlockKind = Literal["each", "if", "unless"]
type LoopRefKind = Literal["this", "field", "index", "first", "last"]

# =============================================================================
# Regex Patterns
# =============================================================================

_TAG_PATTERN = re.compile(r"\{\{([^{}]*)\}\}")
"""A placeholder span: ``{{`` + anything without braces + ``}}``."""

_OPEN_PATTERN = re.compile(r"#(each|if|unless)\s+(\w+)")
"""Block opening tag body, e.g. ``#if seoEnabled``."""

_CLOSE_PATTERN = re.compile(r"/(each|if|unless)")
"""Block closing tag body, e.g. ``/if``."""

_DEFAULT_PATTERN = re.compile(r"(\w+)\|default:([^}]+)")
"""Default tag body, e.g. ``tagline|default:Welcome``."""

_VARIABLE_PATTERN = re.compile(r"\w+")
"""Bare variable tag body."""

_LOOP_REF_PATTERN = re.compile(r"this(?:\.(.+))?|@(index|first|last)", re.DOTALL)
"""Loop-scope tag body: ``this``, ``this.field``, ``@index``, ``@first``, ``@last``."""

# =============================================================================
# Nodes
# =============================================================================


@dataclass(slots=True, frozen=True)
class Text:
    """Literal template text."""

    value: str


@dataclass(slots=True, frozen=True)
class Variable:
    """``{{name}}``."""

    name: str


@dataclass(slots=True, frozen=True)
class Default:
    """``{{name|default:fallback}}``."""

    name: str
    fallback: str


@dataclass(slots=True, frozen=True)
class LoopRef:
    """A loop-scope token; `field` is set only for ``{{this.field}}``."""

    kind: LoopRefKind
    field: str | None = None


@dataclass(slots=True, frozen=True)
class Unknown:
    """Any placeholder the engine does not understand; renders as nothing."""

    tag: str


@dataclass(slots=True, frozen=True)
class If:
    """``{{#if name}}...{{/if}}``."""

    name: str
    body: "tuple[Node, ...]"  # noqa: UP037


@dataclass(slots=True, frozen=True)
class Unless:
    """``{{#unless name}}...{{/unless}}``."""

    name: str
    body: "tuple[Node, ...]"  # noqa: UP037


@dataclass(slots=True, frozen=True)
class Each:
    """``{{#each name}}...{{/each}}``."""

    name: str
    body: "tuple[Node, ...]"  # noqa: UP037


type Node = Text | Variable | Default | LoopRef | Unknown | If | Unless | Each

# =============================================================================
# Parser
# =============================================================================


@dataclass(slots=True)
class _Frame:
    kind: BlockKind | None
    name: str
    tag: str
    children: list[Node] = field(default_factory=list)


def _parse_inline(inner: str, tag: str) -> Node:
    if loop_ref := _LOOP_REF_PATTERN.fullmatch(inner):
        field_name, marker = loop_ref.group(1), loop_ref.group(2)
        if marker is not None:
            return LoopRef(kind=marker)
        if field_name is not None:
            return LoopRef(kind="field", field=field_name)
        return LoopRef(kind="this")

    if default := _DEFAULT_PATTERN.fullmatch(inner):
        return Default(name=default.group(1), fallback=default.group(2))

    if _VARIABLE_PATTERN.fullmatch(inner):
        return Variable(name=inner)

    return Unknown(tag=tag)


def _close_frame(frame: _Frame) -> Node:
    body = tuple(frame.children)
    match frame.kind:
        case "each":
            return Each(name=frame.name, body=body)
        case "if":
            return If(name=frame.name, body=body)
        case _:
            return Unless(name=frame.name, body=body)


@lru_cache(maxsize=512)
def parse_template(template: str) -> tuple[Node, ...]:
    """Parse template text into a tree of nodes.

    Args:
        template: Template text containing ``{{...}}`` placeholders.

    Returns:
        Top-level nodes in document order.
    """
    root = _Frame(kind=None, name="", tag="")
    stack: list[_Frame] = [root]
    position = 0

    for match in _TAG_PATTERN.finditer(template):
        if match.start() > position:
            stack[-1].children.append(Text(template[position : match.start()]))
        position = match.end()

        inner, tag = match.group(1), match.group(0)

        if opened := _OPEN_PATTERN.fullmatch(inner):
            kind: BlockKind = opened.group(1)  # pyright: ignore[reportAssignmentType]
            stack.append(_Frame(kind=kind, name=opened.group(2), tag=tag))
        elif closed := _CLOSE_PATTERN.fullmatch(inner):
            if len(stack) > 1 and stack[-1].kind == closed.group(1):
                frame = stack.pop()
                stack[-1].children.append(_close_frame(frame))
            else:
                stack[-1].children.append(Unknown(tag=tag))
        else:
            stack[-1].children.append(_parse_inline(inner, tag))

    if position < len(template):
        stack[-1].children.append(Text(template[position:]))

    # Unclosed blocks: drop the opening tag, keep the body in place
    while len(stack) > 1:
        frame = stack.pop()
        parent = stack[-1].children
        parent.append(Unknown(tag=frame.tag))
        parent.extend(frame.children)

    return tuple(root.children)
