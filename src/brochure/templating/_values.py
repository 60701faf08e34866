"""Context value kinds and the rules for formatting and truthiness."""

from collections.abc import Mapping, Sequence
from datetime import date, datetime
from types import MappingProxyType

import pendulum

from brochure.enums import ContextKey
from brochure.exceptions import InvalidContextValueError

type ContextValue = (
    str
    | bool
    | int
    | float
    | date
    | tuple[ContextValue, ...]
    | MappingProxyType[str, ContextValue]
)
"""A frozen context value.

Sequences are stored as tuples and string-keyed maps as read-only mapping
proxies so a stored value can never be mutated through a shared reference.
"""


def freeze_value(key: ContextKey, value: object) -> ContextValue:
    """Validate a caller-supplied value and convert it to its frozen form.

    Args:
        key: The key the value is stored under (used for error context).
        value: A string, boolean, number, date, sequence, or string-keyed mapping.

    Returns:
        The frozen value.

    Raises:
        InvalidContextValueError: If the value (or a nested value) is not one
            of the supported kinds.
    """
    match value:
        case bool() | str() | int() | float() | date():
            return value
        case Mapping():
            frozen: dict[str, ContextValue] = {}
            for field, item in value.items():
                if not isinstance(field, str):
                    msg = (
                        f"Map keys for {key.value!r} must be strings, "
                        f"got {type(field).__name__}"
                    )
                    raise InvalidContextValueError(msg, key=key, value=value)
                frozen[field] = freeze_value(key, item)
            return MappingProxyType(frozen)
        case Sequence() if not isinstance(value, (bytes, bytearray)):
            return tuple(freeze_value(key, item) for item in value)
        case _:
            msg = f"Unsupported value for {key.value!r}: {type(value).__name__}"
            raise InvalidContextValueError(msg, key=key, value=value)


def thaw_value(value: ContextValue) -> object:
    """Convert a frozen value back into plain lists and dicts."""
    match value:
        case tuple():
            return [thaw_value(item) for item in value]
        case MappingProxyType():
            return {field: thaw_value(item) for field, item in value.items()}
        case _:
            return value


def format_value(value: ContextValue) -> str:
    """Format a value for template output.

    Strings are returned unchanged, booleans become ``"true"``/``"false"``,
    datetimes and dates become ISO-8601 strings, and everything else uses its
    natural string representation (sequences and maps render as Python
    list/dict literals).
    """
    match value:
        case str():
            return value
        case bool():
            return "true" if value else "false"
        case datetime():
            return pendulum.instance(value).to_iso8601_string()
        case date():
            return value.isoformat()
        case tuple() | MappingProxyType():
            return str(thaw_value(value))
        case _:
            return str(value)


def is_truthy(value: ContextValue) -> bool:
    """Decide whether a present value keeps a conditional block.

    Booleans are themselves; strings are truthy when non-empty and not
    ``"false"`` (case-insensitive); numbers when non-zero; sequences and maps
    when non-empty. Any other present value is truthy.
    """
    match value:
        case bool():
            return value
        case str():
            return value != "" and value.lower() != "false"
        case int() | float():
            return value != 0
        case tuple() | MappingProxyType():
            return len(value) > 0
        case _:
            return True
