# pyright: reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""TOML configuration file loading and merging."""

import os
import tomllib
from pathlib import Path
from typing import Any

from brochure.exceptions import ConfigLoadError

from ._defaults import DEFAULT_CONFIG
from ._models import Config

ENV_PREFIX = "BROCHURE_"
"""Prefix for configuration environment variables."""


def read_toml_file(path: Path) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Read and parse a TOML file.

    Args:
        path: Path to the TOML file.

    Returns:
        Parsed TOML content as dictionary.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigLoadError: If the file cannot be parsed.
    """
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Failed to parse TOML file: {e}"
        # Location attributes exist from Python 3.14
        raise ConfigLoadError(
            msg,
            path=path,
            line=getattr(e, "lineno", None),
            column=getattr(e, "colno", None),
        ) from e


def copy_value(value: Any) -> Any:  # pyright: ignore[reportExplicitAny]
    """Create a deep copy of a configuration value.

    Args:
        value: The value to copy.

    Returns:
        A copy of dicts and lists; primitives are returned as-is.
    """
    if isinstance(value, dict):
        return {k: copy_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [copy_value(item) for item in value]
    return value


def deep_merge(
    base: dict[str, Any],  # pyright: ignore[reportExplicitAny]
    override: dict[str, Any],  # pyright: ignore[reportExplicitAny]
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Deep merge two configuration dictionaries.

    Merges `override` into `base`, returning a new dictionary. Neither input
    is modified. Dictionaries are merged recursively; everything else in
    `override` replaces the base value.

    Args:
        base: Base configuration (lower precedence).
        override: Override configuration (higher precedence).

    Returns:
        Merged configuration dictionary.
    """
    result: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]

    for key in base.keys() | override.keys():
        if key not in override:
            result[key] = copy_value(base[key])
        elif key not in base:
            result[key] = copy_value(override[key])
        elif isinstance(base[key], dict) and isinstance(override[key], dict):
            result[key] = deep_merge(base[key], override[key])
        else:
            result[key] = copy_value(override[key])

    return result


def parse_env_vars(
    prefix: str = ENV_PREFIX,
    environ: dict[str, str] | None = None,
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Parse environment variables into config dictionary.

    Environment variable naming:
        - Add prefix (BROCHURE_)
        - Convert to uppercase
        - Replace dots with double underscores
        - Example: logging.level -> BROCHURE_LOGGING__LEVEL

    Variables without a double underscore (such as BROCHURE_DEBUG) are not
    configuration keys and are skipped.

    Args:
        prefix: Environment variable prefix.
        environ: Environment to read. Defaults to os.environ.

    Returns:
        Dictionary of parsed config values with nested structure.
    """
    source = os.environ if environ is None else environ
    result: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]

    for key, value in source.items():
        if not key.startswith(prefix):
            continue

        path = key.removeprefix(prefix).lower().split("__")
        if len(path) < 2 or not all(path):  # noqa: PLR2004
            continue

        node = result
        for part in path[:-1]:
            node = node.setdefault(part, {})
            if not isinstance(node, dict):
                break
        else:
            node[path[-1]] = value

    return result


def load_config(
    path: Path | None = None,
    *,
    include_env: bool = True,
    environ: dict[str, str] | None = None,
) -> Config:
    """Load configuration from defaults, an optional TOML file, and the environment.

    Sources are merged in order (later values override earlier):
    1. Built-in defaults
    2. TOML file at `path`, if given
    3. BROCHURE_* environment variables, if `include_env`

    Args:
        path: Optional TOML file. The file must exist when given.
        include_env: Whether to apply environment overrides.
        environ: Environment to read instead of os.environ.

    Returns:
        The validated configuration.

    Raises:
        FileNotFoundError: If `path` does not exist.
        ConfigLoadError: If the TOML file cannot be parsed.
        ConfigValidationError: If the merged values are invalid.
    """
    merged = copy_value(DEFAULT_CONFIG)

    if path is not None:
        merged = deep_merge(merged, read_toml_file(path))

    if include_env:
        merged = deep_merge(merged, parse_env_vars(environ=environ))

    return Config.from_dict(merged)
