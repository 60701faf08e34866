"""Brochure configuration.

Basic usage:
    from brochure.config import load_config

    config = load_config(Path("brochure.toml"))
    config.logging.level  # LogLevel.INFO
"""

from ._loader import deep_merge, load_config, parse_env_vars, read_toml_file
from ._models import Config, GeneratorConfig, LogFormat, LoggingConfig, LogLevel

__all__ = [
    "Config",
    "GeneratorConfig",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "deep_merge",
    "load_config",
    "parse_env_vars",
    "read_toml_file",
]
