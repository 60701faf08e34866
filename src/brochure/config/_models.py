"""Configuration models.

This module provides the Pydantic models for Brochure settings.
"""

from enum import StrEnum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from brochure import __version__
from brochure.exceptions import ConfigValidationError


class LogLevel(StrEnum):
    """Log level threshold values.

    Values are ordered from most verbose (debug) to least verbose (error).
    """

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"


class LoggingConfig(BaseModel):
    """Logging configuration section.

    Attributes:
        level: Log level threshold.
        format: Log output format.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.TEXT

    @field_validator("level", mode="before")
    @classmethod
    def _fallback_level(cls, value: object) -> object:
        if isinstance(value, str):
            try:
                return LogLevel(value.lower())
            except ValueError:
                return LogLevel.INFO
        return value

    @field_validator("format", mode="before")
    @classmethod
    def _fallback_format(cls, value: object) -> object:
        if isinstance(value, str):
            try:
                return LogFormat(value.lower())
            except ValueError:
                return LogFormat.TEXT
        return value


class GeneratorConfig(BaseModel):
    """Identity the engine stamps into every context store.

    Attributes:
        name: Value injected as ``generatorName``.
        version: Value injected as ``generatorVersion``.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(default="Brochure CLI", min_length=1)
    version: str = Field(default=__version__, min_length=1)


class Config(BaseModel):
    """Top-level Brochure configuration."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],  # pyright: ignore[reportExplicitAny]
    ) -> "Config":  # noqa: UP037
        """Build a Config from a merged configuration dictionary.

        Args:
            data: Configuration values keyed by section.

        Returns:
            The validated configuration.

        Raises:
            ConfigValidationError: If a value has the wrong type or shape.
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            first = e.errors()[0]
            key = ".".join(str(part) for part in first["loc"])
            msg = f"Invalid configuration value for {key}: {first['msg']}"
            raise ConfigValidationError(
                msg,
                key=key,
                value=first.get("input"),
                expected=first["type"],
            ) from e
