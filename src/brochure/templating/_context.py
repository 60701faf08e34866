"""Context store for template rendering."""

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from functools import cache
from types import MappingProxyType
from typing import TYPE_CHECKING, overload

import pendulum

from brochure import __version__
from brochure.enums import SYSTEM_KEYS, ContextKey
from brochure.exceptions import MissingContextValueError, UnknownContextKeyError

from ._values import ContextValue, format_value, freeze_value, thaw_value

if TYPE_CHECKING:
    from pendulum import DateTime

    from brochure.config import Config

GENERATOR_NAME = "Brochure CLI"
"""Default value injected as ``generatorName``."""

type KeyLike = ContextKey | str


def _utc_now() -> "DateTime":  # noqa: UP037
    return pendulum.now("UTC")


@dataclass(slots=True, frozen=True)
class SystemDefaults:
    """Engine-computed values layered over every context store.

    Attributes:
        generated_at: Moment the generation run started.
        generator_name: Value for ``generatorName``.
        generator_version: Value for ``generatorVersion``.
    """

    generated_at: "DateTime"  # noqa: UP037
    generator_name: str = GENERATOR_NAME
    generator_version: str = __version__

    @classmethod
    def capture(
        cls,
        *,
        clock: "Callable[[], DateTime] | None" = None,  # noqa: UP037
        generator_name: str = GENERATOR_NAME,
        generator_version: str = __version__,
    ) -> "SystemDefaults":  # noqa: UP037
        """Snapshot the clock once and build defaults from it.

        Args:
            clock: Returns the current moment. Defaults to pendulum UTC now.
            generator_name: Value for ``generatorName``.
            generator_version: Value for ``generatorVersion``.

        Returns:
            Frozen defaults.
        """
        now = (clock or _utc_now)()
        return cls(
            generated_at=now,
            generator_name=generator_name,
            generator_version=generator_version,
        )

    @classmethod
    def from_config(
        cls,
        config: "Config",  # noqa: UP037
        *,
        clock: "Callable[[], DateTime] | None" = None,  # noqa: UP037
    ) -> "SystemDefaults":  # noqa: UP037
        """Build defaults using the generator identity from configuration."""
        return cls.capture(
            clock=clock,
            generator_name=config.generator.name,
            generator_version=config.generator.version,
        )

    def as_values(self) -> dict[ContextKey, ContextValue]:
        """Values for the four system keys."""
        return {
            ContextKey.CURRENT_YEAR: self.generated_at.year,
            ContextKey.GENERATED_DATE: format_value(self.generated_at),
            ContextKey.GENERATOR_VERSION: self.generator_version,
            ContextKey.GENERATOR_NAME: self.generator_name,
        }


@cache
def process_defaults() -> SystemDefaults:
    """Defaults captured once for the lifetime of the process."""
    return SystemDefaults.capture()


def resolve_key(key: KeyLike) -> ContextKey:
    """Convert a key or placeholder name into a ContextKey.

    Raises:
        UnknownContextKeyError: If a string does not name a known key.
    """
    if isinstance(key, ContextKey):
        return key
    resolved = ContextKey.from_name(key)
    if resolved is None:
        raise UnknownContextKeyError(key)
    return resolved


class ContextStore(Mapping[ContextKey, ContextValue]):
    """Immutable mapping from context keys to frozen values.

    The four system keys (``currentYear``, ``generatedDate``,
    ``generatorVersion``, ``generatorName``) always hold the values computed
    by the store's :class:`SystemDefaults`, regardless of what the caller
    supplies. Values of ``None`` are treated as absent.

    Stores never change after construction; :meth:`merge` and
    :meth:`with_values` return new stores.
    """

    __slots__ = ("_defaults", "_values")

    def __init__(
        self,
        values: Mapping[KeyLike, object] | None = None,
        *,
        defaults: SystemDefaults | None = None,
    ) -> None:
        """Create a store from caller values layered under system defaults.

        Args:
            values: Caller-supplied values keyed by ContextKey or placeholder name.
            defaults: System defaults. Defaults to the process-wide snapshot.

        Raises:
            UnknownContextKeyError: If a string key is not a known key.
            InvalidContextValueError: If a value is not a supported kind.
        """
        self._defaults: SystemDefaults = (
            defaults if defaults is not None else process_defaults()
        )

        frozen: dict[ContextKey, ContextValue] = {}
        for raw_key, value in (values or {}).items():
            key = resolve_key(raw_key)
            if value is None or key in SYSTEM_KEYS:
                continue
            frozen[key] = freeze_value(key, value)
        frozen.update(self._defaults.as_values())

        self._values: Mapping[ContextKey, ContextValue] = MappingProxyType(frozen)

    # -------------------------------------------------------------------------
    # Mapping protocol
    # -------------------------------------------------------------------------

    def __getitem__(self, key: KeyLike) -> ContextValue:
        return self._values[resolve_key(key)]

    def __iter__(self) -> Iterator[ContextKey]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: object) -> bool:
        if isinstance(key, str):
            resolved = ContextKey.from_name(key)
            return resolved is not None and resolved in self._values
        return False

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ContextStore):
            return dict(self._values) == dict(other._values)
        return NotImplemented

    __hash__ = None  # pyright: ignore[reportAssignmentType]

    def __repr__(self) -> str:
        return f"ContextStore({self.to_dict()!r})"

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def defaults(self) -> SystemDefaults:
        """The system defaults layered over this store."""
        return self._defaults

    @overload
    def get(self, key: KeyLike) -> ContextValue | None: ...

    @overload
    def get(self, key: KeyLike, default: ContextValue) -> ContextValue: ...

    def get(
        self,
        key: KeyLike,
        default: ContextValue | None = None,
    ) -> ContextValue | None:
        """Return the value for `key`, or `default` when absent.

        Unknown placeholder names are treated as absent rather than raising.
        """
        resolved = key if isinstance(key, ContextKey) else ContextKey.from_name(key)
        if resolved is None:
            return default
        return self._values.get(resolved, default)

    def as_string(self, key: KeyLike, default: str | None = None) -> str | None:
        """Return the value formatted as a string, or `default` when absent."""
        value = self.get(key)
        if value is None:
            return default
        return format_value(value)

    def as_bool(self, key: KeyLike, default: bool = False) -> bool:  # noqa: FBT001, FBT002
        """Return a stored boolean as-is; any other value (or absence) gives `default`."""
        value = self.get(key)
        if isinstance(value, bool):
            return value
        return default

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate(self, required_keys: Iterable[KeyLike]) -> None:
        """Check that every required key has a value.

        Keys are checked in the order given and the first missing key is
        reported. Use :meth:`missing_keys` to collect every missing key.

        Raises:
            MissingContextValueError: For the first missing key.
        """
        for raw_key in required_keys:
            key = resolve_key(raw_key)
            if key not in self._values:
                raise MissingContextValueError(key)

    def missing_keys(self, required_keys: Iterable[KeyLike]) -> list[ContextKey]:
        """Return every required key without a value, in the order given."""
        missing: list[ContextKey] = []
        for raw_key in required_keys:
            key = resolve_key(raw_key)
            if key not in self._values and key not in missing:
                missing.append(key)
        return missing

    # -------------------------------------------------------------------------
    # Derivation
    # -------------------------------------------------------------------------

    def merge(self, other: "ContextStore | Mapping[KeyLike, object]") -> "ContextStore":  # noqa: UP037
        """Return a new store with `other` layered over this one.

        Values from `other` win on collision. System keys keep this store's
        defaults.
        """
        return self.with_values(dict(other.items()))

    def with_values(self, additional: Mapping[KeyLike, object]) -> "ContextStore":  # noqa: UP037
        """Return a copy of this store augmented by `additional` entries."""
        combined: dict[KeyLike, object] = dict(self._values)
        for raw_key, value in additional.items():
            combined[resolve_key(raw_key)] = value
        return ContextStore(combined, defaults=self._defaults)

    def to_dict(self) -> dict[str, object]:
        """Return a plain copy keyed by placeholder name."""
        return {key.value: thaw_value(value) for key, value in self._values.items()}
