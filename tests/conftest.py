"""Shared test fixtures for Brochure tests."""

from collections.abc import Callable, Mapping

import pendulum
import pytest

from brochure.templating import ContextStore, SystemDefaults

FIXED_MOMENT = pendulum.datetime(2025, 3, 14, 9, 26, 53, tz="UTC")
"""Moment used by every deterministic context store in the suite."""


@pytest.fixture
def fixed_defaults() -> SystemDefaults:
    """System defaults pinned to a fixed clock and generator identity."""
    return SystemDefaults.capture(
        clock=lambda: FIXED_MOMENT,
        generator_name="Brochure Test",
        generator_version="9.9.9",
    )


@pytest.fixture
def make_context(
    fixed_defaults: SystemDefaults,
) -> Callable[..., ContextStore]:
    """Return a factory building context stores with fixed system defaults."""

    def _make(values: Mapping[str, object] | None = None, /, **kwargs: object) -> ContextStore:
        combined: dict[str, object] = {**(values or {}), **kwargs}
        return ContextStore(combined, defaults=fixed_defaults)

    return _make
