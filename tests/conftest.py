# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Pytest configuration and shared fixtures for omnibase_databind tests."""

from __future__ import annotations

from collections.abc import Iterator
from ipaddress import IPv4Address

import pytest

from omnibase_databind import ModelBindOptions, ModelLinkerOptions
from omnibase_databind.models import ENV_MAX_DEPTH
from tests.helpers.databind_records import (
    HOOK_CALLS,
    IPv4Converter,
    Person,
    action_binders,
)

# =============================================================================
# Options
# =============================================================================


@pytest.fixture
def bind_options() -> ModelBindOptions:
    """Options with the pipeline step constructors and the IPv4 converter.

    Example:
        >>> def test_pipeline(bind_options):
        ...     pipeline = new(Pipeline, data, bind_options)
    """
    return ModelBindOptions(
        dynamic_binders=action_binders(),
        converters={IPv4Address: IPv4Converter()},
    )


@pytest.fixture
def partial_linker_options() -> ModelLinkerOptions:
    """Linker options leaving unknown references unresolved."""
    return ModelLinkerOptions(allow_partial_resolution=True)


# =============================================================================
# Records
# =============================================================================


@pytest.fixture
def john_doe() -> Person:
    """A bound person record."""
    return Person(name="John Doe", age=30, active=True)


# =============================================================================
# State isolation
# =============================================================================


@pytest.fixture
def hook_calls() -> Iterator[list[str]]:
    """Record of converter and unmarshal hook invocations, cleared per test."""
    HOOK_CALLS.clear()
    yield HOOK_CALLS
    HOOK_CALLS.clear()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove databind environment overrides for the duration of a test."""
    monkeypatch.delenv(ENV_MAX_DEPTH, raising=False)
    return monkeypatch
