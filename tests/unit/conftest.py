# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit-test configuration for omnibase_databind.

Every test collected below tests/unit/ gets the ``unit`` marker, so the
engine tests can be selected with ``pytest -m unit``. A module-level
``pytestmark`` here would only reach this file, hence the collection hook.
"""

from pathlib import Path

import pytest

UNIT_ROOT = Path(__file__).parent


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    """Mark every collected test under tests/unit/ as ``unit``."""
    for item in items:
        if UNIT_ROOT not in item.path.parents:
            continue
        if item.get_closest_marker("unit") is None:
            item.add_marker(pytest.mark.unit)
