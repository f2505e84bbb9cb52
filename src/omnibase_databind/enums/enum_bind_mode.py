# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Bind mode enumeration."""

from enum import Enum


class EnumBindMode(str, Enum):
    """Allocation policy applied while binding into a record.

    FRESH allocates new instances for optional record fields even when the
    target already holds one. MERGE reuses existing instances so values that
    are absent from the source mapping survive.
    """

    FRESH = "fresh"
    MERGE = "merge"


__all__ = ["EnumBindMode"]
