# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unsigned integer marker type.

Python integers carry no sign restriction, so unsigned fields are declared
with ``UInt``. Binding a negative value into a ``UInt`` field is a type
mismatch; at runtime the stored value is a plain ``int``.
"""

from typing import NewType

UInt = NewType("UInt", int)

__all__ = ["UInt"]
