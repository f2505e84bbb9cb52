# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Protocol definition for records that can be targets of a ``Pointer``."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ProtocolIdentifiable(Protocol):
    """Protocol for records registered with the reference linker.

    The linker stores every identifiable record found in the object graph
    under its qualified type name plus ``identity()``. Two records of the
    same type reporting the same identity collide; the later one wins.
    """

    def identity(self) -> str:
        """Return the identity matched against ``Pointer.ref``."""
        ...


__all__ = ["ProtocolIdentifiable"]
