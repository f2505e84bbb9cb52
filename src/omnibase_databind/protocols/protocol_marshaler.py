# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Protocol definitions for self-serializing records.

A record class can take over its own conversion by implementing one or both
hooks. The unmarshal hook runs after the structural pass over its enclosing
record, receiving the raw sub-mapping; the marshal hook replaces structural
unbinding entirely.

Design Decisions:
    - runtime_checkable: Enables isinstance() checks for duck typing
    - Hooks receive and return generic mappings only, never typed records
    - Hook failures are surfaced as ConversionError by the engines
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol, runtime_checkable


@runtime_checkable
class ProtocolMarshaler(Protocol):
    """Protocol for records that produce their own generic mapping."""

    def marshal_mapping(self) -> dict[str, object]:
        """Return the generic mapping emitted in place of this record."""
        ...


@runtime_checkable
class ProtocolUnmarshaler(Protocol):
    """Protocol for records that populate themselves from a generic mapping.

    Example:
        >>> @dataclass
        ... class Version:
        ...     major: int = 0
        ...     minor: int = 0
        ...     def unmarshal_mapping(self, data: Mapping[str, object]) -> None:
        ...         self.major, self.minor = map(int, str(data["v"]).split("."))
    """

    def unmarshal_mapping(self, data: Mapping[str, object]) -> None:
        """Populate ``self`` from the raw sub-mapping.

        Raises:
            Any exception; the bind engine wraps it in ConversionError.
        """
        ...


__all__ = ["ProtocolMarshaler", "ProtocolUnmarshaler"]
