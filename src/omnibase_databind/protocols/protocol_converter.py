# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Protocol definition for per-type custom converters.

Converters are registered in ``ModelBindOptions.converters`` keyed by the
exact field annotation they handle. A registered converter takes precedence
over every other conversion path for that annotation, both when binding and
when unbinding.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ProtocolConverter(Protocol):
    """Protocol for bidirectional value converters.

    Example:
        >>> class IPConverter:
        ...     def from_raw(self, raw: object) -> object:
        ...         return ipaddress.ip_address(str(raw))
        ...     def to_raw(self, value: object) -> object:
        ...         return str(value)
        >>> options = ModelBindOptions(
        ...     converters={ipaddress.IPv4Address: IPConverter()},
        ... )
    """

    def from_raw(self, raw: object) -> object:
        """Convert a generic value into the typed field value.

        Raises:
            Any exception; the bind engine wraps it in ConversionError.
        """
        ...

    def to_raw(self, value: object) -> object:
        """Convert a typed field value into a generic value."""
        ...


__all__ = ["ProtocolConverter"]
