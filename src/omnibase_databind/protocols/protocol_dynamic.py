# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Protocol definition for polymorphic values.

A field annotated with ``ProtocolDynamic`` (or with a non-dataclass protocol
deriving from it) holds one of several concrete record types. The concrete
type is chosen while binding by the ``type`` key of the source mapping and
emitted again while unbinding from ``type_tag()``.

Design Decisions:
    - runtime_checkable: Enables isinstance() checks for duck typing
    - Discriminator is always the ``type`` key
    - ``to_mapping`` is authoritative on unbind; the engine only forces the
      ``type`` key so a value cannot emit a discriminator it would not bind
      back from
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ProtocolDynamic(Protocol):
    """Protocol for values selected by a ``type`` discriminator.

    Example:
        >>> @dataclass
        ... class Shout:
        ...     text: str = ""
        ...     def type_tag(self) -> str:
        ...         return "shout"
        ...     def to_mapping(self) -> dict[str, object]:
        ...         return {"text": self.text}
        >>> options = ModelBindOptions(
        ...     dynamic_binders={"shout": lambda m: new(Shout, m)},
        ... )
    """

    def type_tag(self) -> str:
        """Return the discriminator value written to the ``type`` key."""
        ...

    def to_mapping(self) -> dict[str, object]:
        """Return the generic mapping for this value.

        The returned mapping need not contain ``type``; the engine sets it
        from ``type_tag()``. Returning None is treated as an empty mapping.
        """
        ...


__all__ = ["ProtocolDynamic"]
