# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Field kind enumeration for record traversal.

Every annotation the binding engines understand is classified into exactly one
of these kinds. Traversal in the bind, unbind, link and inspect passes is a
dispatch over this closed set rather than over ad-hoc ``isinstance`` checks on
typing objects.
"""

from enum import Enum


class EnumFieldKind(str, Enum):
    """Shape of a record field as seen by the binding engines.

    Attributes:
        PRIMITIVE: ``str``, ``bool``, ``int``, ``float``, ``UInt``, named
            primitives (``NewType`` or subclasses) and ``Enum`` types.
        DURATION: ``datetime.timedelta``.
        RECORD: A dataclass type.
        OPTIONAL: ``X | None``; the wrapped shape is described separately.
        SEQUENCE: ``list[X]`` or ``tuple[X, ...]``.
        RAW_MAPPING: ``dict`` / ``dict[str, Any]``; copied structurally.
        TYPED_MAPPING: ``dict[K, V]`` with a primitive key type.
        DYNAMIC: A polymorphic value selected by its ``type`` discriminator.
        REFERENCE: A ``Pointer[T]`` resolved by the reference linker.
        ANY: ``Any`` / ``object``; stored as-is.
        UNSUPPORTED: Anything else (unions of several types, arbitrary classes).
    """

    PRIMITIVE = "primitive"
    DURATION = "duration"
    RECORD = "record"
    OPTIONAL = "optional"
    SEQUENCE = "sequence"
    RAW_MAPPING = "raw_mapping"
    TYPED_MAPPING = "typed_mapping"
    DYNAMIC = "dynamic"
    REFERENCE = "reference"
    ANY = "any"
    UNSUPPORTED = "unsupported"


__all__ = ["EnumFieldKind"]
