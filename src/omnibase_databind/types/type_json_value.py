# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""
Type aliases for the generic data model exchanged with decoders.

The bind engine consumes, and the unbind engine produces, trees built only
from these shapes; this is what ``json.loads`` and ``yaml.safe_load`` return.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TypeAlias

from omnibase_databind.protocols.protocol_dynamic import ProtocolDynamic

# Generic container value: scalars, string-keyed mappings and ordered lists
JsonValue: TypeAlias = (
    "None | bool | int | float | str | dict[str, JsonValue] | list[JsonValue]"
)

# Source mapping handed to bind/merge/new
JsonMapping: TypeAlias = Mapping[str, object]

# Constructor registered for one discriminator value of a polymorphic field
DynamicConstructor: TypeAlias = Callable[[Mapping[str, object]], ProtocolDynamic]

__all__ = ["DynamicConstructor", "JsonMapping", "JsonValue"]
