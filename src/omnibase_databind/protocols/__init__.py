# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Protocol definitions for omnibase_databind.

Exports:
    ProtocolConverter: Per-type bidirectional converter
    ProtocolDynamic: Polymorphic value selected by a ``type`` discriminator
    ProtocolIdentifiable: Record addressable by a ``Pointer``
    ProtocolMarshaler: Record producing its own generic mapping
    ProtocolUnmarshaler: Record populating itself from a generic mapping
"""

from omnibase_databind.protocols.protocol_converter import ProtocolConverter
from omnibase_databind.protocols.protocol_dynamic import ProtocolDynamic
from omnibase_databind.protocols.protocol_identifiable import ProtocolIdentifiable
from omnibase_databind.protocols.protocol_marshaler import (
    ProtocolMarshaler,
    ProtocolUnmarshaler,
)

__all__: list[str] = [
    "ProtocolConverter",
    "ProtocolDynamic",
    "ProtocolIdentifiable",
    "ProtocolMarshaler",
    "ProtocolUnmarshaler",
]
