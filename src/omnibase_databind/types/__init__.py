# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Types module for omnibase_databind."""

from omnibase_databind.types.type_json_value import (
    DynamicConstructor,
    JsonMapping,
    JsonValue,
)
from omnibase_databind.types.type_pointer import Pointer
from omnibase_databind.types.type_uint import UInt

__all__: list[str] = [
    "DynamicConstructor",
    "JsonMapping",
    "JsonValue",
    "Pointer",
    "UInt",
]
