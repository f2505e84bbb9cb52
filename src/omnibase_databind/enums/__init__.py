# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Databind Enumerations Module.

Exports:
    EnumBindMode: Allocation policy while binding (FRESH, MERGE)
    EnumDataFormat: Serialized text formats for the I/O adapters (JSON, YAML)
    EnumDatabindErrorCode: Classification codes for databind errors
    EnumFieldKind: Closed set of field shapes dispatched on during traversal
"""

from omnibase_databind.enums.enum_bind_mode import EnumBindMode
from omnibase_databind.enums.enum_data_format import EnumDataFormat
from omnibase_databind.enums.enum_databind_error_code import EnumDatabindErrorCode
from omnibase_databind.enums.enum_field_kind import EnumFieldKind

__all__: list[str] = [
    "EnumBindMode",
    "EnumDataFormat",
    "EnumDatabindErrorCode",
    "EnumFieldKind",
]
