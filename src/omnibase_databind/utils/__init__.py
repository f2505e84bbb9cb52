# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Utility modules for omnibase_databind.

This package provides the helpers shared by the binding engines:
    - util_duration: Duration literal parsing and canonical formatting
    - util_env_parsing: Type-safe environment variable parsing with validation
    - util_field_path: Field path construction and index stripping
    - util_field_tag: ``df`` field annotation parsing
    - util_snake_case: External key derivation from attribute names
"""

from omnibase_databind.utils.util_duration import (
    format_duration,
    format_duration_ns,
    nanos_to_timedelta,
    parse_duration,
    parse_duration_ns,
    timedelta_to_nanos,
)
from omnibase_databind.utils.util_env_parsing import parse_env_int
from omnibase_databind.utils.util_field_path import (
    child_path,
    index_path,
    strip_indices,
)
from omnibase_databind.utils.util_field_tag import (
    TAG_METADATA_KEY,
    field_tag_of,
    parse_field_tag,
)
from omnibase_databind.utils.util_snake_case import to_snake_case

__all__: list[str] = [
    "TAG_METADATA_KEY",
    "child_path",
    "field_tag_of",
    "format_duration",
    "format_duration_ns",
    "index_path",
    "nanos_to_timedelta",
    "parse_duration",
    "parse_duration_ns",
    "parse_env_int",
    "parse_field_tag",
    "strip_indices",
    "timedelta_to_nanos",
    "to_snake_case",
]
