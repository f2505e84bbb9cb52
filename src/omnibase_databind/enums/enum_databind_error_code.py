# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Error code enumeration for databind errors."""

from enum import Enum


class EnumDatabindErrorCode(str, Enum):
    """Classification codes carried by every DatabindError.

    The code identifies the root kind of a failure. Wrapper errors
    (``BindingError``, ``UnbindingError``, ``LinkError``) carry the code of
    their own layer; use ``find_cause`` to reach the root error.
    """

    OPERATION_FAILED = "OPERATION_FAILED"
    INVALID_INPUT = "INVALID_INPUT"
    TYPE_MISMATCH = "TYPE_MISMATCH"
    CONVERSION_FAILED = "CONVERSION_FAILED"
    REQUIRED_FIELD_MISSING = "REQUIRED_FIELD_MISSING"
    VALUE_MISMATCH = "VALUE_MISMATCH"
    UNKNOWN_DYNAMIC_TYPE = "UNKNOWN_DYNAMIC_TYPE"
    DYNAMIC_CONSTRUCTION_FAILED = "DYNAMIC_CONSTRUCTION_FAILED"
    UNRESOLVED_REFERENCE = "UNRESOLVED_REFERENCE"
    BINDING_FAILED = "BINDING_FAILED"
    UNBINDING_FAILED = "UNBINDING_FAILED"
    LINKING_FAILED = "LINKING_FAILED"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    FILE_IO_ERROR = "FILE_IO_ERROR"
    PARSE_ERROR = "PARSE_ERROR"


__all__ = ["EnumDatabindErrorCode"]
