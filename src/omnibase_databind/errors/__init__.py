# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Databind Errors Module.

This module provides the error classes raised by the binding engines and
the data I/O adapters. Every error extends DatabindError and exposes its
structured payload through ``.model``.

Exports:
    ModelDatabindError: Immutable payload carried by every error
    ModelDatabindErrorContext: Configuration model for bundled error context
    DatabindError: Base databind error class
    StructuralError: Malformed invocation or input shape
    TypeMismatchError: Value kind incompatible with the target field
    ConversionError: Custom converter, hook or text parser failure
    RequiredFieldError: Required key absent from the source mapping
    ValueMismatchError: ``match=`` constraint violated
    UnknownDynamicTypeError: No constructor for a discriminator
    DynamicConstructionError: Dynamic constructor failure
    UnresolvedReferenceError: Reference id missing from the registry
    BindingError: Location wrapper for bind failures
    UnbindingError: Location wrapper for unbind failures
    LinkError: Location wrapper for linking failures
    DataSourceError: Base adapter-layer error
    DataFileError: File I/O failure
    DataParseError: Decoding failure

Error Inspection:
    Wrapper errors nest. Test for a root kind with ``find_cause`` (or the
    ``is_required_field_error`` / ``is_value_mismatch_error`` shortcuts)
    rather than with ``isinstance`` on the outermost error::

        try:
            bind(config, data)
        except DatabindError as e:
            missing = find_cause(e, RequiredFieldError)
            if missing is not None:
                print(f"missing {missing.field} under {missing.path}")

Error Sanitization Guidelines:
    Secret-tagged fields are never rendered into error messages; messages
    carry paths, keys and type names only. Value mismatch errors include the
    offending raw value, so avoid ``match=`` constraints on secret fields.
"""

from omnibase_databind.errors.databind_errors import (
    BindingError,
    ConversionError,
    DatabindError,
    DynamicConstructionError,
    LinkError,
    RequiredFieldError,
    StructuralError,
    TypeMismatchError,
    UnbindingError,
    UnknownDynamicTypeError,
    UnresolvedReferenceError,
    ValueMismatchError,
    find_cause,
    is_required_field_error,
    is_value_mismatch_error,
)
from omnibase_databind.errors.error_data_source import (
    DataFileError,
    DataParseError,
    DataSourceError,
)
from omnibase_databind.errors.model_databind_error import ModelDatabindError
from omnibase_databind.errors.model_databind_error_context import (
    ModelDatabindErrorContext,
)

__all__: list[str] = [
    "BindingError",
    "ConversionError",
    "DataFileError",
    "DataParseError",
    "DataSourceError",
    "DatabindError",
    "DynamicConstructionError",
    "LinkError",
    "ModelDatabindError",
    "ModelDatabindErrorContext",
    "RequiredFieldError",
    "StructuralError",
    "TypeMismatchError",
    "UnbindingError",
    "UnknownDynamicTypeError",
    "UnresolvedReferenceError",
    "ValueMismatchError",
    "find_cause",
    "is_required_field_error",
    "is_value_mismatch_error",
]
