# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Pydantic models for omnibase_databind.

Exports:
    ModelBindOptions: Options for bind, merge, new and unbind
    ModelFieldDescriptor: One visible record field
    ModelFieldTag: Parsed ``df`` field annotation
    ModelInspectOptions: Options for inspect_record
    ModelLinkerOptions: Options for the reference Linker
    ModelRecordDescriptor: Visible fields of a record class
    ModelTypeShape: Classified field annotation
"""

from omnibase_databind.models.model_bind_options import (
    DEFAULT_MAX_DEPTH,
    ENV_MAX_DEPTH,
    ModelBindOptions,
)
from omnibase_databind.models.model_field_tag import ModelFieldTag
from omnibase_databind.models.model_inspect_options import ModelInspectOptions
from omnibase_databind.models.model_linker_options import ModelLinkerOptions
from omnibase_databind.models.model_record_descriptor import (
    ModelFieldDescriptor,
    ModelRecordDescriptor,
)
from omnibase_databind.models.model_type_shape import ModelTypeShape

__all__: list[str] = [
    "DEFAULT_MAX_DEPTH",
    "ENV_MAX_DEPTH",
    "ModelBindOptions",
    "ModelFieldDescriptor",
    "ModelFieldTag",
    "ModelInspectOptions",
    "ModelLinkerOptions",
    "ModelRecordDescriptor",
    "ModelTypeShape",
]
