# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Per-class record descriptor models.

Descriptors are computed once per dataclass by the field introspector and
shared by every engine.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from omnibase_databind.models.model_field_tag import ModelFieldTag
from omnibase_databind.models.model_type_shape import ModelTypeShape


class ModelFieldDescriptor(BaseModel):
    """One visible field of a record.

    Attributes:
        attr_name: Python attribute name
        external_name: Key used in generic mappings
        tag: Parsed ``df`` annotation
        shape: Classified annotation
        embedded_type: Record class flattened into the parent (embed fields)
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    attr_name: str
    external_name: str
    tag: ModelFieldTag
    shape: ModelTypeShape
    embedded_type: Any = None

    @property
    def is_embedded(self) -> bool:
        return self.embedded_type is not None


class ModelRecordDescriptor(BaseModel):
    """Visible fields of a record class in declaration order.

    Attributes:
        record_type: The dataclass
        fields: Named fields, excluding the extra-capture field
        extra_field: Field capturing unconsumed keys, if declared
        consumed_keys: External names claimed by this record, including the
            keys of embedded records
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    record_type: Any
    fields: tuple[ModelFieldDescriptor, ...] = ()
    extra_field: Optional[ModelFieldDescriptor] = None
    consumed_keys: frozenset[str] = Field(default_factory=frozenset)

    @property
    def type_name(self) -> str:
        return self.record_type.__name__


__all__ = ["ModelFieldDescriptor", "ModelRecordDescriptor"]
