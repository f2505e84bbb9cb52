# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Classified field annotation model."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from omnibase_databind.enums import EnumFieldKind


class ModelTypeShape(BaseModel):
    """Field annotation reduced to the shape the engines dispatch on.

    Only the attributes relevant to ``kind`` are set:

        PRIMITIVE      target (declared class), primitive, unsigned
        RECORD         target (dataclass)
        OPTIONAL       inner
        SEQUENCE       element, container (list or tuple)
        TYPED_MAPPING  key, value
        DYNAMIC        target (the protocol class)
        REFERENCE      target (pointed-to class, None when unparameterised)
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: EnumFieldKind
    annotation: Any = Field(default=None, description="Declared annotation")
    target: Any = Field(default=None, description="Declared class, if any")
    primitive: Optional[type] = Field(
        default=None, description="Underlying str/bool/int/float for PRIMITIVE"
    )
    unsigned: bool = Field(default=False, description="Negative values rejected")
    inner: Optional[ModelTypeShape] = None
    element: Optional[ModelTypeShape] = None
    key: Optional[ModelTypeShape] = None
    value: Optional[ModelTypeShape] = None
    container: Optional[type] = None

    @property
    def is_enum(self) -> bool:
        return isinstance(self.target, type) and issubclass(self.target, Enum)


__all__ = ["ModelTypeShape"]
