# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Bind/Unbind Options Model.

This module provides the Pydantic configuration model shared by the bind and
unbind engines. Options are passed explicitly on every call; passing None
selects the defaults.
"""

from __future__ import annotations

from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from omnibase_databind.errors import ModelDatabindErrorContext
from omnibase_databind.protocols.protocol_converter import ProtocolConverter
from omnibase_databind.types.type_json_value import DynamicConstructor
from omnibase_databind.utils.util_env_parsing import parse_env_int

# Recursion ceiling applied to generic input and record graphs
DEFAULT_MAX_DEPTH = 64

# Environment variable overriding max_depth in from_env()
ENV_MAX_DEPTH = "OMNIBASE_DATABIND_MAX_DEPTH"


class ModelBindOptions(BaseModel):
    """Configuration for bind, merge, new and unbind calls.

    Attributes:
        dynamic_binders: Constructors for polymorphic fields keyed by the
            ``type`` discriminator value.
        field_dynamic_binders: Constructors scoped to one field path, keyed
            by the path with sequence indices removed (``Root.items.action``)
            and then by discriminator. Consulted before ``dynamic_binders``.
        converters: Custom converters keyed by the exact field annotation.
        max_depth: Maximum nesting depth of generic input while binding and
            of the record graph while unbinding.
        correlation_id: Propagated into the context of raised errors.

    Example:
        >>> options = ModelBindOptions(
        ...     dynamic_binders={"http": lambda m: new(HttpCheck, m)},
        ...     field_dynamic_binders={
        ...         "Pipeline.steps.action": {"http": lambda m: new(HttpStep, m)},
        ...     },
        ... )
        >>> pipeline = new(Pipeline, data, options)
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        arbitrary_types_allowed=True,
    )

    dynamic_binders: dict[str, DynamicConstructor] = Field(
        default_factory=dict,
        description="Constructors for polymorphic fields keyed by discriminator",
    )
    field_dynamic_binders: dict[str, dict[str, DynamicConstructor]] = Field(
        default_factory=dict,
        description="Field-path scoped constructors, consulted first",
    )
    converters: dict[Any, ProtocolConverter] = Field(
        default_factory=dict,
        description="Custom converters keyed by field annotation",
    )
    max_depth: int = Field(
        default=DEFAULT_MAX_DEPTH,
        gt=0,
        description="Recursion ceiling for generic input and record graphs",
    )
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="Correlation ID propagated into error context",
    )

    @classmethod
    def from_env(cls, **overrides: Any) -> ModelBindOptions:
        """Create options with environment overrides applied.

        Reads ``OMNIBASE_DATABIND_MAX_DEPTH``. Explicit keyword arguments
        win over the environment.

        Raises:
            StructuralError: If the variable is set but not a positive integer.
        """
        values: dict[str, Any] = {
            "max_depth": parse_env_int(ENV_MAX_DEPTH, DEFAULT_MAX_DEPTH, min_value=1),
        }
        values.update(overrides)
        return cls(**values)

    def error_context(
        self, operation: str, target_type: Optional[str] = None
    ) -> ModelDatabindErrorContext:
        """Build the error context for one engine call."""
        return ModelDatabindErrorContext(
            operation=operation,
            target_type=target_type,
            correlation_id=self.correlation_id,
        )


__all__ = ["DEFAULT_MAX_DEPTH", "ENV_MAX_DEPTH", "ModelBindOptions"]
