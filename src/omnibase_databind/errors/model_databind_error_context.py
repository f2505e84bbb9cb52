# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Databind Error Context Configuration Model.

This module defines the configuration model for databind error context,
encapsulating common structured fields to reduce __init__ parameter count
while maintaining strong typing.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ModelDatabindErrorContext(BaseModel):
    """Configuration model for databind error context.

    Attributes:
        operation: Engine operation being performed (bind, merge, unbind, link, ...)
        target_type: Name of the record type being processed
        correlation_id: Caller correlation ID for tracing a failed load

    Example:
        >>> context = ModelDatabindErrorContext(
        ...     operation="bind",
        ...     target_type="ServiceConfig",
        ...     correlation_id=uuid4(),
        ... )
        >>> raise StructuralError("nil target provided", context=context)
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    operation: Optional[str] = Field(
        default=None,
        description="Engine operation being performed (bind, merge, unbind, link, ...)",
    )
    target_type: Optional[str] = Field(
        default=None,
        description="Name of the record type being processed",
    )
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="Caller correlation ID for tracing a failed load",
    )


__all__ = ["ModelDatabindErrorContext"]
