# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Structured payload carried by every DatabindError."""

from __future__ import annotations

from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from omnibase_databind.enums import EnumDatabindErrorCode


class ModelDatabindError(BaseModel):
    """Immutable error payload exposed as ``DatabindError.model``.

    Attributes:
        message: Human-readable error message
        error_code: Root classification of the failure
        correlation_id: Correlation ID propagated from the error context
        context: Structured fields (path, field, expected, actual, ...)
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    message: str
    error_code: EnumDatabindErrorCode = EnumDatabindErrorCode.OPERATION_FAILED
    correlation_id: Optional[UUID] = None
    context: dict[str, Any] = Field(default_factory=dict)


__all__ = ["ModelDatabindError"]
