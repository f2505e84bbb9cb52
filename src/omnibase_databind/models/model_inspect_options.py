# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Record inspector options model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ModelInspectOptions(BaseModel):
    """Configuration for ``inspect_record``.

    Attributes:
        max_depth: Nesting depth after which ``<max depth reached>`` is printed.
        indent: Text repeated once per nesting level.
        show_secrets: Print secret-tagged values instead of masking them.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_depth: int = Field(default=10, gt=0, description="Rendering depth ceiling")
    indent: str = Field(default="  ", description="Indentation unit")
    show_secrets: bool = Field(default=False, description="Reveal secret fields")


__all__ = ["ModelInspectOptions"]
