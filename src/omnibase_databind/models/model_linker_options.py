# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Reference linker options model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ModelLinkerOptions(BaseModel):
    """Configuration for a reference Linker.

    Attributes:
        enable_caching: Keep registered records across ``link`` calls, so
            later calls can resolve references against earlier graphs.
        allow_partial_resolution: Leave pointers without a registered target
            unresolved instead of failing.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    enable_caching: bool = Field(
        default=False,
        description="Keep registered records across link calls",
    )
    allow_partial_resolution: bool = Field(
        default=False,
        description="Leave unknown references unresolved instead of failing",
    )


__all__ = ["ModelLinkerOptions"]
