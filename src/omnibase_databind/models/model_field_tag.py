# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Parsed field annotation model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ModelFieldTag(BaseModel):
    """Parsed form of a field's ``df`` metadata string.

    Attributes:
        name: External key override; empty means derive from the attribute name
        required: Key must be present in the source mapping
        secret: Value is masked by the inspector
        omit_empty: Zero values are omitted on unbind
        extra: Field captures every unconsumed source key
        embed: Nested record whose fields are flattened into the parent
        skip: Field is invisible to every engine
        has_match: A ``match=`` constraint is present
        match_value: Literal the raw source value must render to
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(default="", description="External key override")
    required: bool = Field(default=False, description="Key must be present")
    secret: bool = Field(default=False, description="Masked by the inspector")
    omit_empty: bool = Field(default=False, description="Omit zero values on unbind")
    extra: bool = Field(default=False, description="Catch-all for unconsumed keys")
    embed: bool = Field(default=False, description="Flatten nested record fields")
    skip: bool = Field(default=False, description="Excluded from every engine")
    has_match: bool = Field(default=False, description="Match constraint present")
    match_value: str = Field(default="", description="Expected rendered raw value")


__all__ = ["ModelFieldTag"]
