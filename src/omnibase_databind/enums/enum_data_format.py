# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Serialized data format enumeration for the JSON/YAML adapters."""

from enum import Enum


class EnumDataFormat(str, Enum):
    """Text formats understood by the data I/O adapters."""

    JSON = "json"
    YAML = "yaml"

    @classmethod
    def from_suffix(cls, suffix: str) -> "EnumDataFormat | None":
        """Map a file suffix (``.json``, ``.yaml``, ``.yml``) to a format."""
        normalized = suffix.lower()
        if normalized == ".json":
            return cls.JSON
        if normalized in {".yaml", ".yml"}:
            return cls.YAML
        return None


__all__ = ["EnumDataFormat"]
