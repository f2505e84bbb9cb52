# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Field path helpers.

Paths locate a value inside the object graph for error messages and for
field-scoped dynamic constructor lookup: ``Root.items[2].action``. The root
segment is the record class name; later segments are attribute names, and
sequence or mapping positions are bracketed.
"""

from __future__ import annotations

import re

_INDEX_SEGMENT = re.compile(r"\[[^\]]*\]")


def child_path(path: str, name: str) -> str:
    """Append an attribute segment."""
    return f"{path}.{name}" if path else name


def index_path(path: str, index: object) -> str:
    """Append a sequence index or mapping key segment."""
    return f"{path}[{index}]"


def strip_indices(path: str) -> str:
    """Remove every bracketed segment.

    Example:
        >>> strip_indices("Root.items[3].action")
        'Root.items.action'
    """
    return _INDEX_SEGMENT.sub("", path)


__all__ = ["child_path", "index_path", "strip_indices"]
