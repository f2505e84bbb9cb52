# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Type-safe environment variable parsing with validation.

A variable that is set but does not parse raises instead of falling back to
the default.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from omnibase_databind.errors import ModelDatabindErrorContext, StructuralError

logger = logging.getLogger(__name__)


def parse_env_int(
    name: str,
    default: int,
    *,
    min_value: Optional[int] = None,
    max_value: Optional[int] = None,
) -> int:
    """Read an integer environment variable.

    Args:
        name: Environment variable name.
        default: Value used when the variable is unset or blank.
        min_value: Inclusive lower bound, if any.
        max_value: Inclusive upper bound, if any.

    Returns:
        The parsed value, or ``default``.

    Raises:
        StructuralError: If the variable is set but not an integer, or is
            out of bounds.

    Example:
        >>> parse_env_int("OMNIBASE_DATABIND_MAX_DEPTH", 64, min_value=1)
        64
    """
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default

    context = ModelDatabindErrorContext(operation="parse_env")
    try:
        value = int(raw.strip())
    except ValueError as e:
        raise StructuralError(
            f"environment variable {name} is not an integer",
            context=context,
            env_var=name,
        ) from e

    if min_value is not None and value < min_value:
        raise StructuralError(
            f"environment variable {name} must be >= {min_value}",
            context=context,
            env_var=name,
        )
    if max_value is not None and value > max_value:
        raise StructuralError(
            f"environment variable {name} must be <= {max_value}",
            context=context,
            env_var=name,
        )

    logger.debug(
        "Applied environment override",
        extra={"env_var": name, "value": value},
    )
    return value


__all__ = ["parse_env_int"]
