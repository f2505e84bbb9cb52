# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Polymorphic value resolution.

A polymorphic field accepts any mapping carrying a ``type`` discriminator::

    {"type": "http", "url": "https://example.com", "timeout": "5s"}

The resolver picks a constructor for the discriminator and hands it the
whole mapping. Constructors are looked up first among the binders scoped to
the field path (indices removed, ``Pipeline.steps.action``) and then among
the global binders, so one discriminator may mean different types in
different places.

On unbind, the value's own ``to_mapping()`` output is used and the ``type``
key is overwritten with ``type_tag()``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Optional

from omnibase_databind.errors import (
    DynamicConstructionError,
    ModelDatabindErrorContext,
    StructuralError,
    TypeMismatchError,
    UnknownDynamicTypeError,
)
from omnibase_databind.models import ModelBindOptions
from omnibase_databind.protocols import ProtocolDynamic
from omnibase_databind.runtime.field_introspector import type_name_of
from omnibase_databind.types import DynamicConstructor
from omnibase_databind.utils import strip_indices

logger = logging.getLogger(__name__)

# Discriminator key of polymorphic mappings
TYPE_KEY = "type"


class DynamicResolver:
    """Constructs polymorphic values from tagged mappings.

    Args:
        options: Bind options holding the constructor tables.
        context: Error context attached to raised errors.
    """

    def __init__(
        self,
        options: ModelBindOptions,
        context: Optional[ModelDatabindErrorContext] = None,
    ) -> None:
        self._options = options
        self._context = context

    def constructor_for(
        self, type_tag: str, path: str
    ) -> Optional[DynamicConstructor]:
        """Return the constructor for a discriminator at a field path."""
        scoped = self._options.field_dynamic_binders.get(strip_indices(path))
        if scoped is not None and type_tag in scoped:
            return scoped[type_tag]
        return self._options.dynamic_binders.get(type_tag)

    def resolve(self, raw: object, path: str) -> ProtocolDynamic:
        """Construct the value described by a tagged mapping.

        Args:
            raw: Generic value for the field; must be a mapping.
            path: Field path, used for scoped lookup and error messages.

        Returns:
            The constructed value.

        Raises:
            TypeMismatchError: If ``raw`` is not a mapping.
            StructuralError: If ``type`` is missing, blank or not a string.
            UnknownDynamicTypeError: If no constructor is registered.
            DynamicConstructionError: If the constructor raises.
        """
        if not isinstance(raw, Mapping):
            raise TypeMismatchError(
                path,
                expected="object for dynamic value",
                actual=type_name_of(raw),
                context=self._context,
            )

        type_tag = raw.get(TYPE_KEY)
        if not isinstance(type_tag, str) or not type_tag.strip():
            raise StructuralError(
                f'dynamic value requires a non-empty string "{TYPE_KEY}" key',
                path=path,
                context=self._context,
            )

        constructor = self.constructor_for(type_tag, path)
        if constructor is None:
            raise UnknownDynamicTypeError(path, type_tag, context=self._context)

        try:
            value = constructor(raw)
        except Exception as e:
            raise DynamicConstructionError(
                path, type_tag, cause=e, context=self._context
            ) from e

        logger.debug(
            "Resolved dynamic value",
            extra={"path": path, "type_tag": type_tag},
        )
        return value

    @staticmethod
    def to_mapping(value: ProtocolDynamic) -> dict[str, object]:
        """Return the generic mapping of a polymorphic value.

        The ``type`` key always carries ``type_tag()``, replacing whatever
        ``to_mapping()`` returned for it.
        """
        mapping = value.to_mapping()
        result: dict[str, object] = dict(mapping) if mapping is not None else {}
        result[TYPE_KEY] = value.type_tag()
        return result


__all__ = ["TYPE_KEY", "DynamicResolver"]
