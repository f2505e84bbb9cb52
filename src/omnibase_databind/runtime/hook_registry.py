# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Custom hook registry for the bind and unbind engines.

Three kinds of hook can take over conversion of a value, checked in order:

1. **Converter**: a ``ProtocolConverter`` registered in
   ``ModelBindOptions.converters`` for the exact field annotation
2. **Marshal/unmarshal hooks**: methods defined by the record class itself
   (``ProtocolMarshaler`` / ``ProtocolUnmarshaler``)
3. **Structural conversion**: the default field-by-field traversal

Converters win over the class hooks for the annotation they are registered
for. Converter and hook failures are fatal and surface as ``ConversionError``.

Thread Safety
-------------
The registry copies the converter table on construction and never mutates
it, so one instance may be shared between threads.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Optional

from omnibase_databind.errors import (
    ConversionError,
    ModelDatabindErrorContext,
    TypeMismatchError,
)
from omnibase_databind.models import ModelTypeShape
from omnibase_databind.protocols import (
    ProtocolConverter,
    ProtocolMarshaler,
)
from omnibase_databind.runtime.field_introspector import (
    type_name_of,
    unwrap_optional,
)

logger = logging.getLogger(__name__)


class HookRegistry:
    """Lookup of custom conversion hooks.

    Args:
        converters: Converters keyed by the exact annotation they handle.
        context: Error context attached to raised errors.

    Example:
        >>> registry = HookRegistry({IPv4Address: IPConverter()})
        >>> registry.converter_for(IPv4Address) is not None
        True
    """

    def __init__(
        self,
        converters: Optional[Mapping[Any, ProtocolConverter]] = None,
        context: Optional[ModelDatabindErrorContext] = None,
    ) -> None:
        self._converters: Mapping[Any, ProtocolConverter] = MappingProxyType(
            dict(converters or {})
        )
        self._context = context

    def converter_for(self, annotation: Any) -> Optional[ProtocolConverter]:
        """Return the converter registered for ``annotation``, if any."""
        if not self._converters:
            return None
        try:
            return self._converters.get(annotation)
        except TypeError:
            # unhashable annotation (e.g. Annotated with list metadata)
            return None

    def converter_for_shape(self, shape: ModelTypeShape) -> Optional[ProtocolConverter]:
        """Return the converter for a field, trying the optional-unwrapped form second."""
        converter = self.converter_for(shape.annotation)
        if converter is None:
            inner = unwrap_optional(shape)
            if inner is not shape:
                converter = self.converter_for(inner.annotation)
        return converter

    def converter_for_value(
        self, shape: Optional[ModelTypeShape], value: object
    ) -> Optional[ProtocolConverter]:
        """Return the converter for a value being unbound.

        The declared annotation is tried first, then the runtime type.
        """
        if shape is not None:
            converter = self.converter_for_shape(shape)
            if converter is not None:
                return converter
        return self.converter_for(type(value))

    @staticmethod
    def is_unmarshaler(record_type: Any) -> bool:
        """True if the record class defines ``unmarshal_mapping``."""
        return isinstance(record_type, type) and callable(
            getattr(record_type, "unmarshal_mapping", None)
        )

    @staticmethod
    def is_marshaler(value: object) -> bool:
        """True if the value implements ``marshal_mapping``."""
        return not isinstance(value, type) and isinstance(value, ProtocolMarshaler)

    # -------------------------------------------------------------------------
    # Hook invocation
    # -------------------------------------------------------------------------

    def apply_from_raw(
        self,
        converter: ProtocolConverter,
        raw: object,
        shape: ModelTypeShape,
        path: str,
    ) -> Any:
        """Run a converter in the bind direction and check its result type.

        Raises:
            ConversionError: If the converter raises.
            TypeMismatchError: If the result is not an instance of the
                declared class.
        """
        try:
            result = converter.from_raw(raw)
        except Exception as e:
            raise ConversionError(
                "custom converter failed", path=path, cause=e, context=self._context
            ) from e

        target = unwrap_optional(shape).annotation
        if result is None and unwrap_optional(shape) is not shape:
            return None
        if isinstance(target, type) and not isinstance(result, target):
            raise TypeMismatchError(
                path,
                expected=target.__name__,
                actual=type_name_of(result),
                context=self._context,
            )
        return result

    def apply_to_raw(
        self, converter: ProtocolConverter, value: object, path: str
    ) -> Any:
        """Run a converter in the unbind direction.

        Raises:
            ConversionError: If the converter raises.
        """
        try:
            return converter.to_raw(value)
        except Exception as e:
            raise ConversionError(
                "custom converter failed", path=path, cause=e, context=self._context
            ) from e

    def apply_unmarshal(
        self, instance: object, data: Mapping[str, object], path: str
    ) -> None:
        """Run a record's ``unmarshal_mapping`` hook.

        Raises:
            ConversionError: If the hook raises.
        """
        try:
            instance.unmarshal_mapping(data)  # type: ignore[attr-defined]
        except Exception as e:
            raise ConversionError(
                f"{type(instance).__name__}.unmarshal_mapping failed",
                path=path,
                cause=e,
                context=self._context,
            ) from e
        logger.debug(
            "Applied unmarshal hook",
            extra={"record_type": type(instance).__qualname__, "path": path},
        )

    def apply_marshal(self, value: object, path: str) -> Any:
        """Run a record's ``marshal_mapping`` hook.

        Raises:
            ConversionError: If the hook raises.
        """
        try:
            return value.marshal_mapping()  # type: ignore[attr-defined]
        except Exception as e:
            raise ConversionError(
                f"{type(value).__name__}.marshal_mapping failed",
                path=path,
                cause=e,
                context=self._context,
            ) from e

    def can_unmarshal(self, shape: ModelTypeShape) -> bool:
        """True if a field of this shape is bound through an unmarshal hook."""
        return self.is_unmarshaler(unwrap_optional(shape).annotation)


__all__ = ["HookRegistry"]
