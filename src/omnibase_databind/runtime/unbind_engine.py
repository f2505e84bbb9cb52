# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unbind engine: produce generic data from typed records.

The structural inverse of the bind engine. Fields are visited with the same
descriptors and in the same order; each value goes through the first
matching conversion:

1. a converter registered for the field annotation or the value's type
2. the value's ``marshal_mapping()`` hook
3. ``Pointer``: ``{"$ref": ref}``
4. polymorphic values: ``to_mapping()`` with ``type`` set from ``type_tag()``
5. records: a nested mapping
6. timedeltas, enums and primitives: their generic scalar
7. mappings and sequences: element by element

Omission Rules
--------------
- fields holding None are omitted
- pointers with an empty ``ref`` are omitted
- ``omitempty`` fields are omitted when their value is the zero value of
  its kind (empty string, zero number, False, empty container, zero
  timedelta, empty pointer)

The extra field of a record is merged into the record's own mapping; a key
that collides with a named field is an error.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import timedelta
from enum import Enum
from typing import Any, Optional

from omnibase_databind.enums import EnumFieldKind
from omnibase_databind.errors import (
    DatabindError,
    ModelDatabindErrorContext,
    StructuralError,
    TypeMismatchError,
    UnbindingError,
)
from omnibase_databind.models import ModelBindOptions, ModelTypeShape
from omnibase_databind.protocols import ProtocolDynamic
from omnibase_databind.runtime.bind_engine import REF_KEY
from omnibase_databind.runtime.dynamic_resolver import DynamicResolver
from omnibase_databind.runtime.field_introspector import (
    describe_record,
    is_record_type,
    type_name_of,
)
from omnibase_databind.runtime.hook_registry import HookRegistry
from omnibase_databind.runtime.type_coercion import TypeCoercion
from omnibase_databind.types import JsonValue, Pointer
from omnibase_databind.utils import child_path, index_path

logger = logging.getLogger(__name__)


def is_zero_value(value: object) -> bool:
    """True if ``value`` is the zero value of its kind.

    Example:
        >>> is_zero_value(timedelta(0)), is_zero_value([0])
        (True, False)
    """
    if value is None:
        return True
    if isinstance(value, Pointer):
        return not value.ref and value.resolved is None
    if isinstance(value, Enum):
        return False
    if isinstance(value, (bool, int, float, str, timedelta)):
        return not value
    if isinstance(value, (Mapping, list, tuple)):
        return len(value) == 0
    return False


def _sub_shape(shape: Optional[ModelTypeShape], part: str) -> Optional[ModelTypeShape]:
    if shape is None:
        return None
    if shape.kind == EnumFieldKind.OPTIONAL:
        shape = shape.inner
    return getattr(shape, part, None)


class UnbindEngine:
    """Traversal producing generic mappings from records.

    Args:
        options: Bind options (converters, depth ceiling); None selects the
            defaults.
        context: Error context attached to raised errors.
    """

    def __init__(
        self,
        options: Optional[ModelBindOptions] = None,
        context: Optional[ModelDatabindErrorContext] = None,
    ) -> None:
        self._options = options or ModelBindOptions()
        self._context = context
        self._hooks = HookRegistry(self._options.converters, context)
        self._coercion = TypeCoercion(context)

    def unbind_record(
        self,
        instance: object,
        path: str,
        depth: int = 1,
        include_extra: bool = True,
    ) -> dict[str, JsonValue]:
        """Convert a record into a generic mapping.

        Args:
            instance: Dataclass instance.
            path: Path of ``instance``.
            depth: Nesting depth of ``instance`` in the graph being unbound.
            include_extra: Merge the record's extra field into the result.
                Disabled for embedded records.

        Raises:
            StructuralError: If the record graph is nested deeper than
                ``max_depth`` (also on cyclic graphs).
            UnbindingError: Wrapping any failure below a field.
        """
        self._check_depth(path, depth)
        descriptor = describe_record(type(instance))
        result: dict[str, JsonValue] = {}

        for field in descriptor.fields:
            value = getattr(instance, field.attr_name, None)
            if value is None:
                continue

            if field.is_embedded:
                result.update(
                    self.unbind_record(value, path, depth, include_extra=False)
                )
                continue

            if isinstance(value, Pointer) and not value.ref:
                continue
            if field.tag.omit_empty and is_zero_value(value):
                continue

            key = field.external_name
            try:
                result[key] = self.unbind_value(
                    value, field.shape, child_path(path, field.attr_name), depth + 1
                )
            except DatabindError as e:
                raise UnbindingError(
                    path, field.attr_name, key, e, context=self._context
                ) from e

        extra_field = descriptor.extra_field
        if include_extra and extra_field is not None:
            extras = getattr(instance, extra_field.attr_name, None) or {}
            if not isinstance(extras, Mapping):
                cause = TypeMismatchError(
                    child_path(path, extra_field.attr_name),
                    expected="mapping",
                    actual=type_name_of(extras),
                    context=self._context,
                )
                raise UnbindingError(
                    path,
                    extra_field.attr_name,
                    extra_field.external_name,
                    cause,
                    context=self._context,
                ) from cause
            for key, value in extras.items():
                if key in result or key in descriptor.consumed_keys:
                    cause = StructuralError(
                        f'extra key "{key}" collides with a named field',
                        path=path,
                        context=self._context,
                    )
                    raise UnbindingError(
                        path, extra_field.attr_name, key, cause, context=self._context
                    ) from cause
                result[key] = self.unbind_value(
                    value, None, index_path(path, key), depth + 1
                )

        return result

    def unbind_value(
        self,
        value: object,
        shape: Optional[ModelTypeShape],
        path: str,
        depth: int,
    ) -> JsonValue:
        """Convert a typed value into its generic form.

        Args:
            value: Field, element or mapping value.
            shape: Declared shape when known; None for untyped positions.
            path: Path of the value.
            depth: Nesting depth of the value.
        """
        self._check_depth(path, depth)

        converter = self._hooks.converter_for_value(shape, value)
        if converter is not None:
            return self._hooks.apply_to_raw(converter, value, path)
        if value is None:
            return None
        if self._hooks.is_marshaler(value):
            return self._hooks.apply_marshal(value, path)
        if isinstance(value, Pointer):
            return {REF_KEY: value.ref} if value.ref else {}
        if isinstance(value, ProtocolDynamic) and not isinstance(value, type):
            mapping = DynamicResolver.to_mapping(value)
            return {
                key: self.unbind_value(item, None, index_path(path, key), depth + 1)
                for key, item in mapping.items()
            }
        if is_record_type(type(value)):
            return self.unbind_record(value, path, depth)
        if isinstance(value, (Enum, timedelta, bool, int, float, str)):
            return self._coercion.to_generic(value)
        if isinstance(value, Mapping):
            value_shape = _sub_shape(shape, "value")
            return {
                (key if isinstance(key, str) else self._coercion.key_to_text(key)): (
                    self.unbind_value(item, value_shape, index_path(path, key), depth + 1)
                )
                for key, item in value.items()
            }
        if isinstance(value, (list, tuple)):
            element_shape = _sub_shape(shape, "element")
            return [
                self.unbind_value(item, element_shape, index_path(path, index), depth + 1)
                for index, item in enumerate(value)
            ]
        raise TypeMismatchError(
            path,
            expected="serializable value",
            actual=type_name_of(value),
            context=self._context,
        )

    def _check_depth(self, path: str, depth: int) -> None:
        if depth > self._options.max_depth:
            raise StructuralError(
                f"maximum nesting depth {self._options.max_depth} exceeded",
                path=path,
                context=self._context,
            )


def unbind(
    source: object,
    options: Optional[ModelBindOptions] = None,
) -> dict[str, JsonValue]:
    """Produce a generic mapping from a record.

    Args:
        source: Dataclass instance.
        options: Converters and depth ceiling; None selects the defaults.

    Returns:
        A mapping built only from dicts, lists, strings, numbers, booleans
        and None, ready for ``json.dumps`` or ``yaml.safe_dump``.

    Raises:
        StructuralError: If ``source`` is None or the graph is too deep.
        TypeMismatchError: If ``source`` is not a dataclass instance.
        UnbindingError: Wrapping any failure below a top-level field.

    Example:
        >>> unbind(Person(name="John", age=30))
        {'name': 'John', 'age': 30}
    """
    if source is None:
        raise StructuralError(
            "nil source provided",
            context=ModelDatabindErrorContext(operation="unbind"),
        )
    if isinstance(source, type) or not is_record_type(type(source)):
        raise TypeMismatchError(
            "",
            expected="dataclass instance",
            actual=type_name_of(source),
            context=ModelDatabindErrorContext(operation="unbind"),
        )

    options = options or ModelBindOptions()
    source_type = type(source).__name__
    engine = UnbindEngine(options, options.error_context("unbind", source_type))
    result = engine.unbind_record(source, source_type)
    logger.debug(
        "Unbound record",
        extra={"source_type": source_type, "key_count": len(result)},
    )
    return result


__all__ = ["UnbindEngine", "is_zero_value", "unbind"]
