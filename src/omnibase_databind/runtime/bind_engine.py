# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Bind engine: populate typed records from generic data.

This module provides:

- **bind**: Populate an existing record, allocating fresh optional records
- **merge**: Populate an existing record, reusing optional records it holds
- **new**: Allocate a record of a class and bind into it
- **BindEngine**: The traversal behind all three

Field Rules
-----------
Before any field of a record is bound, every ``required`` key of that record
and of its embedded records is checked for presence; the first missing one
fails with ``RequiredFieldError``. Then, for every visible field, in
declaration order:

1. Key absent: the field keeps its current value.
2. Key present with a ``match=`` constraint: the raw value is rendered to text
   and compared with the literal; a difference fails with
   ``ValueMismatchError``. Presence is always checked before equality.
3. A registered converter for the annotation takes over the value.
4. A field whose class defines ``unmarshal_mapping`` is bound in a second
   pass, after every other field of the record.
5. Otherwise the value is converted according to the field kind.

After the fields, a field tagged ``extra`` receives every source key no
named field claimed.

Bind vs Merge
-------------
Both modes leave fields whose key is absent untouched. They differ only in
allocation: ``bind`` replaces an optional record field with a freshly
allocated record, ``merge`` binds into the record already present. Non-optional
record fields are always bound in place.

Error Reporting
---------------
Failures below a field are wrapped in ``BindingError`` carrying the record
path, attribute name and source key; ``find_cause`` reaches the root error.
The first error aborts the call. A failed call may leave the target
partially populated.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional, TypeVar

from omnibase_databind.enums import EnumBindMode, EnumFieldKind
from omnibase_databind.errors import (
    BindingError,
    DatabindError,
    ModelDatabindErrorContext,
    RequiredFieldError,
    StructuralError,
    TypeMismatchError,
    ValueMismatchError,
)
from omnibase_databind.models import (
    ModelBindOptions,
    ModelFieldDescriptor,
    ModelTypeShape,
)
from omnibase_databind.runtime.dynamic_resolver import DynamicResolver
from omnibase_databind.runtime.field_introspector import (
    describe_record,
    instantiate_record,
    is_record_type,
    set_field,
    type_name_of,
    unwrap_optional,
)
from omnibase_databind.runtime.hook_registry import HookRegistry
from omnibase_databind.runtime.type_coercion import TypeCoercion
from omnibase_databind.types import Pointer
from omnibase_databind.utils import child_path, index_path

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")

# Key holding the target id of a reference
REF_KEY = "$ref"


def copy_generic(value: object) -> Any:
    """Structurally copy a generic value (mappings and sequences are rebuilt)."""
    if isinstance(value, Mapping):
        return {key: copy_generic(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [copy_generic(item) for item in value]
    return value


class BindEngine:
    """Traversal populating records from generic mappings.

    One engine serves one call; it holds the per-call options, error context
    and hook tables.

    Args:
        options: Bind options; None selects the defaults.
        mode: Allocation policy for optional record fields.
        context: Error context attached to raised errors.
    """

    def __init__(
        self,
        options: Optional[ModelBindOptions] = None,
        mode: EnumBindMode = EnumBindMode.FRESH,
        context: Optional[ModelDatabindErrorContext] = None,
    ) -> None:
        self._options = options or ModelBindOptions()
        self._mode = mode
        self._context = context
        self._hooks = HookRegistry(self._options.converters, context)
        self._coercion = TypeCoercion(context)
        self._dynamic = DynamicResolver(self._options, context)

    # -------------------------------------------------------------------------
    # Entry
    # -------------------------------------------------------------------------

    def bind_root(self, target: object, data: Mapping[str, object]) -> None:
        """Validate the input depth and bind ``data`` into ``target``."""
        root = type(target).__name__
        self.check_depth(data, root, 1)
        self.bind_record(target, data, root)

    def check_depth(self, value: object, path: str, depth: int) -> None:
        """Reject generic input nested deeper than ``max_depth``.

        Raises:
            StructuralError: If the ceiling is exceeded (also on cyclic input).
        """
        if depth > self._options.max_depth:
            raise StructuralError(
                f"maximum nesting depth {self._options.max_depth} exceeded",
                path=path,
                context=self._context,
            )
        if isinstance(value, Mapping):
            for key, item in value.items():
                self.check_depth(item, index_path(path, key), depth + 1)
        elif isinstance(value, (list, tuple)):
            for index, item in enumerate(value):
                self.check_depth(item, index_path(path, index), depth + 1)

    # -------------------------------------------------------------------------
    # Records
    # -------------------------------------------------------------------------

    def bind_record(
        self,
        instance: object,
        data: Mapping[str, object],
        path: str,
        capture_extra: bool = True,
    ) -> None:
        """Bind a mapping into a record instance.

        Args:
            instance: Dataclass instance to populate in place.
            data: Source mapping.
            path: Path of ``instance``.
            capture_extra: Fill the record's extra field with unclaimed keys.
                Disabled for embedded records, whose keys belong to the parent.
        """
        descriptor = describe_record(type(instance))
        deferred: list[tuple[ModelFieldDescriptor, object]] = []
        self._check_required(descriptor.fields, data, path)

        for field in descriptor.fields:
            if field.is_embedded:
                self._bind_embedded(instance, field, data, path)
                continue

            key = field.external_name
            if key not in data:
                continue

            raw = data[key]
            if field.tag.has_match:
                actual = TypeCoercion.render_match(raw)
                if actual != field.tag.match_value:
                    raise ValueMismatchError(
                        path,
                        field.attr_name,
                        expected=field.tag.match_value,
                        actual=actual,
                        context=self._context,
                    )

            field_path = child_path(path, field.attr_name)
            converter = self._hooks.converter_for_shape(field.shape)
            if converter is None and self._hooks.can_unmarshal(field.shape):
                deferred.append((field, raw))
                continue

            current = getattr(instance, field.attr_name, None)
            try:
                value = self.bind_value(current, raw, field.shape, field_path)
            except DatabindError as e:
                raise BindingError(
                    path, field.attr_name, key, e, context=self._context
                ) from e
            set_field(instance, field.attr_name, value)

        for field, raw in deferred:
            current = getattr(instance, field.attr_name, None)
            field_path = child_path(path, field.attr_name)
            try:
                value = self._unmarshal(current, raw, field.shape, field_path)
            except DatabindError as e:
                raise BindingError(
                    path, field.attr_name, field.external_name, e, context=self._context
                ) from e
            set_field(instance, field.attr_name, value)

        if capture_extra and descriptor.extra_field is not None:
            self._capture_extra(instance, descriptor.extra_field, data, descriptor.consumed_keys)

    def _check_required(
        self,
        fields: tuple[ModelFieldDescriptor, ...],
        data: Mapping[str, object],
        path: str,
    ) -> None:
        for field in fields:
            if field.is_embedded:
                embedded = describe_record(field.embedded_type)
                # an optional embed is only bound once one of its keys is present
                if field.shape.kind == EnumFieldKind.OPTIONAL and not any(
                    key in data for key in embedded.consumed_keys
                ):
                    continue
                self._check_required(embedded.fields, data, path)
            elif field.tag.required and field.external_name not in data:
                raise RequiredFieldError(path, field.attr_name, context=self._context)

    def _bind_embedded(
        self,
        instance: object,
        field: ModelFieldDescriptor,
        data: Mapping[str, object],
        path: str,
    ) -> None:
        embedded_type = field.embedded_type
        current = getattr(instance, field.attr_name, None)

        if field.shape.kind == EnumFieldKind.OPTIONAL:
            claimed = describe_record(embedded_type).consumed_keys
            if not any(key in data for key in claimed):
                return
            if current is None or self._mode == EnumBindMode.FRESH:
                current = instantiate_record(embedded_type)
        elif not isinstance(current, embedded_type):
            current = instantiate_record(embedded_type)

        self.bind_record(current, data, path, capture_extra=False)
        set_field(instance, field.attr_name, current)

    def _capture_extra(
        self,
        instance: object,
        field: ModelFieldDescriptor,
        data: Mapping[str, object],
        claimed: frozenset[str],
    ) -> None:
        leftover = {
            key: copy_generic(value)
            for key, value in data.items()
            if key not in claimed
        }
        if not leftover:
            return

        current = getattr(instance, field.attr_name, None)
        if self._mode == EnumBindMode.MERGE and isinstance(current, Mapping):
            merged = dict(current)
            merged.update(leftover)
            leftover = merged
        set_field(instance, field.attr_name, leftover)

    def _unmarshal(
        self, current: object, raw: object, shape: ModelTypeShape, path: str
    ) -> Any:
        inner = unwrap_optional(shape)
        if raw is None and inner is not shape:
            return None
        if not isinstance(raw, Mapping):
            raise TypeMismatchError(
                path,
                expected="object for unmarshaler",
                actual=type_name_of(raw),
                context=self._context,
            )

        hook_type = inner.annotation
        if not isinstance(current, hook_type):
            current = (
                instantiate_record(hook_type)
                if is_record_type(hook_type)
                else hook_type()
            )
        self._hooks.apply_unmarshal(current, raw, path)
        return current

    # -------------------------------------------------------------------------
    # Values
    # -------------------------------------------------------------------------

    def bind_value(
        self, current: object, raw: object, shape: ModelTypeShape, path: str
    ) -> Any:
        """Convert a generic value into the typed value of a field.

        Args:
            current: The value the field holds now (reused for records).
            raw: Generic source value.
            shape: Classified annotation of the field or element.
            path: Path of the value.

        Returns:
            The typed value to store.
        """
        converter = self._hooks.converter_for_shape(shape)
        if converter is not None:
            return self._hooks.apply_from_raw(converter, raw, shape, path)

        kind = shape.kind
        if kind == EnumFieldKind.OPTIONAL:
            return self._bind_optional(current, raw, shape, path)
        if self._hooks.can_unmarshal(shape):
            return self._unmarshal(current, raw, shape, path)
        if kind in (EnumFieldKind.PRIMITIVE, EnumFieldKind.DURATION):
            return self._coercion.coerce(raw, shape, path)
        if kind == EnumFieldKind.RECORD:
            return self._bind_nested(current, raw, shape.target, path)
        if kind == EnumFieldKind.SEQUENCE:
            return self._bind_sequence(raw, shape, path)
        if kind == EnumFieldKind.RAW_MAPPING:
            return copy_generic(self._require_mapping(raw, path, "object"))
        if kind == EnumFieldKind.TYPED_MAPPING:
            return self._bind_typed_mapping(raw, shape, path)
        if kind == EnumFieldKind.DYNAMIC:
            return self._dynamic.resolve(raw, path)
        if kind == EnumFieldKind.REFERENCE:
            return self._bind_pointer(raw, shape, path)
        if kind == EnumFieldKind.ANY:
            return raw
        raise StructuralError(
            f"unsupported field type {shape.annotation!r}",
            path=path,
            context=self._context,
        )

    def _require_mapping(
        self, raw: object, path: str, expected: str
    ) -> Mapping[str, object]:
        if not isinstance(raw, Mapping):
            raise TypeMismatchError(
                path, expected=expected, actual=type_name_of(raw), context=self._context
            )
        return raw

    def _bind_optional(
        self, current: object, raw: object, shape: ModelTypeShape, path: str
    ) -> Any:
        if raw is None:
            return None
        inner = shape.inner
        if self._mode == EnumBindMode.FRESH:
            current = None
        if self._hooks.can_unmarshal(inner):
            return self._unmarshal(current, raw, inner, path)
        if inner.kind == EnumFieldKind.RECORD:
            return self._bind_nested(current, raw, inner.target, path)
        return self.bind_value(None, raw, inner, path)

    def _bind_nested(
        self, current: object, raw: object, record_type: type, path: str
    ) -> Any:
        data = self._require_mapping(raw, path, "object")
        if not isinstance(current, record_type):
            current = instantiate_record(record_type)
        self.bind_record(current, data, path)
        return current

    def _bind_sequence(self, raw: object, shape: ModelTypeShape, path: str) -> Any:
        if not isinstance(raw, (list, tuple)):
            raise TypeMismatchError(
                path, expected="array", actual=type_name_of(raw), context=self._context
            )
        items = [
            self.bind_value(None, item, shape.element, index_path(path, index))
            for index, item in enumerate(raw)
        ]
        return tuple(items) if shape.container is tuple else items

    def _bind_typed_mapping(
        self, raw: object, shape: ModelTypeShape, path: str
    ) -> dict[Any, Any]:
        data = self._require_mapping(raw, path, "object")
        result: dict[Any, Any] = {}
        for key, item in data.items():
            item_path = index_path(path, key)
            typed_key = self._coercion.coerce(key, shape.key, item_path)
            result[typed_key] = self.bind_value(None, item, shape.value, item_path)
        return result

    def _bind_pointer(self, raw: object, shape: ModelTypeShape, path: str) -> Pointer[Any]:
        data = self._require_mapping(raw, path, "object for reference")
        pointer: Pointer[Any] = (
            Pointer[shape.target]() if shape.target is not None else Pointer()
        )
        if REF_KEY not in data:
            return pointer
        ref = data[REF_KEY]
        if not isinstance(ref, str):
            raise TypeMismatchError(
                path,
                expected=f'string for "{REF_KEY}"',
                actual=type_name_of(ref),
                context=self._context,
            )
        pointer.ref = ref
        return pointer


# =============================================================================
# Public API
# =============================================================================


def _validate_call(target: object, data: object, operation: str) -> None:
    if target is None:
        raise StructuralError(
            "nil target provided",
            context=ModelDatabindErrorContext(operation=operation),
        )
    if isinstance(target, type) or not is_record_type(type(target)):
        raise TypeMismatchError(
            "",
            expected="dataclass instance",
            actual=type_name_of(target),
            context=ModelDatabindErrorContext(operation=operation),
        )
    if data is None:
        raise StructuralError(
            "nil data provided",
            context=ModelDatabindErrorContext(
                operation=operation, target_type=type(target).__name__
            ),
        )
    if not isinstance(data, Mapping):
        raise TypeMismatchError(
            "",
            expected="mapping",
            actual=type_name_of(data),
            context=ModelDatabindErrorContext(
                operation=operation, target_type=type(target).__name__
            ),
        )


def _run(
    target: object,
    data: Mapping[str, object],
    options: Optional[ModelBindOptions],
    mode: EnumBindMode,
    operation: str,
) -> None:
    _validate_call(target, data, operation)
    options = options or ModelBindOptions()
    target_type = type(target).__name__
    context = options.error_context(operation, target_type)

    logger.debug(
        "Binding record",
        extra={"target_type": target_type, "mode": mode.value, "key_count": len(data)},
    )
    BindEngine(options, mode, context).bind_root(target, data)
    logger.debug(
        "Bound record",
        extra={"target_type": target_type, "mode": mode.value},
    )


def bind(
    target: object,
    data: Mapping[str, object],
    options: Optional[ModelBindOptions] = None,
) -> None:
    """Populate a record from a generic mapping.

    Keys absent from ``data`` leave their fields untouched. Optional record
    fields present in ``data`` receive freshly allocated records.

    Args:
        target: Dataclass instance to populate in place.
        data: Source mapping, typically decoded JSON or YAML.
        options: Bind options; None selects the defaults.

    Raises:
        StructuralError: If ``target`` or ``data`` is None, or the input is
            nested too deeply.
        TypeMismatchError: If ``target`` is not a dataclass instance.
        RequiredFieldError: If a required key is missing at the top level.
        ValueMismatchError: If a ``match=`` constraint fails at the top level.
        BindingError: Wrapping any failure below a top-level field.

    Example:
        >>> person = Person()
        >>> bind(person, {"name": "John", "age": 30})
        >>> person.name
        'John'
    """
    _run(target, data, options, EnumBindMode.FRESH, "bind")


def merge(
    target: object,
    data: Mapping[str, object],
    options: Optional[ModelBindOptions] = None,
) -> None:
    """Populate a pre-initialized record, preserving values absent from ``data``.

    Identical to ``bind`` except that optional record fields already holding a
    record are bound in place instead of being replaced, and the extra field
    keeps previously captured keys.

    Example:
        >>> config = ServiceConfig(timeout=timedelta(seconds=5), retries=3)
        >>> merge(config, {"retries": 5})
        >>> (config.timeout, config.retries)
        (datetime.timedelta(seconds=5), 5)
    """
    _run(target, data, options, EnumBindMode.MERGE, "merge")


def new(
    record_type: type[RecordT],
    data: Mapping[str, object],
    options: Optional[ModelBindOptions] = None,
) -> RecordT:
    """Allocate a record of ``record_type`` and bind ``data`` into it.

    Records whose ``__init__`` has required parameters are allocated without
    calling it; every field starts at its default or the zero value of its
    annotation.

    Raises:
        TypeMismatchError: If ``record_type`` is not a dataclass.
        Any error raised by ``bind``.
    """
    if not is_record_type(record_type):
        raise TypeMismatchError(
            "",
            expected="dataclass type",
            actual=repr(record_type),
            context=ModelDatabindErrorContext(operation="new"),
        )
    instance = instantiate_record(record_type)
    _run(instance, data, options, EnumBindMode.FRESH, "new")
    return instance


__all__ = ["REF_KEY", "BindEngine", "bind", "copy_generic", "merge", "new"]
