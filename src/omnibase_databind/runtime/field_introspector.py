# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Record field introspection.

This module provides:

- **classify_annotation**: Reduces a field annotation to a ``ModelTypeShape``
- **describe_record**: Builds the cached ``ModelRecordDescriptor`` of a dataclass
- **instantiate_record**: Creates a record without running required-argument checks
- **zero_value**: The empty value of a shape

Field Discovery
---------------
Fields come from ``dataclasses.fields`` in declaration order, base classes
first; a field redeclared by a subclass keeps its position and takes the
subclass definition. ``init=False`` fields are included. Fields whose name
starts with ``_`` and fields tagged ``-`` are invisible to every engine.

A field tagged ``embed`` whose annotation is a record (or an optional record)
is flattened: its fields are read from and written to the parent mapping.

Annotation Classification
-------------------------
=====================================  ===============
Annotation                             Kind
=====================================  ===============
str, bool, int, float, UInt, NewType,  PRIMITIVE
subclasses of those, Enum
timedelta                              DURATION
dataclass                              RECORD
X | None                               OPTIONAL
list[X], tuple[X, ...]                 SEQUENCE
dict, dict[str, Any]                   RAW_MAPPING
dict[K, V] with primitive K            TYPED_MAPPING
ProtocolDynamic and its sub-protocols  DYNAMIC
Pointer[T]                             REFERENCE
Any, object                            ANY
anything else                          UNSUPPORTED
=====================================  ===============

``Annotated[X, ...]`` is classified as ``X``. UNSUPPORTED shapes raise
``StructuralError`` only when a value actually has to flow through them.

Thread Safety
-------------
Descriptors are cached per class with ``functools.cache``. Computing a
descriptor twice yields equal results, so concurrent first use is harmless.
"""

from __future__ import annotations

import dataclasses
import logging
import threading
import types
from collections.abc import Mapping, MutableMapping, Sequence
from datetime import timedelta
from enum import Enum
from functools import cache
from typing import Annotated, Any, Union, get_args, get_origin, get_type_hints

from omnibase_databind.enums import EnumFieldKind
from omnibase_databind.errors import StructuralError, TypeMismatchError
from omnibase_databind.models import (
    ModelFieldDescriptor,
    ModelRecordDescriptor,
    ModelTypeShape,
)
from omnibase_databind.protocols import ProtocolDynamic
from omnibase_databind.types import Pointer, UInt
from omnibase_databind.utils import field_tag_of, to_snake_case

logger = logging.getLogger(__name__)

_PRIMITIVES: tuple[type, ...] = (bool, str, int, float)
_MAPPING_ORIGINS = (dict, Mapping, MutableMapping)
_SEQUENCE_ORIGINS = (list, Sequence)


# =============================================================================
# Annotation Classification
# =============================================================================


def is_record_type(annotation: object) -> bool:
    """True for dataclass classes (not instances)."""
    return isinstance(annotation, type) and dataclasses.is_dataclass(annotation)


def is_dynamic_type(annotation: object) -> bool:
    """True for ProtocolDynamic and non-dataclass classes deriving from it."""
    if annotation is ProtocolDynamic:
        return True
    return (
        isinstance(annotation, type)
        and not dataclasses.is_dataclass(annotation)
        and ProtocolDynamic in getattr(annotation, "__mro__", ())
    )


def _primitive_base(annotation: type) -> type | None:
    for base in _PRIMITIVES:
        if issubclass(annotation, base):
            return base
    return None


def _classify_newtype(annotation: Any) -> ModelTypeShape:
    unsigned = False
    base = annotation
    while hasattr(base, "__supertype__"):
        if base is UInt:
            unsigned = True
        base = base.__supertype__

    if isinstance(base, type) and _primitive_base(base) is not None:
        return ModelTypeShape(
            kind=EnumFieldKind.PRIMITIVE,
            annotation=annotation,
            target=annotation,
            primitive=_primitive_base(base),
            unsigned=unsigned,
        )
    shape = classify_annotation(base)
    return shape.model_copy(update={"annotation": annotation})


def _classify_enum(annotation: type[Enum]) -> ModelTypeShape:
    primitive: type | None = _primitive_base(annotation)
    if primitive is None:
        members = list(annotation)
        sample = members[0].value if members else ""
        primitive = _primitive_base(type(sample)) or str
    return ModelTypeShape(
        kind=EnumFieldKind.PRIMITIVE,
        annotation=annotation,
        target=annotation,
        primitive=primitive,
    )


def _classify_mapping(annotation: Any, args: tuple[Any, ...]) -> ModelTypeShape:
    if not args:
        return ModelTypeShape(kind=EnumFieldKind.RAW_MAPPING, annotation=annotation)

    key_arg, value_arg = args
    if value_arg in (Any, object) and key_arg in (str, Any):
        return ModelTypeShape(kind=EnumFieldKind.RAW_MAPPING, annotation=annotation)

    key_shape = classify_annotation(key_arg)
    if key_shape.kind != EnumFieldKind.PRIMITIVE:
        return ModelTypeShape(kind=EnumFieldKind.UNSUPPORTED, annotation=annotation)
    return ModelTypeShape(
        kind=EnumFieldKind.TYPED_MAPPING,
        annotation=annotation,
        key=key_shape,
        value=classify_annotation(value_arg),
    )


def _classify_sequence(
    annotation: Any, origin: Any, args: tuple[Any, ...]
) -> ModelTypeShape:
    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            element = args[0]
        elif not args:
            element = Any
        else:
            # fixed-length tuples have no single element shape
            return ModelTypeShape(kind=EnumFieldKind.UNSUPPORTED, annotation=annotation)
        container: type = tuple
    else:
        element = args[0] if args else Any
        container = list
    return ModelTypeShape(
        kind=EnumFieldKind.SEQUENCE,
        annotation=annotation,
        element=classify_annotation(element),
        container=container,
    )


def classify_annotation(annotation: Any) -> ModelTypeShape:
    """Reduce a field annotation to the shape the engines dispatch on.

    Args:
        annotation: A resolved type annotation.

    Returns:
        The classified shape. Unknown annotations yield UNSUPPORTED.

    Example:
        >>> classify_annotation(list[int]).element.kind
        <EnumFieldKind.PRIMITIVE: 'primitive'>
    """
    origin = get_origin(annotation)

    if origin is Annotated:
        return classify_annotation(get_args(annotation)[0])

    if annotation is Any or annotation is object:
        return ModelTypeShape(kind=EnumFieldKind.ANY, annotation=annotation)

    if origin is Union or origin is types.UnionType:
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) == 1 and len(get_args(annotation)) == 2:
            return ModelTypeShape(
                kind=EnumFieldKind.OPTIONAL,
                annotation=annotation,
                inner=classify_annotation(members[0]),
            )
        return ModelTypeShape(kind=EnumFieldKind.UNSUPPORTED, annotation=annotation)

    if annotation is Pointer or origin is Pointer:
        args = get_args(annotation)
        target = args[0] if args else None
        if target is not None and not isinstance(target, type):
            # Pointer[User | None] points at User
            inner = classify_annotation(target)
            target = inner.inner.target if inner.kind == EnumFieldKind.OPTIONAL else None
        return ModelTypeShape(
            kind=EnumFieldKind.REFERENCE, annotation=annotation, target=target
        )

    if hasattr(annotation, "__supertype__"):
        return _classify_newtype(annotation)

    if origin in _MAPPING_ORIGINS or annotation in _MAPPING_ORIGINS:
        return _classify_mapping(annotation, get_args(annotation))

    if origin is tuple or annotation is tuple:
        return _classify_sequence(annotation, tuple, get_args(annotation))
    if origin in _SEQUENCE_ORIGINS or annotation in _SEQUENCE_ORIGINS:
        return _classify_sequence(annotation, list, get_args(annotation))

    if not isinstance(annotation, type):
        return ModelTypeShape(kind=EnumFieldKind.UNSUPPORTED, annotation=annotation)

    if annotation is timedelta:
        return ModelTypeShape(
            kind=EnumFieldKind.DURATION, annotation=annotation, target=annotation
        )
    if issubclass(annotation, Enum):
        return _classify_enum(annotation)
    if _primitive_base(annotation) is not None:
        return ModelTypeShape(
            kind=EnumFieldKind.PRIMITIVE,
            annotation=annotation,
            target=annotation,
            primitive=_primitive_base(annotation),
        )
    if dataclasses.is_dataclass(annotation):
        return ModelTypeShape(
            kind=EnumFieldKind.RECORD, annotation=annotation, target=annotation
        )
    if is_dynamic_type(annotation):
        return ModelTypeShape(
            kind=EnumFieldKind.DYNAMIC, annotation=annotation, target=annotation
        )
    return ModelTypeShape(kind=EnumFieldKind.UNSUPPORTED, annotation=annotation)


def unwrap_optional(shape: ModelTypeShape) -> ModelTypeShape:
    """Return the inner shape of an OPTIONAL, else the shape itself."""
    if shape.kind == EnumFieldKind.OPTIONAL and shape.inner is not None:
        return shape.inner
    return shape


# =============================================================================
# Record Descriptors
# =============================================================================


def _resolve_hints(record_type: type) -> dict[str, Any]:
    try:
        return get_type_hints(
            record_type,
            include_extras=True,
            localns={record_type.__name__: record_type},
        )
    except (NameError, TypeError) as e:
        logger.debug(
            "Falling back to raw field annotations",
            extra={"record_type": record_type.__qualname__, "error": str(e)},
        )
        return {}


def _field_annotation(
    record_type: type, field: dataclasses.Field[Any], hints: Mapping[str, Any]
) -> Any:
    if field.name in hints:
        return hints[field.name]
    if isinstance(field.type, str):
        raise StructuralError(
            f"cannot resolve annotation {field.type!r} of field {field.name}",
            path=record_type.__name__,
        )
    return field.type


_local = threading.local()


def _in_progress() -> set[type]:
    building = getattr(_local, "building", None)
    if building is None:
        building = set()
        _local.building = building
    return building


@cache
def describe_record(record_type: type) -> ModelRecordDescriptor:
    """Build the descriptor of a dataclass.

    Args:
        record_type: A dataclass class.

    Returns:
        The cached descriptor.

    Raises:
        StructuralError: If ``record_type`` is not a dataclass, declares more
            than one extra field, embeds itself, or uses an annotation that
            cannot be resolved.
        TypeMismatchError: If an ``extra`` field is not a raw mapping.
    """
    if not is_record_type(record_type):
        raise StructuralError(f"{record_type!r} is not a dataclass")
    building = _in_progress()
    if record_type in building:
        raise StructuralError("record embeds itself", path=record_type.__name__)

    building.add(record_type)
    try:
        return _describe(record_type)
    finally:
        building.discard(record_type)


def _describe(record_type: type) -> ModelRecordDescriptor:
    hints = _resolve_hints(record_type)
    fields: list[ModelFieldDescriptor] = []
    extra_field: ModelFieldDescriptor | None = None
    consumed: set[str] = set()

    for field in dataclasses.fields(record_type):
        if field.name.startswith("_"):
            continue
        tag = field_tag_of(field.metadata)
        if tag.skip:
            continue

        shape = classify_annotation(_field_annotation(record_type, field, hints))
        descriptor = ModelFieldDescriptor(
            attr_name=field.name,
            external_name=tag.name or to_snake_case(field.name),
            tag=tag,
            shape=shape,
        )

        if tag.extra:
            if extra_field is not None:
                raise StructuralError(
                    f"multiple extra fields: {extra_field.attr_name}, {field.name}",
                    path=record_type.__name__,
                )
            if unwrap_optional(shape).kind != EnumFieldKind.RAW_MAPPING:
                raise TypeMismatchError(
                    f"{record_type.__name__}.{field.name}",
                    expected="raw mapping for extra field",
                    actual=repr(shape.annotation),
                )
            extra_field = descriptor
            continue

        embedded = unwrap_optional(shape)
        if tag.embed and embedded.kind == EnumFieldKind.RECORD:
            descriptor = descriptor.model_copy(
                update={"embedded_type": embedded.target}
            )
            consumed.update(describe_record(embedded.target).consumed_keys)
        else:
            consumed.add(descriptor.external_name)
        fields.append(descriptor)

    descriptor = ModelRecordDescriptor(
        record_type=record_type,
        fields=tuple(fields),
        extra_field=extra_field,
        consumed_keys=frozenset(consumed),
    )
    logger.debug(
        "Described record type",
        extra={
            "record_type": record_type.__qualname__,
            "field_count": len(fields),
            "has_extra": extra_field is not None,
        },
    )
    return descriptor


# =============================================================================
# Instantiation
# =============================================================================


def zero_value(shape: ModelTypeShape) -> Any:
    """Return the empty value of a shape.

    Records get a fresh instance, sequences and mappings an empty container,
    and primitives their falsy value. Enums, optionals, dynamic and
    unsupported shapes have no empty value and get None.
    """
    kind = shape.kind
    if kind == EnumFieldKind.PRIMITIVE:
        if shape.is_enum or shape.primitive is None:
            return None
        return shape.primitive()
    if kind == EnumFieldKind.DURATION:
        return timedelta(0)
    if kind == EnumFieldKind.RECORD:
        return instantiate_record(shape.target)
    if kind == EnumFieldKind.SEQUENCE:
        return () if shape.container is tuple else []
    if kind in (EnumFieldKind.RAW_MAPPING, EnumFieldKind.TYPED_MAPPING):
        return {}
    if kind == EnumFieldKind.REFERENCE:
        return Pointer()
    return None


@cache
def _has_full_defaults(record_type: type) -> bool:
    return all(
        field.default is not dataclasses.MISSING
        or field.default_factory is not dataclasses.MISSING
        for field in dataclasses.fields(record_type)
        if field.init
    )


def instantiate_record(record_type: type) -> Any:
    """Create a record with every field at its default.

    Classes whose ``__init__`` parameters all have defaults are called with
    no arguments. Otherwise the instance is allocated with ``__new__`` and
    each field receives its declared default, the result of its default
    factory, or the zero value of its annotation.
    """
    if _has_full_defaults(record_type):
        return record_type()

    instance = object.__new__(record_type)
    hints = _resolve_hints(record_type)
    for field in dataclasses.fields(record_type):
        if field.default is not dataclasses.MISSING:
            value = field.default
        elif field.default_factory is not dataclasses.MISSING:
            value = field.default_factory()
        else:
            annotation = _field_annotation(record_type, field, hints)
            value = zero_value(classify_annotation(annotation))
        object.__setattr__(instance, field.name, value)
    return instance


def set_field(instance: object, name: str, value: object) -> None:
    """Assign a field, including on frozen dataclasses."""
    object.__setattr__(instance, name, value)


def type_name_of(value: object) -> str:
    """Short type name used in mismatch errors."""
    if value is None:
        return "None"
    return type(value).__name__

__all__ = [
    "classify_annotation",
    "describe_record",
    "instantiate_record",
    "is_dynamic_type",
    "is_record_type",
    "set_field",
    "type_name_of",
    "unwrap_optional",
    "zero_value",
]
