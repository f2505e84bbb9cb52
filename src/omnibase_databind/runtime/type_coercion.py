# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Scalar coercion between generic values and typed field values.

Binding Rules
-------------
=================  ===========================================================
Target             Accepted raw values
=================  ===========================================================
str                ``str`` only
bool               ``bool``; trimmed strings ``1 t T TRUE true True`` and
                   ``0 f F FALSE false False``
int                ``int``; ``float`` truncated toward zero; trimmed strings
                   parsed as an integer, else as a float then truncated
UInt               as ``int``, negative values rejected
float              ``int`` or ``float``; trimmed strings parsed as a float
timedelta          duration literal (``"1h30m"``) or a number of nanoseconds
=================  ===========================================================

``bool`` is never accepted as a number. Named primitives (``NewType``,
subclasses, enums) are coerced as their underlying primitive and then
re-wrapped in the declared class.

Unbinding reverses the wrapping: enums yield ``.value``, named primitives
their plain value and timedeltas their canonical duration text.
"""

from __future__ import annotations

import math
import re
from datetime import timedelta
from enum import Enum
from typing import Any, Optional

from omnibase_databind.enums import EnumFieldKind
from omnibase_databind.errors import (
    ConversionError,
    ModelDatabindErrorContext,
    StructuralError,
    TypeMismatchError,
)
from omnibase_databind.models import ModelTypeShape
from omnibase_databind.runtime.field_introspector import (
    classify_annotation,
    type_name_of,
)
from omnibase_databind.types import JsonValue
from omnibase_databind.utils import (
    format_duration,
    nanos_to_timedelta,
    parse_duration_ns,
)

_TRUE_STRINGS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_STRINGS = frozenset({"0", "f", "F", "FALSE", "false", "False"})
_INTEGER_TEXT = re.compile(r"^[+-]?\d+$")

_EXPECTED_NAMES: dict[type, str] = {
    str: "string",
    bool: "bool",
    int: "integer",
    float: "float",
}


def _is_number(raw: object) -> bool:
    return isinstance(raw, (int, float)) and not isinstance(raw, bool)


def _parse_float_text(text: str) -> Optional[float]:
    stripped = text.strip()
    if not stripped or "_" in stripped:
        return None
    try:
        return float(stripped)
    except ValueError:
        return None


def _coerce_int(raw: object, unsigned: bool = False) -> Optional[int]:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return int(raw)
    if isinstance(raw, float):
        if unsigned and raw < 0:
            return None
        return int(raw) if math.isfinite(raw) else None
    if isinstance(raw, str):
        stripped = raw.strip()
        if _INTEGER_TEXT.match(stripped):
            return int(stripped)
        parsed = _parse_float_text(stripped)
        if parsed is None or not math.isfinite(parsed):
            return None
        # sign is checked before truncation so -0.5 is not read as 0
        if unsigned and parsed < 0:
            return None
        return int(parsed)
    return None


def _coerce_float(raw: object) -> Optional[float]:
    if _is_number(raw):
        return float(raw)
    if isinstance(raw, str):
        return _parse_float_text(raw)
    return None


def _coerce_bool(raw: object) -> Optional[bool]:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        stripped = raw.strip()
        if stripped in _TRUE_STRINGS:
            return True
        if stripped in _FALSE_STRINGS:
            return False
    return None


class TypeCoercion:
    """Stateless scalar converter used by the bind and unbind engines.

    Thread Safety:
        Instances hold no state and may be shared freely.

    Example:
        >>> coercion = TypeCoercion()
        >>> coercion.to_typed("42", int, "Config.port")
        42
        >>> coercion.to_generic(timedelta(seconds=90))
        '1m30s'
    """

    def __init__(self, context: Optional[ModelDatabindErrorContext] = None) -> None:
        self._context = context

    # -------------------------------------------------------------------------
    # Bind direction
    # -------------------------------------------------------------------------

    def to_typed(self, raw: object, target: Any, path: str) -> Any:
        """Coerce a generic scalar into the declared annotation.

        Args:
            raw: Generic value from the source mapping.
            target: A primitive, named primitive, enum or timedelta annotation.
            path: Field path for error messages.

        Raises:
            TypeMismatchError: If the value cannot represent the target.
            ConversionError: If a duration literal is malformed.
            StructuralError: If ``target`` is not a scalar annotation.
        """
        return self.coerce(raw, classify_annotation(target), path)

    def coerce(self, raw: object, shape: ModelTypeShape, path: str) -> Any:
        """Coerce a generic scalar into a classified PRIMITIVE or DURATION shape."""
        if shape.kind == EnumFieldKind.DURATION:
            return self._coerce_duration(raw, path)
        if shape.kind != EnumFieldKind.PRIMITIVE or shape.primitive is None:
            raise StructuralError(
                f"unsupported scalar target {shape.annotation!r}",
                path=path,
                context=self._context,
            )

        value = self._coerce_primitive(raw, shape, path)
        target = shape.target
        if shape.is_enum:
            try:
                return target(value)
            except ValueError as e:
                raise TypeMismatchError(
                    path,
                    expected=f"one of {[member.value for member in target]}",
                    actual=repr(raw),
                    context=self._context,
                ) from e
        if isinstance(target, type) and target is not shape.primitive:
            return target(value)
        # NewType wrappers are identity functions at runtime
        return value

    def _coerce_primitive(self, raw: object, shape: ModelTypeShape, path: str) -> Any:
        primitive = shape.primitive
        if primitive is str:
            value: Any = raw if isinstance(raw, str) else None
        elif primitive is bool:
            value = _coerce_bool(raw)
        elif primitive is int:
            value = _coerce_int(raw, shape.unsigned)
            if value is not None and shape.unsigned and value < 0:
                value = None
        else:
            value = _coerce_float(raw)

        if value is None:
            expected = _EXPECTED_NAMES[primitive]
            if shape.unsigned:
                expected = "unsigned integer"
            raise TypeMismatchError(
                path,
                expected=expected,
                actual=type_name_of(raw),
                context=self._context,
            )
        return value

    def _coerce_duration(self, raw: object, path: str) -> timedelta:
        if isinstance(raw, timedelta):
            return raw
        if isinstance(raw, str):
            try:
                return nanos_to_timedelta(parse_duration_ns(raw))
            except ValueError as e:
                raise ConversionError(
                    f"invalid duration {raw!r}",
                    path=path,
                    cause=e,
                    context=self._context,
                ) from e
        if isinstance(raw, int) and not isinstance(raw, bool):
            return nanos_to_timedelta(raw)
        if isinstance(raw, float) and math.isfinite(raw):
            return nanos_to_timedelta(int(raw))
        raise TypeMismatchError(
            path,
            expected="duration (string or number)",
            actual=type_name_of(raw),
            context=self._context,
        )

    # -------------------------------------------------------------------------
    # Unbind direction
    # -------------------------------------------------------------------------

    def to_generic(self, value: object) -> JsonValue:
        """Convert a scalar field value into its generic form."""
        if isinstance(value, Enum):
            return self.to_generic(value.value)
        if isinstance(value, timedelta):
            return format_duration(value)
        if isinstance(value, bool):
            return bool(value)
        if isinstance(value, int):
            return int(value)
        if isinstance(value, float):
            return float(value)
        if isinstance(value, str):
            return str(value)
        if value is None:
            return None
        raise TypeMismatchError(
            "",
            expected="scalar",
            actual=type_name_of(value),
            context=self._context,
        )

    def key_to_text(self, key: object) -> str:
        """Render a typed mapping key as a generic mapping key."""
        generic = self.to_generic(key)
        if isinstance(generic, bool):
            return "true" if generic else "false"
        return str(generic)

    @staticmethod
    def render_match(raw: object) -> str:
        """Render a raw source value for comparison with a ``match=`` literal.

        Example:
            >>> TypeCoercion.render_match(True)
            'true'
            >>> TypeCoercion.render_match(3.0)
            '3'
        """
        if isinstance(raw, bool):
            return "true" if raw else "false"
        if isinstance(raw, int):
            return str(raw)
        if isinstance(raw, float):
            if math.isfinite(raw) and raw.is_integer():
                return str(int(raw))
            return repr(raw)
        if raw is None:
            return "<nil>"
        return str(raw)


__all__ = ["TypeCoercion"]
