# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Human-readable rendering of bound records.

``inspect_record`` prints the resolved state of a record for configuration
debugging. The output is an indented pseudo-structure with the colons of
every nesting level aligned to one column::

    ServerConfig {
      host            : "localhost"
      port            : 8080
      api_key (secret): <set>
      timeout         : 30s
      owner           : $ref: "alice" -> <unresolved>
    }

The format is meant for reading, not parsing.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import timedelta
from enum import Enum
from typing import Optional

from omnibase_databind.enums import EnumFieldKind
from omnibase_databind.errors import ModelDatabindErrorContext, TypeMismatchError
from omnibase_databind.models import ModelFieldDescriptor, ModelInspectOptions
from omnibase_databind.protocols import ProtocolDynamic
from omnibase_databind.runtime.field_introspector import (
    describe_record,
    is_record_type,
    type_name_of,
    unwrap_optional,
)
from omnibase_databind.runtime.type_coercion import TypeCoercion
from omnibase_databind.runtime.unbind_engine import is_zero_value
from omnibase_databind.types import Pointer
from omnibase_databind.utils import format_duration

MAX_DEPTH_MARKER = "<max depth reached>"


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _visible_fields(record: object) -> list[tuple[ModelFieldDescriptor, object]]:
    """Fields of a record in display order, embedded records flattened."""
    descriptor = describe_record(type(record))
    result: list[tuple[ModelFieldDescriptor, object]] = []
    for field in descriptor.fields:
        value = getattr(record, field.attr_name, None)
        if field.is_embedded:
            if value is not None:
                result.extend(_visible_fields(value))
            continue
        result.append((field, value))
    if descriptor.extra_field is not None:
        extra = descriptor.extra_field
        result.append((extra, getattr(record, extra.attr_name, None)))
    return result


def _display_name(field: ModelFieldDescriptor) -> str:
    if field.tag.secret:
        return f"{field.external_name} (secret)"
    return field.external_name


def _is_record(value: object) -> bool:
    return not isinstance(value, type) and is_record_type(type(value))


class _RecordInspector:
    """Two-pass renderer: measure the layout, then write it."""

    def __init__(self, options: ModelInspectOptions) -> None:
        self._options = options
        self._indent = options.indent
        self._colon_column = 0
        self._parts: list[str] = []

    def render(self, record: object) -> str:
        depth = self._deepest(record, 0)
        width = self._widest(record, 0)
        self._colon_column = depth * len(self._indent) + width
        self._write_record(record, 0)
        return "".join(self._parts)

    # -------------------------------------------------------------------------
    # Layout pass
    # -------------------------------------------------------------------------

    def _nested(self, value: object) -> list[object]:
        if _is_record(value):
            return [value]
        if isinstance(value, (list, tuple)):
            return [item for item in value if _is_record(item)]
        return []

    def _deepest(self, value: object, depth: int) -> int:
        if depth > self._options.max_depth:
            return depth
        deepest = depth
        if _is_record(value):
            for _, field_value in _visible_fields(value):
                deepest = max(deepest, self._deepest_value(field_value, depth + 1))
        return deepest

    def _deepest_value(self, value: object, depth: int) -> int:
        if isinstance(value, (list, tuple)):
            deepest = depth
            for item in self._nested(value):
                deepest = max(deepest, self._deepest(item, depth + 1))
            return deepest
        return self._deepest(value, depth)

    def _widest(self, value: object, depth: int) -> int:
        if depth > self._options.max_depth or not _is_record(value):
            return 0
        widest = 0
        for field, field_value in _visible_fields(value):
            widest = max(widest, len(_display_name(field)))
            if isinstance(field_value, (list, tuple)):
                for item in self._nested(field_value):
                    widest = max(widest, self._widest(item, depth + 2))
            else:
                widest = max(widest, self._widest(field_value, depth + 1))
        return widest

    # -------------------------------------------------------------------------
    # Writing pass
    # -------------------------------------------------------------------------

    def _write_indent(self, levels: int) -> None:
        self._parts.append(self._indent * levels)

    def _write_record(self, record: object, depth: int) -> None:
        if depth > self._options.max_depth:
            self._parts.append(MAX_DEPTH_MARKER)
            return

        self._parts.append(f"{type(record).__name__} {{\n")
        fields = _visible_fields(record)
        for field, value in fields:
            name = _display_name(field)
            self._write_indent(depth + 1)
            self._parts.append(name)
            current = (depth + 1) * len(self._indent) + len(name)
            self._parts.append(" " * max(self._colon_column - current, 0))
            self._parts.append(": ")
            if field.tag.secret and not self._options.show_secrets:
                self._parts.append("<unset>" if is_zero_value(value) else "<set>")
            elif (
                unwrap_optional(field.shape).kind == EnumFieldKind.DYNAMIC
                and isinstance(value, ProtocolDynamic)
            ):
                self._parts.append(value.type_tag())
            else:
                self._write_value(value, depth + 1)
            self._parts.append("\n")

        if not fields:
            self._write_indent(depth + 1)
            self._parts.append("<no fields>\n")

        self._write_indent(depth)
        self._parts.append("}")

    def _write_value(self, value: object, depth: int) -> None:
        if depth > self._options.max_depth:
            self._parts.append(MAX_DEPTH_MARKER)
            return
        if value is None:
            self._parts.append("<nil>")
        elif isinstance(value, Pointer):
            self._write_pointer(value, depth)
        elif _is_record(value):
            self._write_record(value, depth)
        elif isinstance(value, ProtocolDynamic) and not isinstance(value, type):
            self._parts.append(value.type_tag())
        elif isinstance(value, Enum):
            self._write_value(value.value, depth)
        elif isinstance(value, str):
            self._parts.append(_quote(value))
        elif isinstance(value, (bool, int, float)):
            self._parts.append(TypeCoercion.render_match(value))
        elif isinstance(value, timedelta):
            self._parts.append(format_duration(value))
        elif isinstance(value, Mapping):
            self._write_mapping(value, depth)
        elif isinstance(value, (list, tuple)):
            self._write_sequence(value, depth)
        else:
            self._parts.append(f"<{type(value).__qualname__}>")

    def _write_pointer(self, pointer: Pointer[object], depth: int) -> None:
        if not pointer.ref:
            self._parts.append("<empty ref>")
            return
        self._parts.append(f"$ref: {_quote(pointer.ref)} -> ")
        if pointer.resolved is None:
            self._parts.append("<unresolved>")
            return
        self._write_value(pointer.resolved, depth)

    def _write_sequence(self, items: list[object] | tuple[object, ...], depth: int) -> None:
        if not items:
            self._parts.append("[]")
            return
        self._parts.append("[\n")
        for index, item in enumerate(items):
            self._write_indent(depth + 1)
            self._parts.append(f"[{index}]: ")
            self._write_value(item, depth + 1)
            self._parts.append("\n")
        self._write_indent(depth)
        self._parts.append("]")

    def _write_mapping(self, mapping: Mapping[object, object], depth: int) -> None:
        if not mapping:
            self._parts.append("{}")
            return
        self._parts.append("{\n")
        last = len(mapping) - 1
        for position, (key, item) in enumerate(mapping.items()):
            self._write_indent(depth + 1)
            self._parts.append(_quote(key) if isinstance(key, str) else str(key))
            self._parts.append(": ")
            self._write_value(item, depth + 1)
            self._parts.append(",\n" if position < last else "\n")
        self._write_indent(depth)
        self._parts.append("}")


def inspect_record(
    source: object,
    options: Optional[ModelInspectOptions] = None,
) -> str:
    """Render the resolved state of a record.

    Args:
        source: Dataclass instance, or None.
        options: Depth ceiling, indentation and secret handling; None selects
            the defaults.

    Returns:
        The rendered tree; ``"<nil>"`` for a None source.

    Raises:
        TypeMismatchError: If ``source`` is not a dataclass instance.

    Example:
        >>> print(inspect_record(Credentials(user="admin", password="")))
        Credentials {
          user             : "admin"
          password (secret): <unset>
        }
    """
    if source is None:
        return "<nil>"
    if not _is_record(source):
        raise TypeMismatchError(
            "",
            expected="dataclass instance",
            actual=type_name_of(source),
            context=ModelDatabindErrorContext(operation="inspect"),
        )
    return _RecordInspector(options or ModelInspectOptions()).render(source)


__all__ = ["MAX_DEPTH_MARKER", "inspect_record"]
