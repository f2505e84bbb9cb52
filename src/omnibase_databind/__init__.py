# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""ONEX Databind - Bidirectional binding between generic data and typed records.

This package moves data between the generic trees produced by JSON and YAML
decoders (dicts, lists, strings, numbers, booleans, None) and dataclass
records, in both directions:

- bind / merge / new: generic mapping into a record, with lenient scalar
  coercion, per-field annotations, custom hooks and polymorphic fields
- unbind: record back into a generic mapping
- link: resolution of ``Pointer`` references across bound graphs
- inspect_record: human-readable rendering of a bound record

Key Components:
    - Field annotations via ``dataclasses.field(metadata={"df": "..."})``
    - ModelBindOptions: Converters, polymorphic constructors, depth ceiling
    - Linker: Two-phase reference resolver with optional caching
    - DatabindError hierarchy with structured ModelDatabindError payloads
    - JSON/YAML adapters in ``omnibase_databind.adapters``

Example:
    ```python
    from dataclasses import dataclass, field

    from omnibase_databind import new, unbind

    @dataclass
    class Person:
        name: str = field(default="", metadata={"df": "+required"})
        age: int = 0

    person = new(Person, {"name": "John Doe", "age": "30"})
    assert unbind(person) == {"name": "John Doe", "age": 30}
    ```
"""

from omnibase_databind.errors import (
    BindingError,
    ConversionError,
    DatabindError,
    LinkError,
    RequiredFieldError,
    StructuralError,
    TypeMismatchError,
    UnbindingError,
    UnknownDynamicTypeError,
    UnresolvedReferenceError,
    ValueMismatchError,
    find_cause,
)
from omnibase_databind.models import (
    ModelBindOptions,
    ModelInspectOptions,
    ModelLinkerOptions,
)
from omnibase_databind.protocols import (
    ProtocolConverter,
    ProtocolDynamic,
    ProtocolIdentifiable,
    ProtocolMarshaler,
    ProtocolUnmarshaler,
)
from omnibase_databind.runtime import (
    Linker,
    bind,
    inspect_record,
    link,
    merge,
    new,
    unbind,
)
from omnibase_databind.types import Pointer, UInt
from omnibase_databind.utils import parse_field_tag, to_snake_case

__all__: list[str] = [
    "BindingError",
    "ConversionError",
    "DatabindError",
    "LinkError",
    "Linker",
    "ModelBindOptions",
    "ModelInspectOptions",
    "ModelLinkerOptions",
    "Pointer",
    "ProtocolConverter",
    "ProtocolDynamic",
    "ProtocolIdentifiable",
    "ProtocolMarshaler",
    "ProtocolUnmarshaler",
    "RequiredFieldError",
    "StructuralError",
    "TypeMismatchError",
    "UInt",
    "UnbindingError",
    "UnknownDynamicTypeError",
    "UnresolvedReferenceError",
    "ValueMismatchError",
    "bind",
    "find_cause",
    "inspect_record",
    "link",
    "merge",
    "new",
    "parse_field_tag",
    "to_snake_case",
    "unbind",
]
