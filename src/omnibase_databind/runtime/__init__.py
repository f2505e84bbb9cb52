# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Runtime module for omnibase_databind.

This module provides the engines that move data between generic mappings and
typed records.

Engines
-------
- **BindEngine**: Populates records from generic data (``bind``, ``merge``,
  ``new``)
- **UnbindEngine**: Produces generic data from records (``unbind``)
- **Linker**: Resolves ``Pointer`` fields across bound graphs (``link``)

Supporting Components
---------------------
- **TypeCoercion**: Lenient scalar conversion (numbers, booleans, durations,
  enums)
- **HookRegistry**: Converter and marshal/unmarshal hook dispatch
- **DynamicResolver**: Polymorphic values selected by a ``type`` key
- **field_introspector**: Cached per-class field descriptors
- **inspect_record**: Human-readable rendering for debugging
"""

from __future__ import annotations

from omnibase_databind.runtime.bind_engine import (
    REF_KEY,
    BindEngine,
    bind,
    merge,
    new,
)
from omnibase_databind.runtime.dynamic_resolver import TYPE_KEY, DynamicResolver
from omnibase_databind.runtime.field_introspector import (
    classify_annotation,
    describe_record,
    instantiate_record,
)
from omnibase_databind.runtime.hook_registry import HookRegistry
from omnibase_databind.runtime.record_inspector import inspect_record
from omnibase_databind.runtime.reference_linker import Linker, link, reference_key
from omnibase_databind.runtime.type_coercion import TypeCoercion
from omnibase_databind.runtime.unbind_engine import (
    UnbindEngine,
    is_zero_value,
    unbind,
)

__all__: list[str] = [
    "REF_KEY",
    "TYPE_KEY",
    "BindEngine",
    "DynamicResolver",
    "HookRegistry",
    "Linker",
    "TypeCoercion",
    "UnbindEngine",
    "bind",
    "classify_annotation",
    "describe_record",
    "inspect_record",
    "instantiate_record",
    "is_zero_value",
    "link",
    "merge",
    "new",
    "reference_key",
    "unbind",
]
