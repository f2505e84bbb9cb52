# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Reference Linker - resolves ``Pointer`` fields across bound object graphs.

Linking runs in two phases after binding:

1. **Register**: walk the object graphs and store every record implementing
   ``ProtocolIdentifiable`` under ``"<module>.<qualname>:<identity()>"``
2. **Resolve**: walk the graphs again and, for every ``Pointer`` with a
   non-empty ``ref``, look up ``"<target type>:<ref>"`` and store the found
   record in ``pointer.resolved``

Keys are namespaced by the concrete record type, so a ``User`` and a
``Team`` may share an id. The target type of a pointer comes from its field
annotation (``Pointer[User]``); for an unparameterised annotation, from the
pointer's own runtime type argument.

Because both phases walk every target before resolving any pointer, the
order of targets passed to ``link`` does not matter.

Resolution Semantics:
    - ``resolved`` aliases the registered record; no copy is made
    - a resolved pointer is never re-resolved (resolution is monotonic)
    - the walk does not descend into ``pointer.resolved``
    - with ``allow_partial_resolution`` a missing target leaves the pointer
      unresolved; otherwise ``LinkError`` wraps ``UnresolvedReferenceError``

Thread Safety:
    The registry of a Linker is guarded by a ``threading.Lock``. Mutating
    the object graphs themselves while a link is running is not supported.

Example Usage:
    ```python
    from omnibase_databind import Linker, ModelLinkerOptions, new

    users = new(UserDirectory, users_data)
    docs = new(DocumentSet, docs_data)

    # one-shot
    link(docs, users)

    # staged, across several sources
    linker = Linker(ModelLinkerOptions(allow_partial_resolution=True))
    linker.register(users)
    linker.register(docs)
    linker.resolve_references(docs)
    ```
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from typing import Any, Optional

from omnibase_databind.enums import EnumFieldKind
from omnibase_databind.errors import (
    LinkError,
    ModelDatabindErrorContext,
    StructuralError,
    TypeMismatchError,
    UnresolvedReferenceError,
)
from omnibase_databind.models import ModelLinkerOptions, ModelTypeShape
from omnibase_databind.protocols import ProtocolIdentifiable
from omnibase_databind.runtime.field_introspector import (
    describe_record,
    is_record_type,
    type_name_of,
)
from omnibase_databind.types import Pointer
from omnibase_databind.utils import child_path, index_path

logger = logging.getLogger(__name__)


def qualified_type_name(record_type: type) -> str:
    """Registry namespace of a record type."""
    return f"{record_type.__module__}.{record_type.__qualname__}"


def reference_key(record_type: type, identity: str) -> str:
    """Registry key of a record of ``record_type`` with ``identity``.

    Example:
        >>> reference_key(User, "alice")
        'myapp.models.User:alice'
    """
    return f"{qualified_type_name(record_type)}:{identity}"


def _element_shape(shape: Optional[ModelTypeShape], part: str) -> Optional[ModelTypeShape]:
    if shape is None:
        return None
    if shape.kind == EnumFieldKind.OPTIONAL:
        shape = shape.inner
    return getattr(shape, part, None)


class _ResolveStats:
    __slots__ = ("resolved", "unresolved")

    def __init__(self) -> None:
        self.resolved = 0
        self.unresolved = 0


class Linker:
    """Two-phase reference resolver.

    Args:
        options: Linker options; None selects the defaults (no caching,
            strict resolution).

    Attributes:
        options: The linker options.

    Caching:
        ``register`` always accumulates into the linker's registry.
        ``link`` on a caching linker registers its targets into that same
        registry, so records from earlier calls remain resolvable; a
        non-caching linker builds a private registry for every ``link`` call.
    """

    def __init__(self, options: Optional[ModelLinkerOptions] = None) -> None:
        self.options = options or ModelLinkerOptions()
        self._lock: threading.Lock = threading.Lock()
        self._registry: Optional[dict[str, object]] = None

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def register(self, *targets: object) -> None:
        """Collect the identifiable records of ``targets`` into the registry.

        Re-registering a key replaces the earlier record.

        Raises:
            StructuralError: If no targets are given or a target is None.
            TypeMismatchError: If a target is not a dataclass instance.
        """
        self._validate_targets(targets, "register")
        with self._lock:
            if self._registry is None:
                self._registry = {}
            for target in targets:
                self._collect(target, self._registry, set())
            count = len(self._registry)
        logger.debug(
            "Registered identifiable records",
            extra={"registered_count": count, "target_count": len(targets)},
        )

    def resolve_references(self, target: object) -> None:
        """Resolve every pointer in ``target`` against the registry.

        Raises:
            LinkError: If nothing was registered yet, or a reference has no
                registered target and partial resolution is disabled.
        """
        self._validate_targets((target,), "resolve_references")
        with self._lock:
            if self._registry is None:
                raise LinkError(
                    "no registry available, call register first",
                    context=ModelDatabindErrorContext(operation="resolve_references"),
                )
            self._resolve_all((target,), self._registry)

    def link(self, *targets: object) -> None:
        """Register every target, then resolve the pointers of every target.

        Raises:
            StructuralError: If no targets are given or a target is None.
            TypeMismatchError: If a target is not a dataclass instance.
            LinkError: If a reference cannot be resolved.
        """
        self._validate_targets(targets, "link")
        with self._lock:
            if self.options.enable_caching:
                if self._registry is None:
                    self._registry = {}
                registry = self._registry
            else:
                registry = {}
            visited: set[int] = set()
            for target in targets:
                self._collect(target, registry, visited)
            self._resolve_all(targets, registry)

    def clear_cache(self) -> None:
        """Drop every registered record."""
        with self._lock:
            if self._registry is not None:
                self._registry = {}

    @property
    def registered_count(self) -> int:
        """Number of records currently held in the registry."""
        with self._lock:
            return len(self._registry) if self._registry is not None else 0

    # -------------------------------------------------------------------------
    # Registration walk
    # -------------------------------------------------------------------------

    @staticmethod
    def _validate_targets(targets: tuple[object, ...], operation: str) -> None:
        if not targets:
            raise StructuralError(
                "no targets provided",
                context=ModelDatabindErrorContext(operation=operation),
            )
        for index, target in enumerate(targets):
            if target is None:
                raise StructuralError(
                    f"nil target provided at index {index}",
                    context=ModelDatabindErrorContext(operation=operation),
                )
            if isinstance(target, type) or not is_record_type(type(target)):
                raise TypeMismatchError(
                    f"[{index}]",
                    expected="dataclass instance",
                    actual=type_name_of(target),
                    context=ModelDatabindErrorContext(operation=operation),
                )

    def _collect(self, value: object, registry: dict[str, object], visited: set[int]) -> None:
        if value is None or isinstance(value, (str, bytes, int, float, Pointer)):
            return
        if isinstance(value, Mapping):
            for item in value.values():
                self._collect(item, registry, visited)
            return
        if isinstance(value, (list, tuple)):
            for item in value:
                self._collect(item, registry, visited)
            return
        if not is_record_type(type(value)) or id(value) in visited:
            return

        visited.add(id(value))
        if isinstance(value, ProtocolIdentifiable):
            registry[reference_key(type(value), value.identity())] = value

        for field in describe_record(type(value)).fields:
            self._collect(getattr(value, field.attr_name, None), registry, visited)

    # -------------------------------------------------------------------------
    # Resolution walk
    # -------------------------------------------------------------------------

    def _resolve_all(self, targets: tuple[object, ...], registry: dict[str, object]) -> None:
        stats = _ResolveStats()
        visited: set[int] = set()
        for target in targets:
            self._resolve(target, None, type(target).__name__, registry, visited, stats)
        logger.debug(
            "Resolved references",
            extra={
                "registered_count": len(registry),
                "resolved_count": stats.resolved,
                "unresolved_count": stats.unresolved,
            },
        )

    def _resolve(
        self,
        value: object,
        shape: Optional[ModelTypeShape],
        path: str,
        registry: dict[str, object],
        visited: set[int],
        stats: _ResolveStats,
    ) -> None:
        if value is None or isinstance(value, (str, bytes, int, float)):
            return
        if isinstance(value, Pointer):
            self._resolve_pointer(value, shape, path, registry, stats)
            return
        if isinstance(value, Mapping):
            value_shape = _element_shape(shape, "value")
            for key, item in value.items():
                self._resolve(item, value_shape, index_path(path, key), registry, visited, stats)
            return
        if isinstance(value, (list, tuple)):
            element_shape = _element_shape(shape, "element")
            for index, item in enumerate(value):
                self._resolve(
                    item, element_shape, index_path(path, index), registry, visited, stats
                )
            return
        if not is_record_type(type(value)) or id(value) in visited:
            return

        visited.add(id(value))
        for field in describe_record(type(value)).fields:
            self._resolve(
                getattr(value, field.attr_name, None),
                field.shape,
                child_path(path, field.attr_name),
                registry,
                visited,
                stats,
            )

    def _resolve_pointer(
        self,
        pointer: Pointer[Any],
        shape: Optional[ModelTypeShape],
        path: str,
        registry: dict[str, object],
        stats: _ResolveStats,
    ) -> None:
        if not pointer.ref or pointer.is_resolved():
            return

        declared = shape
        if declared is not None and declared.kind == EnumFieldKind.OPTIONAL:
            declared = declared.inner
        target_type = None
        if declared is not None and declared.kind == EnumFieldKind.REFERENCE:
            target_type = declared.target
        if target_type is None:
            target_type = pointer.target_type
        if target_type is None:
            raise LinkError(
                "cannot determine the target type of reference",
                path=path,
                cause=StructuralError(f'untyped pointer with ref "{pointer.ref}"'),
            )

        key = reference_key(target_type, pointer.ref)
        target = registry.get(key)
        if target is None:
            if self.options.allow_partial_resolution:
                stats.unresolved += 1
                logger.debug(
                    "Leaving reference unresolved",
                    extra={"path": path, "ref": pointer.ref, "lookup_key": key},
                )
                return
            cause = UnresolvedReferenceError(pointer.ref, key)
            raise LinkError("resolving reference", path=path, cause=cause) from cause

        pointer.resolved = target
        stats.resolved += 1


def link(*targets: object) -> None:
    """Link ``targets`` with a fresh, non-caching Linker.

    Example:
        >>> docs = new(DocumentSet, docs_data)
        >>> users = new(UserDirectory, users_data)
        >>> link(docs, users)
        >>> docs.documents[0].author.resolve().name
        'Alice'
    """
    Linker().link(*targets)


__all__ = ["Linker", "link", "qualified_type_name", "reference_key"]
