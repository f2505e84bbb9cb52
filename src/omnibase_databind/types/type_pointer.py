# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Cross-reference pointer type.

A ``Pointer[T]`` field holds a textual reference to another record in the
same object graph. Binding fills ``ref`` from the ``{"$ref": "<id>"}`` shape;
the reference linker later fills ``resolved`` with the registered record of
type ``T`` whose identity equals ``ref``.

Example:
    >>> @dataclass
    ... class Team:
    ...     lead: Pointer[User] = field(default_factory=Pointer)
    >>> team = new(Team, {"lead": {"$ref": "alice"}})
    >>> team.lead.ref
    'alice'
    >>> link(team, users)
    >>> team.lead.resolve().name
    'Alice'
"""

from __future__ import annotations

from typing import Generic, Optional, TypeVar, get_args

T = TypeVar("T")


class Pointer(Generic[T]):
    """Reference to a record of type ``T`` by identity.

    Attributes:
        ref: Identity of the referenced record; empty means "no reference".
        resolved: The linked record, or None until the linker runs.
    """

    def __init__(self, ref: str = "", resolved: Optional[T] = None) -> None:
        self.ref = ref
        self.resolved = resolved

    @property
    def target_type(self) -> Optional[type]:
        """Runtime type argument when built as ``Pointer[T](...)``, else None."""
        orig = getattr(self, "__orig_class__", None)
        if orig is None:
            return None
        args = get_args(orig)
        if not args or not isinstance(args[0], type):
            return None
        return args[0]

    def resolve(self) -> Optional[T]:
        """Return the linked record, or None while unresolved."""
        return self.resolved

    def is_resolved(self) -> bool:
        return self.resolved is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pointer):
            return NotImplemented
        return self.ref == other.ref and self.resolved is other.resolved

    def __hash__(self) -> int:
        return hash(self.ref)

    def __repr__(self) -> str:
        state = "resolved" if self.is_resolved() else "unresolved"
        return f"Pointer(ref={self.ref!r}, {state})"


__all__ = ["Pointer"]
