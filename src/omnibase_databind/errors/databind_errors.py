# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Databind Error Classes.

This module defines the error taxonomy shared by the bind, unbind and link
engines.

Error Hierarchy:
    DatabindError (base error, structured payload in ``.model``)
    ├── StructuralError             malformed invocation or input shape
    ├── TypeMismatchError           value kind incompatible with the field
    ├── ConversionError             custom converter / hook / parse failure
    ├── RequiredFieldError          required key absent from the source
    ├── ValueMismatchError          ``match=`` constraint violated
    ├── UnknownDynamicTypeError     discriminator without a constructor
    ├── DynamicConstructionError    constructor raised
    ├── UnresolvedReferenceError    ``$ref`` id missing from the registry
    ├── BindingError                wrapper adding path/field/key while binding
    ├── UnbindingError              wrapper adding path/field/key while unbinding
    └── LinkError                   wrapper adding the path while linking

Wrapper errors keep the original error in ``cause`` and chain it with
``raise ... from``. Use ``find_cause`` to test for a root kind regardless of
how many layers of wrapping a failure climbed through.
"""

from __future__ import annotations

from typing import Optional, TypeVar

from omnibase_databind.enums import EnumDatabindErrorCode
from omnibase_databind.errors.model_databind_error import ModelDatabindError
from omnibase_databind.errors.model_databind_error_context import (
    ModelDatabindErrorContext,
)

ErrorT = TypeVar("ErrorT", bound=BaseException)


class DatabindError(Exception):
    """Base error class for all databind errors.

    Structured Fields (via ModelDatabindErrorContext):
        operation: Engine operation being performed
        target_type: Record type being processed
        correlation_id: Caller correlation ID

    Example:
        >>> context = ModelDatabindErrorContext(operation="bind")
        >>> raise DatabindError("Operation failed", context=context, retry=False)
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[EnumDatabindErrorCode] = None,
        context: Optional[ModelDatabindErrorContext] = None,
        **extra_context: object,
    ) -> None:
        """Initialize DatabindError with structured fields.

        Args:
            message: Human-readable error message
            error_code: Error code (defaults to OPERATION_FAILED)
            context: Bundled context (operation, target_type, correlation_id)
            **extra_context: Additional context information
        """
        structured_context: dict[str, object] = dict(extra_context)

        correlation_id = None
        if context is not None:
            if context.operation is not None:
                structured_context["operation"] = context.operation
            if context.target_type is not None:
                structured_context["target_type"] = context.target_type
            correlation_id = context.correlation_id

        self.model = ModelDatabindError(
            message=message,
            error_code=error_code or EnumDatabindErrorCode.OPERATION_FAILED,
            correlation_id=correlation_id,
            context=structured_context,
        )
        super().__init__(message)

    @property
    def message(self) -> str:
        return self.model.message

    @property
    def error_code(self) -> EnumDatabindErrorCode:
        return self.model.error_code

    def __str__(self) -> str:
        return self.model.message


class StructuralError(DatabindError):
    """Raised for malformed invocations.

    Used for a ``None`` target or source, unsupported field annotations,
    malformed discriminators, records declaring more than one extra field and
    generic input nested deeper than the configured ceiling.
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        context: Optional[ModelDatabindErrorContext] = None,
        **extra_context: object,
    ) -> None:
        self.path = path
        if path:
            extra_context["path"] = path
            message = f"{path}: {message}"
        super().__init__(
            message=message,
            error_code=EnumDatabindErrorCode.INVALID_INPUT,
            context=context,
            **extra_context,
        )


class TypeMismatchError(DatabindError):
    """Raised when a value's kind is incompatible with its target.

    Example:
        >>> raise TypeMismatchError("Config.port", expected="integer", actual="list")
    """

    def __init__(
        self,
        path: str,
        expected: str,
        actual: str,
        context: Optional[ModelDatabindErrorContext] = None,
    ) -> None:
        self.path = path
        self.expected = expected
        self.actual = actual
        if path:
            message = f"{path}: expected {expected}, got {actual}"
        else:
            message = f"expected {expected}, got {actual}"
        super().__init__(
            message=message,
            error_code=EnumDatabindErrorCode.TYPE_MISMATCH,
            context=context,
            path=path,
            expected=expected,
            actual=actual,
        )


class ConversionError(DatabindError):
    """Raised when a converter, hook or text parser fails.

    The failing exception is kept in ``cause``.
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        cause: Optional[BaseException] = None,
        context: Optional[ModelDatabindErrorContext] = None,
        **extra_context: object,
    ) -> None:
        self.path = path
        self.cause = cause
        text = message
        if cause is not None:
            text = f"{message}: {cause}"
        if path:
            text = f"{path}: {text}"
            extra_context["path"] = path
        super().__init__(
            message=text,
            error_code=EnumDatabindErrorCode.CONVERSION_FAILED,
            context=context,
            **extra_context,
        )


class RequiredFieldError(DatabindError):
    """Raised when a required field's key is absent from the source mapping."""

    def __init__(
        self,
        path: str,
        field: str,
        context: Optional[ModelDatabindErrorContext] = None,
    ) -> None:
        self.path = path
        self.field = field
        super().__init__(
            message=f"{path}.{field}: required field missing",
            error_code=EnumDatabindErrorCode.REQUIRED_FIELD_MISSING,
            context=context,
            path=path,
            field=field,
        )


class ValueMismatchError(DatabindError):
    """Raised when a present value differs from the field's ``match=`` literal."""

    def __init__(
        self,
        path: str,
        field: str,
        expected: str,
        actual: str,
        context: Optional[ModelDatabindErrorContext] = None,
    ) -> None:
        self.path = path
        self.field = field
        self.expected = expected
        self.actual = actual
        super().__init__(
            message=f'{path}.{field}: expected value "{expected}", got "{actual}"',
            error_code=EnumDatabindErrorCode.VALUE_MISMATCH,
            context=context,
            path=path,
            field=field,
            expected=expected,
            actual=actual,
        )


class UnknownDynamicTypeError(DatabindError):
    """Raised when no constructor is registered for a discriminator."""

    def __init__(
        self,
        path: str,
        type_tag: str,
        context: Optional[ModelDatabindErrorContext] = None,
    ) -> None:
        self.path = path
        self.type_tag = type_tag
        super().__init__(
            message=f'{path}: unknown dynamic type "{type_tag}"',
            error_code=EnumDatabindErrorCode.UNKNOWN_DYNAMIC_TYPE,
            context=context,
            path=path,
            type_tag=type_tag,
        )


class DynamicConstructionError(DatabindError):
    """Raised when a registered dynamic constructor fails."""

    def __init__(
        self,
        path: str,
        type_tag: str,
        cause: BaseException,
        context: Optional[ModelDatabindErrorContext] = None,
    ) -> None:
        self.path = path
        self.type_tag = type_tag
        self.cause = cause
        super().__init__(
            message=f'{path}: binding dynamic type "{type_tag}" failed: {cause}',
            error_code=EnumDatabindErrorCode.DYNAMIC_CONSTRUCTION_FAILED,
            context=context,
            path=path,
            type_tag=type_tag,
        )


class UnresolvedReferenceError(DatabindError):
    """Raised when a pointer's ``$ref`` has no registered target."""

    def __init__(
        self,
        ref: str,
        lookup_key: str,
        context: Optional[ModelDatabindErrorContext] = None,
    ) -> None:
        self.ref = ref
        self.lookup_key = lookup_key
        super().__init__(
            message=f"unresolved reference: {ref} (looking for {lookup_key})",
            error_code=EnumDatabindErrorCode.UNRESOLVED_REFERENCE,
            context=context,
            ref=ref,
            lookup_key=lookup_key,
        )


class BindingError(DatabindError):
    """Wrapper adding the enclosing field location to a bind failure."""

    def __init__(
        self,
        path: str,
        field: str,
        key: str,
        cause: BaseException,
        context: Optional[ModelDatabindErrorContext] = None,
    ) -> None:
        self.path = path
        self.field = field
        self.key = key
        self.cause = cause
        super().__init__(
            message=f'binding field {path}.{field} from key "{key}": {cause}',
            error_code=EnumDatabindErrorCode.BINDING_FAILED,
            context=context,
            path=path,
            field=field,
            key=key,
        )


class UnbindingError(DatabindError):
    """Wrapper adding the enclosing field location to an unbind failure."""

    def __init__(
        self,
        path: str,
        field: str,
        key: str,
        cause: BaseException,
        context: Optional[ModelDatabindErrorContext] = None,
    ) -> None:
        self.path = path
        self.field = field
        self.key = key
        self.cause = cause
        super().__init__(
            message=f'unbinding field {path}.{field} to key "{key}": {cause}',
            error_code=EnumDatabindErrorCode.UNBINDING_FAILED,
            context=context,
            path=path,
            field=field,
            key=key,
        )


class LinkError(DatabindError):
    """Wrapper adding the object-graph location to a linking failure."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        cause: Optional[BaseException] = None,
        context: Optional[ModelDatabindErrorContext] = None,
    ) -> None:
        self.path = path
        self.cause = cause
        text = message
        if cause is not None:
            text = f"{message}: {cause}"
        if path:
            text = f"{path}: {text}"
        super().__init__(
            message=text,
            error_code=EnumDatabindErrorCode.LINKING_FAILED,
            context=context,
            path=path,
        )


def find_cause(error: BaseException, error_type: type[ErrorT]) -> Optional[ErrorT]:
    """Return the first error of ``error_type`` in a wrapped error chain.

    Follows ``cause`` attributes set by the wrapper errors and falls back to
    ``__cause__`` so chains built with ``raise ... from`` are covered too.

    Args:
        error: The outermost error.
        error_type: The root kind to look for.

    Returns:
        The matching error, or None if the chain holds none.
    """
    current: Optional[BaseException] = error
    seen: set[int] = set()
    while current is not None and id(current) not in seen:
        if isinstance(current, error_type):
            return current
        seen.add(id(current))
        current = getattr(current, "cause", None) or current.__cause__
    return None


def is_required_field_error(error: BaseException) -> bool:
    """True if ``error`` is, or wraps, a RequiredFieldError."""
    return find_cause(error, RequiredFieldError) is not None


def is_value_mismatch_error(error: BaseException) -> bool:
    """True if ``error`` is, or wraps, a ValueMismatchError."""
    return find_cause(error, ValueMismatchError) is not None


__all__ = [
    "BindingError",
    "ConversionError",
    "DatabindError",
    "DynamicConstructionError",
    "LinkError",
    "RequiredFieldError",
    "StructuralError",
    "TypeMismatchError",
    "UnbindingError",
    "UnknownDynamicTypeError",
    "UnresolvedReferenceError",
    "ValueMismatchError",
    "find_cause",
    "is_required_field_error",
    "is_value_mismatch_error",
]
