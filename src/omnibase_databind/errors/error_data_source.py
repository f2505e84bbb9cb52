# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Data Source Error Classes.

Errors raised by the JSON/YAML adapters when reading or writing serialized
data. They sit beside the core taxonomy: a file that cannot be read or a
document that cannot be parsed never reaches the bind engine, so callers can
tell an I/O problem apart from a binding problem.

Error Hierarchy:
    DatabindError
    └── DataSourceError
        ├── DataFileError     file missing, unreadable or unwritable
        └── DataParseError    malformed document or non-mapping top level
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from omnibase_databind.enums import EnumDatabindErrorCode
from omnibase_databind.errors.databind_errors import DatabindError
from omnibase_databind.errors.model_databind_error_context import (
    ModelDatabindErrorContext,
)


class DataSourceError(DatabindError):
    """Base class for adapter-layer errors."""


class DataFileError(DataSourceError):
    """Raised when a data file cannot be opened, read or written.

    Attributes:
        file_path: Path of the file that failed
        operation: ``read`` or ``write``
        is_not_found: True when the file does not exist

    Example:
        >>> try:
        ...     new_yaml_file(Config, "missing.yaml")
        ... except DataFileError as e:
        ...     if e.is_not_found:
        ...         ...
    """

    def __init__(
        self,
        message: str,
        file_path: Path | str,
        operation: str,
        is_not_found: bool = False,
        cause: Optional[BaseException] = None,
        context: Optional[ModelDatabindErrorContext] = None,
    ) -> None:
        self.file_path = str(file_path)
        self.operation = operation
        self.is_not_found = is_not_found
        self.cause = cause
        super().__init__(
            message=f"{operation} {self.file_path}: {message}",
            error_code=(
                EnumDatabindErrorCode.RESOURCE_NOT_FOUND
                if is_not_found
                else EnumDatabindErrorCode.FILE_IO_ERROR
            ),
            context=context,
            file_path=self.file_path,
            file_operation=operation,
        )


class DataParseError(DataSourceError):
    """Raised when serialized data cannot be decoded into a mapping."""

    def __init__(
        self,
        message: str,
        data_format: str,
        cause: Optional[BaseException] = None,
        context: Optional[ModelDatabindErrorContext] = None,
    ) -> None:
        self.data_format = data_format
        self.cause = cause
        text = f"{data_format}: {message}"
        if cause is not None:
            text = f"{text}: {cause}"
        super().__init__(
            message=text,
            error_code=EnumDatabindErrorCode.PARSE_ERROR,
            context=context,
            data_format=data_format,
        )


__all__ = ["DataFileError", "DataParseError", "DataSourceError"]
