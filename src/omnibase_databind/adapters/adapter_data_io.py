# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""JSON and YAML adapters for the binding engines.

Three layers wrap ``bind``, ``new``, ``merge`` and ``unbind``:

- **Text layer**: ``bind_json(target, text)``, ``unbind_yaml(source)``, ...
  accepting ``str`` or ``bytes``
- **Stream layer**: ``bind_json_stream(target, stream)``, ... reading from or
  writing to a text stream
- **File layer**: ``bind_json_file(target, path)``, ... plus ``load_file``,
  which picks the format from the file suffix

Decoding uses ``json.loads`` and ``yaml.safe_load``; encoding uses
``json.dumps`` with two-space indentation and ``yaml.safe_dump`` preserving
field order.

Error Handling:
    - Malformed documents, and documents whose top level is not a mapping,
      raise ``DataParseError``
    - Files that cannot be read or written raise ``DataFileError``
      (``is_not_found`` set for missing files)
    - Errors from the engines propagate unchanged

Example:
    ```python
    from omnibase_databind.adapters import new_yaml_file, unbind_json

    config = new_yaml_file(ServerConfig, "config.yaml")
    print(unbind_json(config))
    ```
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import IO, Optional, TypeVar

import yaml

from omnibase_databind.enums import EnumDataFormat
from omnibase_databind.errors import (
    DataFileError,
    DataParseError,
    ModelDatabindErrorContext,
)
from omnibase_databind.models import ModelBindOptions
from omnibase_databind.runtime import bind, merge, new, unbind
from omnibase_databind.types import JsonMapping

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")

JSON_INDENT = 2


# =============================================================================
# Decoding and encoding
# =============================================================================


def decode(content: str | bytes, data_format: EnumDataFormat) -> JsonMapping:
    """Decode a JSON or YAML document whose top level is a mapping.

    An empty YAML document decodes to an empty mapping.

    Raises:
        DataParseError: If the document is malformed or not a mapping.
    """
    context = ModelDatabindErrorContext(operation=f"decode_{data_format.value}")
    try:
        if data_format == EnumDataFormat.JSON:
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except json.JSONDecodeError as e:
        raise DataParseError(
            "invalid JSON document", data_format.value, cause=e, context=context
        ) from e
    except yaml.YAMLError as e:
        raise DataParseError(
            "invalid YAML document", data_format.value, cause=e, context=context
        ) from e
    except UnicodeDecodeError as e:
        raise DataParseError(
            "document is not valid UTF-8", data_format.value, cause=e, context=context
        ) from e

    # an empty YAML document (no content, only comments or "---") binds nothing
    if data is None and data_format == EnumDataFormat.YAML:
        data = {}
    if not isinstance(data, dict):
        raise DataParseError(
            f"top level must be a mapping, got {type(data).__name__}",
            data_format.value,
            context=context,
        )
    return data


def encode(data: JsonMapping, data_format: EnumDataFormat) -> str:
    """Encode a generic mapping as JSON (indented) or block-style YAML."""
    if data_format == EnumDataFormat.JSON:
        return json.dumps(data, indent=JSON_INDENT, ensure_ascii=False)
    return yaml.safe_dump(
        data, sort_keys=False, allow_unicode=True, default_flow_style=False
    )


# =============================================================================
# Text layer
# =============================================================================


def bind_json(
    target: object, content: str | bytes, options: Optional[ModelBindOptions] = None
) -> None:
    """Decode a JSON document and ``bind`` it into ``target``."""
    bind(target, decode(content, EnumDataFormat.JSON), options)


def bind_yaml(
    target: object, content: str | bytes, options: Optional[ModelBindOptions] = None
) -> None:
    """Decode a YAML document and ``bind`` it into ``target``."""
    bind(target, decode(content, EnumDataFormat.YAML), options)


def new_json(
    record_type: type[RecordT],
    content: str | bytes,
    options: Optional[ModelBindOptions] = None,
) -> RecordT:
    """Decode a JSON document into a new record of ``record_type``."""
    return new(record_type, decode(content, EnumDataFormat.JSON), options)


def new_yaml(
    record_type: type[RecordT],
    content: str | bytes,
    options: Optional[ModelBindOptions] = None,
) -> RecordT:
    """Decode a YAML document into a new record of ``record_type``."""
    return new(record_type, decode(content, EnumDataFormat.YAML), options)


def merge_json(
    target: object, content: str | bytes, options: Optional[ModelBindOptions] = None
) -> None:
    """Decode a JSON document and ``merge`` it into ``target``."""
    merge(target, decode(content, EnumDataFormat.JSON), options)


def merge_yaml(
    target: object, content: str | bytes, options: Optional[ModelBindOptions] = None
) -> None:
    """Decode a YAML document and ``merge`` it into ``target``."""
    merge(target, decode(content, EnumDataFormat.YAML), options)


def unbind_json(source: object, options: Optional[ModelBindOptions] = None) -> str:
    """Unbind ``source`` and encode the result as indented JSON."""
    return encode(unbind(source, options), EnumDataFormat.JSON)


def unbind_yaml(source: object, options: Optional[ModelBindOptions] = None) -> str:
    """Unbind ``source`` and encode the result as YAML."""
    return encode(unbind(source, options), EnumDataFormat.YAML)


# =============================================================================
# Stream layer
# =============================================================================


def _read_stream(stream: IO[str] | IO[bytes]) -> str | bytes:
    try:
        return stream.read()
    except (OSError, ValueError) as e:
        raise DataFileError(
            str(e),
            file_path=getattr(stream, "name", "<stream>"),
            operation="read",
            cause=e,
            context=ModelDatabindErrorContext(operation="read_stream"),
        ) from e


def _write_stream(stream: IO[str], text: str) -> None:
    try:
        stream.write(text)
    except (OSError, ValueError) as e:
        raise DataFileError(
            str(e),
            file_path=getattr(stream, "name", "<stream>"),
            operation="write",
            cause=e,
            context=ModelDatabindErrorContext(operation="write_stream"),
        ) from e


def bind_json_stream(
    target: object,
    stream: IO[str] | IO[bytes],
    options: Optional[ModelBindOptions] = None,
) -> None:
    """Read a JSON document from ``stream`` and ``bind`` it into ``target``."""
    bind_json(target, _read_stream(stream), options)


def bind_yaml_stream(
    target: object,
    stream: IO[str] | IO[bytes],
    options: Optional[ModelBindOptions] = None,
) -> None:
    """Read a YAML document from ``stream`` and ``bind`` it into ``target``."""
    bind_yaml(target, _read_stream(stream), options)


def unbind_json_stream(
    source: object, stream: IO[str], options: Optional[ModelBindOptions] = None
) -> None:
    """Unbind ``source`` and write it to ``stream`` as JSON."""
    _write_stream(stream, unbind_json(source, options))


def unbind_yaml_stream(
    source: object, stream: IO[str], options: Optional[ModelBindOptions] = None
) -> None:
    """Unbind ``source`` and write it to ``stream`` as YAML."""
    _write_stream(stream, unbind_yaml(source, options))


# =============================================================================
# File layer
# =============================================================================


def _read_file(path: Path | str) -> str:
    file_path = Path(path)
    context = ModelDatabindErrorContext(operation="read_file")
    try:
        content = file_path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise DataFileError(
            "file not found",
            file_path,
            "read",
            is_not_found=True,
            cause=e,
            context=context,
        ) from e
    except IsADirectoryError as e:
        raise DataFileError(
            "path is a directory, not a file", file_path, "read", cause=e, context=context
        ) from e
    except PermissionError as e:
        raise DataFileError(
            "permission denied", file_path, "read", cause=e, context=context
        ) from e
    except UnicodeDecodeError as e:
        raise DataFileError(
            "file is not valid UTF-8", file_path, "read", cause=e, context=context
        ) from e
    except OSError as e:
        raise DataFileError(str(e), file_path, "read", cause=e, context=context) from e

    logger.debug(
        "Read data file",
        extra={"file_path": str(file_path), "size": len(content)},
    )
    return content


def _write_file(path: Path | str, text: str) -> None:
    file_path = Path(path)
    context = ModelDatabindErrorContext(operation="write_file")
    try:
        file_path.write_text(text, encoding="utf-8")
    except FileNotFoundError as e:
        raise DataFileError(
            "parent directory does not exist",
            file_path,
            "write",
            is_not_found=True,
            cause=e,
            context=context,
        ) from e
    except OSError as e:
        raise DataFileError(str(e), file_path, "write", cause=e, context=context) from e

    logger.debug(
        "Wrote data file",
        extra={"file_path": str(file_path), "size": len(text)},
    )


def load_file(path: Path | str) -> JsonMapping:
    """Read a ``.json``, ``.yaml`` or ``.yml`` file into a generic mapping.

    Raises:
        DataFileError: If the file cannot be read.
        DataParseError: If the suffix is not recognised or the document is
            malformed.

    Example:
        >>> data = load_file("service.yaml")
        >>> config = new(ServiceConfig, data)
    """
    suffix = Path(path).suffix
    data_format = EnumDataFormat.from_suffix(suffix)
    if data_format is None:
        raise DataParseError(
            f"unsupported file format: {suffix or '<none>'}",
            suffix.lstrip(".") or "unknown",
            context=ModelDatabindErrorContext(operation="load_file"),
        )
    return decode(_read_file(path), data_format)


def bind_json_file(
    target: object, path: Path | str, options: Optional[ModelBindOptions] = None
) -> None:
    """Read a JSON file and ``bind`` it into ``target``."""
    bind_json(target, _read_file(path), options)


def bind_yaml_file(
    target: object, path: Path | str, options: Optional[ModelBindOptions] = None
) -> None:
    """Read a YAML file and ``bind`` it into ``target``."""
    bind_yaml(target, _read_file(path), options)


def new_json_file(
    record_type: type[RecordT],
    path: Path | str,
    options: Optional[ModelBindOptions] = None,
) -> RecordT:
    """Read a JSON file into a new record of ``record_type``."""
    return new_json(record_type, _read_file(path), options)


def new_yaml_file(
    record_type: type[RecordT],
    path: Path | str,
    options: Optional[ModelBindOptions] = None,
) -> RecordT:
    """Read a YAML file into a new record of ``record_type``."""
    return new_yaml(record_type, _read_file(path), options)


def merge_json_file(
    target: object, path: Path | str, options: Optional[ModelBindOptions] = None
) -> None:
    """Read a JSON file and ``merge`` it into ``target``."""
    merge_json(target, _read_file(path), options)


def merge_yaml_file(
    target: object, path: Path | str, options: Optional[ModelBindOptions] = None
) -> None:
    """Read a YAML file and ``merge`` it into ``target``."""
    merge_yaml(target, _read_file(path), options)


def unbind_json_file(
    source: object, path: Path | str, options: Optional[ModelBindOptions] = None
) -> None:
    """Unbind ``source`` and write it to ``path`` as JSON."""
    _write_file(path, unbind_json(source, options))


def unbind_yaml_file(
    source: object, path: Path | str, options: Optional[ModelBindOptions] = None
) -> None:
    """Unbind ``source`` and write it to ``path`` as YAML."""
    _write_file(path, unbind_yaml(source, options))


__all__ = [
    "JSON_INDENT",
    "bind_json",
    "bind_json_file",
    "bind_json_stream",
    "bind_yaml",
    "bind_yaml_file",
    "bind_yaml_stream",
    "decode",
    "encode",
    "load_file",
    "merge_json",
    "merge_json_file",
    "merge_yaml",
    "merge_yaml_file",
    "new_json",
    "new_json_file",
    "new_yaml",
    "new_yaml_file",
    "unbind_json",
    "unbind_json_file",
    "unbind_json_stream",
    "unbind_yaml",
    "unbind_yaml_file",
    "unbind_yaml_stream",
]
