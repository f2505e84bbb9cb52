# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Serialized data adapters for omnibase_databind.

Exports the JSON and YAML text, stream and file wrappers around the binding
engines.
"""

from omnibase_databind.adapters.adapter_data_io import (
    bind_json,
    bind_json_file,
    bind_json_stream,
    bind_yaml,
    bind_yaml_file,
    bind_yaml_stream,
    decode,
    encode,
    load_file,
    merge_json,
    merge_json_file,
    merge_yaml,
    merge_yaml_file,
    new_json,
    new_json_file,
    new_yaml,
    new_yaml_file,
    unbind_json,
    unbind_json_file,
    unbind_json_stream,
    unbind_yaml,
    unbind_yaml_file,
    unbind_yaml_stream,
)

__all__: list[str] = [
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
