# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Test helpers for omnibase_databind unit tests.

Available Utilities:
    Records:
        - databind_records: Dataclass records covering every field kind,
          tag feature, hook and reference shape exercised by the tests

    Log Helpers:
        - log_helpers: Filters for captured log records
"""
