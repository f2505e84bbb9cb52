# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Identifier to snake_case conversion for external key derivation.

Acronym policy:
    An uppercase letter (other than the first character) is preceded by an
    underscore when the previous character is lowercase or a digit, or when
    the previous character is uppercase and the next one is lowercase (the
    last letter of an acronym starts a new word). Everything is lowered.

        HTMLParser      -> html_parser
        UserID          -> user_id
        XMLHttpRequest  -> xml_http_request
        ABC             -> abc
        already_snake   -> already_snake

    The output contains no uppercase letters, so the conversion is idempotent.
"""

from __future__ import annotations

from functools import lru_cache


@lru_cache(maxsize=1024)
def to_snake_case(name: str) -> str:
    """Convert a CamelCase or mixedCase identifier to snake_case.

    Args:
        name: Identifier to convert.

    Returns:
        The snake_case form. Empty input returns an empty string.

    Example:
        >>> to_snake_case("HTMLParser")
        'html_parser'
        >>> to_snake_case("UserID")
        'user_id'
    """
    if not name:
        return ""

    out: list[str] = []
    last = len(name) - 1
    for i, char in enumerate(name):
        if char.isupper():
            if i > 0:
                prev = name[i - 1]
                next_lower = i < last and name[i + 1].islower()
                if prev.islower() or prev.isdigit() or (prev.isupper() and next_lower):
                    out.append("_")
            out.append(char.lower())
        else:
            out.append(char)
    return "".join(out)


__all__ = ["to_snake_case"]
