# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Field annotation parsing.

Record fields carry their binding options as a comma-separated string under
the ``df`` key of ``dataclasses.field`` metadata::

    @dataclass
    class Service:
        name: str = field(default="", metadata={"df": "service_name,required"})
        token: str = field(default="", metadata={"df": "+secret,omitempty"})
        kind: str = field(default="", metadata={"df": 'kind,match="http"'})
        cache: dict = field(default_factory=dict, metadata={"df": "-"})

Grammar:
    - ``-`` alone skips the field in every engine
    - the first token, unless it is a flag keyword, overrides the external key
    - flag keywords, with or without a leading ``+``: ``required``,
      ``secret``, ``omitempty``, ``extra``, ``embed``, ``match=<literal>``
    - ``match="v"`` strips the quotes, ``match=v`` is taken as-is; a value
      with unbalanced quotes or an empty value is ignored
    - unrecognized tokens are ignored
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from omnibase_databind.models.model_field_tag import ModelFieldTag

logger = logging.getLogger(__name__)

# Metadata key holding the annotation string
TAG_METADATA_KEY = "df"

_FLAG_KEYWORDS = frozenset({"required", "secret", "omitempty", "extra", "embed"})
_MATCH_PREFIX = "match="

_DEFAULT_TAG = ModelFieldTag()
_SKIP_TAG = ModelFieldTag(skip=True)


def _is_flag(token: str) -> bool:
    bare = token[1:] if token.startswith("+") else token
    return bare in _FLAG_KEYWORDS or bare.startswith(_MATCH_PREFIX) or bare == "match"


def _parse_match(literal: str, raw: str) -> str | None:
    """Return the match literal, or None when malformed."""
    if len(literal) >= 2 and literal[0] == '"' and literal[-1] == '"':
        return literal[1:-1]
    if literal and '"' not in literal:
        return literal
    logger.warning(
        "Ignoring malformed match constraint in field tag",
        extra={"tag": raw},
    )
    return None


def parse_field_tag(raw: str | None) -> ModelFieldTag:
    """Parse a ``df`` annotation string.

    Args:
        raw: The annotation string, or None when the field has none.

    Returns:
        The parsed tag. Missing or empty input yields the defaults.

    Example:
        >>> tag = parse_field_tag('kind,required,match="http"')
        >>> (tag.name, tag.required, tag.match_value)
        ('kind', True, 'http')
    """
    if raw is None:
        return _DEFAULT_TAG
    stripped = raw.strip()
    if stripped == "-":
        return _SKIP_TAG
    if not stripped:
        return _DEFAULT_TAG

    values: dict[str, object] = {}
    for index, part in enumerate(stripped.split(",")):
        token = part.strip()
        if not token:
            continue

        if index == 0 and not _is_flag(token):
            values["name"] = token
            continue

        bare = token[1:] if token.startswith("+") else token
        if bare.startswith(_MATCH_PREFIX):
            literal = _parse_match(bare[len(_MATCH_PREFIX) :], raw)
            if literal is not None:
                values["has_match"] = True
                values["match_value"] = literal
        elif bare == "match":
            logger.warning(
                "Ignoring match constraint without a value in field tag",
                extra={"tag": raw},
            )
        elif bare == "omitempty":
            values["omit_empty"] = True
        elif bare in _FLAG_KEYWORDS:
            values[bare] = True

    return ModelFieldTag(**values)


def field_tag_of(metadata: Mapping[str, object]) -> ModelFieldTag:
    """Parse the annotation stored in a dataclass field's metadata."""
    raw = metadata.get(TAG_METADATA_KEY)
    if raw is not None and not isinstance(raw, str):
        raw = str(raw)
    return parse_field_tag(raw)


__all__ = ["TAG_METADATA_KEY", "field_tag_of", "parse_field_tag"]
