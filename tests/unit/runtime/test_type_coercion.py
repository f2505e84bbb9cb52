# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for scalar coercion."""

from __future__ import annotations

from datetime import timedelta
from typing import NewType

import pytest

from omnibase_databind.errors import (
    ConversionError,
    StructuralError,
    TypeMismatchError,
)
from omnibase_databind.runtime import TypeCoercion
from omnibase_databind.types import UInt
from tests.helpers.databind_records import EnumColor, EnumLevel

Port = NewType("Port", int)


class Hostname(str):
    """Named string primitive."""


@pytest.fixture
def coercion() -> TypeCoercion:
    return TypeCoercion()


class TestCoerceBool:
    @pytest.mark.parametrize("raw", [True, "1", "t", "T", "TRUE", "true", "True", " true "])
    def test_true_spellings(self, coercion: TypeCoercion, raw: object) -> None:
        assert coercion.to_typed(raw, bool, "R.flag") is True

    @pytest.mark.parametrize("raw", [False, "0", "f", "F", "FALSE", "false", "False"])
    def test_false_spellings(self, coercion: TypeCoercion, raw: object) -> None:
        assert coercion.to_typed(raw, bool, "R.flag") is False

    @pytest.mark.parametrize("raw", ["yes", "tRuE", "", 1, 0.0, None, []])
    def test_rejected(self, coercion: TypeCoercion, raw: object) -> None:
        with pytest.raises(TypeMismatchError) as exc_info:
            coercion.to_typed(raw, bool, "R.flag")
        assert exc_info.value.expected == "bool"
        assert exc_info.value.path == "R.flag"


class TestCoerceInt:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (42, 42),
            (42.9, 42),
            (-42.9, -42),
            ("42", 42),
            (" -7 ", -7),
            ("+3", 3),
            ("3.99", 3),
            ("1e3", 1000),
        ],
    )
    def test_accepted(self, coercion: TypeCoercion, raw: object, expected: int) -> None:
        value = coercion.to_typed(raw, int, "R.count")
        assert value == expected
        assert type(value) is int

    @pytest.mark.parametrize(
        "raw", [True, False, "abc", "1_000", "", float("nan"), float("inf"), "inf", None]
    )
    def test_rejected(self, coercion: TypeCoercion, raw: object) -> None:
        with pytest.raises(TypeMismatchError) as exc_info:
            coercion.to_typed(raw, int, "R.count")
        assert exc_info.value.expected == "integer"

    def test_unsigned_rejects_negative(self, coercion: TypeCoercion) -> None:
        assert coercion.to_typed("5", UInt, "R.id") == 5
        with pytest.raises(TypeMismatchError) as exc_info:
            coercion.to_typed(-1, UInt, "R.id")
        assert exc_info.value.expected == "unsigned integer"

    @pytest.mark.parametrize("raw", [-0.5, "-0.5", -1.9, "-1e-3"])
    def test_unsigned_rejects_negative_fractions(
        self, coercion: TypeCoercion, raw: object
    ) -> None:
        """Negative fractions fail even though they truncate to zero."""
        with pytest.raises(TypeMismatchError) as exc_info:
            coercion.to_typed(raw, UInt, "R.id")
        assert exc_info.value.expected == "unsigned integer"

    @pytest.mark.parametrize(("raw", "expected"), [(0.5, 0), ("2.7", 2), (-0.0, 0)])
    def test_unsigned_truncates_non_negative_fractions(
        self, coercion: TypeCoercion, raw: object, expected: int
    ) -> None:
        assert coercion.to_typed(raw, UInt, "R.id") == expected

    def test_newtype_keeps_plain_value(self, coercion: TypeCoercion) -> None:
        assert coercion.to_typed("8080", Port, "R.port") == 8080


class TestCoerceFloatAndString:
    @pytest.mark.parametrize(("raw", "expected"), [(1, 1.0), (2.5, 2.5), (" 2.5 ", 2.5), ("1e-3", 0.001)])
    def test_float_accepted(
        self, coercion: TypeCoercion, raw: object, expected: float
    ) -> None:
        value = coercion.to_typed(raw, float, "R.ratio")
        assert value == expected
        assert type(value) is float

    @pytest.mark.parametrize("raw", [True, "x", "1_0", None])
    def test_float_rejected(self, coercion: TypeCoercion, raw: object) -> None:
        with pytest.raises(TypeMismatchError):
            coercion.to_typed(raw, float, "R.ratio")

    def test_string_only_from_string(self, coercion: TypeCoercion) -> None:
        assert coercion.to_typed("x", str, "R.name") == "x"
        with pytest.raises(TypeMismatchError) as exc_info:
            coercion.to_typed(5, str, "R.name")
        assert str(exc_info.value) == "R.name: expected string, got int"

    def test_named_string_is_rewrapped(self, coercion: TypeCoercion) -> None:
        value = coercion.to_typed("db.local", Hostname, "R.host")
        assert isinstance(value, Hostname)
        assert value == "db.local"


class TestCoerceEnum:
    def test_by_value(self, coercion: TypeCoercion) -> None:
        assert coercion.to_typed("red", EnumColor, "R.color") is EnumColor.RED
        assert coercion.to_typed("2", EnumLevel, "R.level") is EnumLevel.HIGH

    def test_unknown_member(self, coercion: TypeCoercion) -> None:
        with pytest.raises(TypeMismatchError) as exc_info:
            coercion.to_typed("blue", EnumColor, "R.color")
        assert "red" in exc_info.value.expected


class TestCoerceDuration:
    def test_literal(self, coercion: TypeCoercion) -> None:
        assert coercion.to_typed("30s", timedelta, "R.timeout") == timedelta(seconds=30)

    def test_number_is_nanoseconds(self, coercion: TypeCoercion) -> None:
        assert coercion.to_typed(1_500_000, timedelta, "R.timeout") == timedelta(
            milliseconds=1.5
        )
        assert coercion.to_typed(2e9, timedelta, "R.timeout") == timedelta(seconds=2)

    def test_malformed_literal(self, coercion: TypeCoercion) -> None:
        with pytest.raises(ConversionError) as exc_info:
            coercion.to_typed("5 minutes", timedelta, "R.timeout")
        assert exc_info.value.path == "R.timeout"
        assert isinstance(exc_info.value.cause, ValueError)

    @pytest.mark.parametrize("raw", [True, None, [1]])
    def test_wrong_kind(self, coercion: TypeCoercion, raw: object) -> None:
        with pytest.raises(TypeMismatchError):
            coercion.to_typed(raw, timedelta, "R.timeout")


class TestNonScalarTarget:
    def test_record_target_is_structural(self, coercion: TypeCoercion) -> None:
        with pytest.raises(StructuralError):
            coercion.to_typed({}, dict[str, int], "R.map")


class TestToGeneric:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (EnumColor.GREEN, "green"),
            (EnumLevel.HIGH, 2),
            (timedelta(seconds=90), "1m30s"),
            (Hostname("h"), "h"),
            (True, True),
            (3, 3),
            (2.5, 2.5),
            (None, None),
        ],
    )
    def test_scalars(self, coercion: TypeCoercion, value: object, expected: object) -> None:
        generic = coercion.to_generic(value)
        assert generic == expected
        assert type(generic) is type(expected)

    def test_key_to_text(self, coercion: TypeCoercion) -> None:
        assert coercion.key_to_text(3) == "3"
        assert coercion.key_to_text(True) == "true"
        assert coercion.key_to_text(EnumColor.RED) == "red"


class TestRenderMatch:
    @pytest.mark.parametrize(
        ("raw", "text"),
        [
            (True, "true"),
            (False, "false"),
            (2, "2"),
            (2.0, "2"),
            (2.5, "2.5"),
            (None, "<nil>"),
            ("http", "http"),
        ],
    )
    def test_rendering(self, raw: object, text: str) -> None:
        assert TypeCoercion.render_match(raw) == text
