# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for annotation classification and record descriptors."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Annotated, Any

import pytest

from omnibase_databind import ProtocolDynamic
from omnibase_databind.enums import EnumFieldKind
from omnibase_databind.errors import StructuralError
from omnibase_databind.runtime.field_introspector import (
    classify_annotation,
    describe_record,
    instantiate_record,
    is_dynamic_type,
    type_name_of,
    zero_value,
)
from omnibase_databind.types import Pointer, UInt
from tests.helpers.databind_records import (
    Bucket,
    Employee,
    EnumColor,
    HttpAction,
    Metadata,
    NoDefaults,
    Person,
    ProtocolAction,
    Service,
    User,
)


@dataclass
class WithPrivate:
    visible: str = ""
    _cache: dict[str, Any] = field(default_factory=dict)


@dataclass
class SelfEmbedding:
    name: str = ""
    inner: SelfEmbedding | None = field(default=None, metadata={"df": "+embed"})


@dataclass
class Dangling:
    ref: UndefinedThing | None = None  # type: ignore[name-defined]  # noqa: F821


class TestClassifyAnnotation:
    @pytest.mark.parametrize(
        ("annotation", "kind"),
        [
            (str, EnumFieldKind.PRIMITIVE),
            (bool, EnumFieldKind.PRIMITIVE),
            (float, EnumFieldKind.PRIMITIVE),
            (UInt, EnumFieldKind.PRIMITIVE),
            (EnumColor, EnumFieldKind.PRIMITIVE),
            (Annotated[int, "port"], EnumFieldKind.PRIMITIVE),
            (timedelta, EnumFieldKind.DURATION),
            (Person, EnumFieldKind.RECORD),
            (Person | None, EnumFieldKind.OPTIONAL),
            (list[int], EnumFieldKind.SEQUENCE),
            (tuple[int, ...], EnumFieldKind.SEQUENCE),
            (dict, EnumFieldKind.RAW_MAPPING),
            (dict[str, Any], EnumFieldKind.RAW_MAPPING),
            (dict[int, bool], EnumFieldKind.TYPED_MAPPING),
            (ProtocolDynamic, EnumFieldKind.DYNAMIC),
            (ProtocolAction, EnumFieldKind.DYNAMIC),
            (Pointer[User], EnumFieldKind.REFERENCE),
            (Any, EnumFieldKind.ANY),
            (object, EnumFieldKind.ANY),
            (int | str, EnumFieldKind.UNSUPPORTED),
            (tuple[int, str], EnumFieldKind.UNSUPPORTED),
            (dict[Person, int], EnumFieldKind.UNSUPPORTED),
            (bytes, EnumFieldKind.UNSUPPORTED),
        ],
    )
    def test_kind(self, annotation: Any, kind: EnumFieldKind) -> None:
        assert classify_annotation(annotation).kind == kind

    def test_unsigned(self) -> None:
        shape = classify_annotation(UInt)
        assert shape.unsigned
        assert shape.primitive is int
        assert not classify_annotation(int).unsigned

    def test_enum_primitive(self) -> None:
        shape = classify_annotation(EnumColor)
        assert shape.is_enum
        assert shape.primitive is str

    def test_sequence_container(self) -> None:
        assert classify_annotation(list[int]).container is list
        assert classify_annotation(tuple[int, ...]).container is tuple

    @pytest.mark.parametrize(
        ("annotation", "target"),
        [(Pointer[User], User), (Pointer[User | None], User), (Pointer, None)],
    )
    def test_reference_target(self, annotation: Any, target: type | None) -> None:
        assert classify_annotation(annotation).target is target

    def test_dynamic_detection(self) -> None:
        assert is_dynamic_type(ProtocolAction)
        assert not is_dynamic_type(HttpAction)
        assert not is_dynamic_type(str)


class TestDescribeRecord:
    def test_external_names_and_skips(self) -> None:
        names = [field.external_name for field in describe_record(Employee).fields]
        assert names == [
            "name",
            "employee_id",
            "salary",
            "home",
            "office",
            "skills",
            "scores",
            "labels",
            "shifts",
            "color",
            "level",
            "password",
            "nickname",
        ]

    def test_private_fields_invisible(self) -> None:
        names = [field.attr_name for field in describe_record(WithPrivate).fields]
        assert names == ["visible"]

    def test_inherited_field_order(self) -> None:
        names = [field.attr_name for field in describe_record(Bucket).fields]
        assert names == ["name", "region", "versioned"]

    def test_embedded_and_extra(self) -> None:
        descriptor = describe_record(Service)
        assert [field.attr_name for field in descriptor.fields] == ["name", "meta", "audit"]
        assert descriptor.fields[1].embedded_type is Metadata
        assert descriptor.extra_field is not None
        assert descriptor.extra_field.attr_name == "extra"
        assert descriptor.consumed_keys == {"name", "owner", "region", "created_by"}

    def test_descriptor_is_cached(self) -> None:
        assert describe_record(Person) is describe_record(Person)

    def test_not_a_dataclass(self) -> None:
        with pytest.raises(StructuralError):
            describe_record(int)

    def test_self_embedding(self) -> None:
        with pytest.raises(StructuralError, match="embeds itself"):
            describe_record(SelfEmbedding)

    def test_unresolvable_annotation(self) -> None:
        with pytest.raises(StructuralError, match="cannot resolve annotation"):
            describe_record(Dangling)


class TestInstantiation:
    def test_default_constructor(self) -> None:
        assert instantiate_record(Person) == Person()

    def test_required_constructor_arguments_get_zero_values(self) -> None:
        record = instantiate_record(NoDefaults)
        assert (record.host, record.port) == ("", 0)

    @pytest.mark.parametrize(
        ("annotation", "expected"),
        [
            (str, ""),
            (int, 0),
            (bool, False),
            (timedelta, timedelta(0)),
            (list[str], []),
            (tuple[int, ...], ()),
            (dict[str, int], {}),
            (EnumColor, None),
            (Person | None, None),
            (Pointer[User], Pointer()),
            (Person, Person()),
        ],
    )
    def test_zero_value(self, annotation: Any, expected: object) -> None:
        assert zero_value(classify_annotation(annotation)) == expected

    def test_type_name_of(self) -> None:
        assert type_name_of(None) == "None"
        assert type_name_of([1]) == "list"
