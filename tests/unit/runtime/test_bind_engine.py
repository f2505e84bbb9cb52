# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for bind, merge and new.

Covers field rules (required, match, converters, unmarshal hooks), every
field kind, allocation modes, extra capture, embedding and error wrapping.
"""

from __future__ import annotations

from datetime import timedelta
from ipaddress import IPv4Address

import pytest

from omnibase_databind import ModelBindOptions, bind, merge, new
from omnibase_databind.errors import (
    BindingError,
    ConversionError,
    RequiredFieldError,
    StructuralError,
    TypeMismatchError,
    UnknownDynamicTypeError,
    ValueMismatchError,
    find_cause,
    is_required_field_error,
)
from omnibase_databind.runtime.bind_engine import copy_generic
from tests.helpers.databind_records import (
    Address,
    BadExtra,
    Bucket,
    BrokenConverter,
    Employee,
    Endpoint,
    EnumColor,
    EnumLevel,
    HttpAction,
    HttpCheck,
    Listener,
    Metadata,
    Nested,
    NoDefaults,
    Outer,
    Person,
    Pipeline,
    PluginConfig,
    Release,
    Roster,
    Service,
    ShellAction,
    Signing,
    Team,
    Timeouts,
    TwoExtras,
    Untyped,
    UntypedExtra,
    Version,
)

# =============================================================================
# Scalars and records
# =============================================================================


class TestBindBasics:
    """Binding flat records."""

    def test_bind_person(self) -> None:
        person = Person()
        bind(person, {"name": "John Doe", "age": 30, "active": True})
        assert person == Person(name="John Doe", age=30, active=True)

    def test_lenient_scalars(self) -> None:
        person = new(Person, {"name": "Jane", "age": "41", "active": "t"})
        assert person.age == 41
        assert person.active is True

    def test_absent_keys_leave_fields_untouched(self, john_doe: Person) -> None:
        bind(john_doe, {"name": "John Doe"})
        assert john_doe.age == 30
        assert john_doe.active is True

    def test_unknown_keys_are_ignored(self) -> None:
        person = new(Person, {"name": "A", "shoe_size": 44})
        assert person == Person(name="A")

    def test_snake_case_keys(self) -> None:
        service = new(Service, {"created_by": "ops"})
        assert service.audit is not None
        assert service.audit.created_by == "ops"

    def test_renamed_key(self) -> None:
        address = new(Address, {"zip": "12345", "postal_code": "ignored"})
        assert address.postal_code == "12345"

    def test_new_without_constructor_defaults(self) -> None:
        record = new(NoDefaults, {"host": "db"})
        assert record.host == "db"
        assert record.port == 0

    def test_inherited_fields(self) -> None:
        bucket = new(Bucket, {"name": "logs", "versioned": True})
        assert bucket == Bucket(name="logs", region="eu-west-1", versioned=True)

    def test_employee(self) -> None:
        employee = new(
            Employee,
            {
                "name": "John Doe",
                "employee_id": 42,
                "salary": "1234.5",
                "home": {"street": "1 Main St", "city": "Springfield", "zip": "12345"},
                "skills": ["go", "python"],
                "scores": {"math": "90"},
                "labels": {"team": {"size": 3}},
                "shifts": {"1": True, "2": "false"},
                "color": "green",
                "level": 2,
                "password": "hunter2",
                "internal": "ignored",
                "nickname": "JD",
            },
        )
        assert employee.full_name == "John Doe"
        assert employee.employee_id == 42
        assert employee.salary == 1234.5
        assert employee.home == Address("1 Main St", "Springfield", "12345")
        assert employee.office is None
        assert employee.skills == ["go", "python"]
        assert employee.scores == {"math": 90}
        assert employee.labels == {"team": {"size": 3}}
        assert employee.shifts == {1: True, 2: False}
        assert employee.color is EnumColor.GREEN
        assert employee.level is EnumLevel.HIGH
        assert employee.password == "hunter2"
        assert employee.internal == ""
        assert employee.nickname == "JD"


class TestBindKinds:
    def test_durations(self) -> None:
        timeouts = new(Timeouts, {"duration": "30s", "grace": "1m30s"})
        assert timeouts.duration == timedelta(seconds=30)
        assert timeouts.grace == timedelta(seconds=90)

    def test_sequences(self) -> None:
        roster = new(
            Roster,
            {"title": "t", "people": [{"name": "A"}, {"name": "B", "age": 2}], "history": [1, "2"]},
        )
        assert roster.people == [Person(name="A"), Person(name="B", age=2)]
        assert roster.history == (1, 2)

    def test_raw_mapping_is_copied(self) -> None:
        labels = {"nested": {"list": [1, 2]}}
        employee = new(Employee, {"name": "x", "labels": labels})
        assert employee.labels == labels
        assert employee.labels["nested"] is not labels["nested"]
        assert employee.labels["nested"]["list"] is not labels["nested"]["list"]

    def test_any_field_takes_raw_value(self) -> None:
        raw = {"deep": [1, {"x": None}]}
        assert new(Untyped, {"anything": raw}).anything is raw

    def test_reference(self) -> None:
        team = new(Team, {"id": "core", "lead": {"$ref": "alice"}, "members": [{"$ref": "bob"}, {}]})
        assert team.lead.ref == "alice"
        assert not team.lead.is_resolved()
        assert [member.ref for member in team.members] == ["bob", ""]

    def test_reference_ref_must_be_string(self) -> None:
        with pytest.raises(BindingError) as exc_info:
            new(Team, {"lead": {"$ref": 7}})
        assert isinstance(exc_info.value.cause, TypeMismatchError)

    def test_unsupported_annotation_fails_only_when_used(self) -> None:
        assert new(Untyped, {}).pair == (0, "")
        with pytest.raises(BindingError) as exc_info:
            new(Untyped, {"pair": [1, "a"]})
        assert isinstance(exc_info.value.cause, StructuralError)

    @pytest.mark.parametrize(
        ("data", "expected"),
        [
            ({"age": None}, "integer"),
            ({"age": [1]}, "integer"),
            ({"name": 5}, "string"),
        ],
    )
    def test_mismatch_wrapped_with_location(
        self, data: dict[str, object], expected: str
    ) -> None:
        with pytest.raises(BindingError) as exc_info:
            new(Person, {"name": "x", **data})
        mismatch = find_cause(exc_info.value, TypeMismatchError)
        assert mismatch is not None
        assert mismatch.expected == expected
        assert exc_info.value.path == "Person"

    def test_sequence_requires_list(self) -> None:
        with pytest.raises(BindingError) as exc_info:
            new(Roster, {"people": {"name": "A"}})
        assert find_cause(exc_info.value, TypeMismatchError).expected == "array"

    def test_typed_mapping_bad_key(self) -> None:
        with pytest.raises(BindingError) as exc_info:
            new(Employee, {"name": "x", "shifts": {"monday": True}})
        mismatch = find_cause(exc_info.value, TypeMismatchError)
        assert mismatch.path == "Employee.shifts[monday]"

    def test_unsigned_rejects_negative(self) -> None:
        with pytest.raises(BindingError) as exc_info:
            new(Employee, {"name": "x", "employee_id": -1})
        assert find_cause(exc_info.value, TypeMismatchError).expected == "unsigned integer"


# =============================================================================
# Required and match
# =============================================================================


class TestRequiredAndMatch:
    def test_missing_required_top_level(self) -> None:
        with pytest.raises(RequiredFieldError) as exc_info:
            new(Person, {"age": 30})
        assert exc_info.value.path == "Person"
        assert exc_info.value.field == "name"
        assert str(exc_info.value) == "Person.name: required field missing"

    def test_present_null_satisfies_required(self) -> None:
        with pytest.raises(BindingError) as exc_info:
            new(Person, {"name": None})
        assert not is_required_field_error(exc_info.value)

    def test_missing_required_nested_is_wrapped(self) -> None:
        with pytest.raises(BindingError) as exc_info:
            new(Roster, {"people": [{"name": "A"}, {"age": 1}]})
        error = exc_info.value
        assert error.path == "Roster"
        assert error.field == "people"
        assert error.key == "people"
        missing = find_cause(error, RequiredFieldError)
        assert missing is not None
        assert missing.path == "Roster.people[1]"
        assert str(error) == (
            'binding field Roster.people from key "people": '
            "Roster.people[1].name: required field missing"
        )

    def test_required_checked_before_match(self) -> None:
        with pytest.raises(RequiredFieldError):
            new(HttpCheck, {"version": 3})

    def test_match_accepts_rendered_values(self) -> None:
        for version in (2, 2.0, "2"):
            check = new(HttpCheck, {"kind": "http", "version": version, "url": "u"})
            assert check.version == 2

    def test_match_mismatch(self) -> None:
        with pytest.raises(ValueMismatchError) as exc_info:
            new(HttpCheck, {"kind": "ftp"})
        error = exc_info.value
        assert (error.path, error.field) == ("HttpCheck", "kind")
        assert (error.expected, error.actual) == ("http", "ftp")

    def test_match_on_absent_optional_key_is_skipped(self) -> None:
        assert new(HttpCheck, {"kind": "http"}).version == 0

    def test_match_renders_booleans_and_null(self) -> None:
        with pytest.raises(ValueMismatchError) as exc_info:
            new(HttpCheck, {"kind": True})
        assert exc_info.value.actual == "true"
        with pytest.raises(ValueMismatchError) as exc_info:
            new(HttpCheck, {"kind": None})
        assert exc_info.value.actual == "<nil>"


# =============================================================================
# Allocation modes
# =============================================================================


class TestModes:
    def test_bind_allocates_fresh_optional_record(self) -> None:
        outer = Outer(nested=Nested(value="old"))
        original = outer.nested
        bind(outer, {"nested": {}})
        assert outer.nested is not original
        assert outer.nested == Nested(value="")

    def test_merge_reuses_optional_record(self) -> None:
        outer = Outer(nested=Nested(value="old"))
        original = outer.nested
        merge(outer, {"nested": {}})
        assert outer.nested is original
        assert outer.nested.value == "old"

    def test_merge_allocates_missing_optional_record(self) -> None:
        outer = Outer()
        merge(outer, {"nested": {"value": "v"}})
        assert outer.nested == Nested(value="v")

    @pytest.mark.parametrize("operation", [bind, merge])
    def test_null_clears_optional(self, operation: object) -> None:
        outer = Outer(nested=Nested(value="old"))
        operation(outer, {"nested": None})  # type: ignore[operator]
        assert outer.nested is None

    @pytest.mark.parametrize("operation", [bind, merge])
    def test_required_record_bound_in_place(self, operation: object) -> None:
        employee = Employee(full_name="x", home=Address(street="1 Main St"))
        home = employee.home
        operation(employee, {"name": "x", "home": {"city": "Springfield"}})  # type: ignore[operator]
        assert employee.home is home
        assert employee.home == Address(street="1 Main St", city="Springfield")

    def test_merge_is_idempotent(self) -> None:
        data = {"name": "svc", "owner": "ops", "x": 1, "nested": {"k": [1]}}
        service = Service()
        merge(service, data)
        once = (service.name, service.meta, service.extra)
        merge(service, data)
        assert (service.name, service.meta, service.extra) == once


# =============================================================================
# Extra capture and embedding
# =============================================================================


class TestExtraCapture:
    def test_leftover_keys_captured(self) -> None:
        config = new(PluginConfig, {"name": "p", "enabled": True, "timeout": 5, "tags": ["a"]})
        assert config.settings == {"timeout": 5, "tags": ["a"]}

    def test_no_leftovers_leave_field_untouched(self) -> None:
        config = PluginConfig(settings={"kept": True})
        bind(config, {"name": "p"})
        assert config.settings == {"kept": True}

    def test_bind_replaces_previous_capture(self) -> None:
        config = PluginConfig(settings={"old": 1})
        bind(config, {"new": 2})
        assert config.settings == {"new": 2}

    def test_merge_combines_captures(self) -> None:
        config = PluginConfig(settings={"old": 1, "shared": "a"})
        merge(config, {"new": 2, "shared": "b"})
        assert config.settings == {"old": 1, "shared": "b", "new": 2}

    def test_two_extra_fields_rejected(self) -> None:
        with pytest.raises(StructuralError, match="multiple extra fields"):
            new(TwoExtras, {})

    def test_extra_field_must_be_mapping(self) -> None:
        with pytest.raises(TypeMismatchError) as exc_info:
            new(BadExtra, {})
        assert exc_info.value.path == "BadExtra.rest"

    def test_extra_field_rejects_any_annotation(self) -> None:
        with pytest.raises(TypeMismatchError) as exc_info:
            new(UntypedExtra, {"name": "x", "other": 1})
        assert exc_info.value.path == "UntypedExtra.rest"


class TestEmbedding:
    def test_embedded_fields_read_from_parent(self) -> None:
        service = new(
            Service,
            {"name": "api", "owner": "ops", "region": "eu", "created_by": "ci", "tier": 1},
        )
        assert service.meta == Metadata(owner="ops", region="eu")
        assert service.audit is not None
        assert service.audit.created_by == "ci"
        assert service.extra == {"tier": 1}

    def test_optional_embed_without_keys_stays_none(self) -> None:
        service = new(Service, {"name": "api", "owner": "ops"})
        assert service.audit is None
        assert service.extra == {}

    def test_embedded_required_checked_before_invalid_sibling(self) -> None:
        """A bad port declared first does not hide the missing embedded token."""
        with pytest.raises(RequiredFieldError) as exc_info:
            bind(Endpoint(), {"port": "abc"})
        assert exc_info.value.path == "Endpoint"
        assert exc_info.value.field == "token"

    def test_embedded_required_satisfied_by_parent_key(self) -> None:
        endpoint = new(Endpoint, {"port": 443, "token": "t0k"})
        assert endpoint.signing == Signing(token="t0k")

    def test_optional_embed_required_only_once_claimed(self) -> None:
        assert new(Listener, {"port": 80}).tls is None
        with pytest.raises(RequiredFieldError) as exc_info:
            bind(Listener(), {"port": "abc", "key_file": "server.key"})
        assert exc_info.value.field == "cert"


# =============================================================================
# Hooks, converters and polymorphism
# =============================================================================


class TestHooks:
    def test_converter_runs_before_unmarshal_hooks(
        self, bind_options: ModelBindOptions, hook_calls: list[str]
    ) -> None:
        release = new(
            Release,
            {"version": {"v": "1.2"}, "address": "10.0.0.1", "name": "r"},
            bind_options,
        )
        assert release.version == Version(1, 2)
        assert release.address == IPv4Address("10.0.0.1")
        assert hook_calls == ["address", "version"]

    def test_optional_unmarshal(self, bind_options: ModelBindOptions, hook_calls: list[str]) -> None:
        release = new(Release, {"previous": {"v": "0.9"}}, bind_options)
        assert release.previous == Version(0, 9)
        assert new(Release, {"previous": None}, bind_options).previous is None

    def test_unmarshal_requires_mapping(self, hook_calls: list[str]) -> None:
        with pytest.raises(BindingError) as exc_info:
            new(Release, {"version": "1.2"})
        assert find_cause(exc_info.value, TypeMismatchError) is not None
        assert hook_calls == []

    def test_unmarshal_failure(self, hook_calls: list[str]) -> None:
        with pytest.raises(BindingError) as exc_info:
            new(Release, {"version": {"v": "one"}})
        assert isinstance(exc_info.value.cause, ConversionError)

    def test_converter_failure(self) -> None:
        options = ModelBindOptions(converters={IPv4Address: BrokenConverter()})
        with pytest.raises(BindingError) as exc_info:
            new(Release, {"address": "10.0.0.1"}, options)
        error = exc_info.value
        assert error.key == "address"
        assert isinstance(error.cause, ConversionError)
        assert isinstance(error.cause.cause, ValueError)


class TestPolymorphic:
    def test_steps_resolved_by_type(self, bind_options: ModelBindOptions) -> None:
        pipeline = new(
            Pipeline,
            {
                "name": "deploy",
                "steps": [
                    {"type": "http", "url": "https://example.com", "timeout": "5s"},
                    {"type": "shell", "command": "ls", "args": ["-l"]},
                ],
                "on_failure": {"type": "shell", "command": "rollback"},
            },
            bind_options,
        )
        assert pipeline.steps == [
            HttpAction(url="https://example.com", timeout=timedelta(seconds=5)),
            ShellAction(command="ls", args=["-l"]),
        ]
        assert pipeline.on_failure == ShellAction(command="rollback")

    def test_unknown_type_is_wrapped(self, bind_options: ModelBindOptions) -> None:
        with pytest.raises(BindingError) as exc_info:
            new(Pipeline, {"steps": [{"type": "ftp"}]}, bind_options)
        unknown = find_cause(exc_info.value, UnknownDynamicTypeError)
        assert unknown is not None
        assert unknown.path == "Pipeline.steps[0]"

    def test_no_binders_registered(self) -> None:
        with pytest.raises(BindingError) as exc_info:
            new(Pipeline, {"on_failure": {"type": "http"}})
        assert find_cause(exc_info.value, UnknownDynamicTypeError) is not None


# =============================================================================
# Invocation errors and depth
# =============================================================================


class TestInvocation:
    def test_none_target(self) -> None:
        with pytest.raises(StructuralError, match="nil target"):
            bind(None, {})

    def test_none_data(self) -> None:
        with pytest.raises(StructuralError, match="nil data"):
            bind(Person(), None)  # type: ignore[arg-type]

    @pytest.mark.parametrize("target", [Person, "text", {"name": "x"}])
    def test_target_not_a_record_instance(self, target: object) -> None:
        with pytest.raises(TypeMismatchError):
            bind(target, {})

    def test_data_not_a_mapping(self) -> None:
        with pytest.raises(TypeMismatchError) as exc_info:
            bind(Person(), [("name", "x")])  # type: ignore[arg-type]
        assert exc_info.value.expected == "mapping"

    def test_new_requires_dataclass_type(self) -> None:
        with pytest.raises(TypeMismatchError):
            new(dict, {})

    def test_error_context_carries_operation(self) -> None:
        with pytest.raises(RequiredFieldError) as exc_info:
            merge(Person(), {})
        assert exc_info.value.model.context["operation"] == "merge"
        assert exc_info.value.model.context["target_type"] == "Person"


class TestDepthCeiling:
    def test_input_deeper_than_ceiling(self) -> None:
        options = ModelBindOptions(max_depth=2)
        with pytest.raises(StructuralError, match="maximum nesting depth 2 exceeded"):
            new(Outer, {"nested": {"value": "x"}}, options)

    def test_input_within_ceiling(self) -> None:
        options = ModelBindOptions(max_depth=3)
        assert new(Outer, {"nested": {"value": "x"}}, options).nested == Nested("x")

    def test_cyclic_input_rejected(self) -> None:
        data: dict[str, object] = {"name": "loop"}
        data["labels"] = data
        with pytest.raises(StructuralError):
            new(Employee, data)


class TestCopyGeneric:
    def test_tuples_become_lists(self) -> None:
        assert copy_generic({"a": (1, (2,))}) == {"a": [1, [2]]}
