"""Tests for ``tabula.model.mapper`` — schema synthesis and row mapping."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

import pytest

from tabula.core.errors import (
    InstantiationError,
    MappingError,
    ModelError,
    UnsupportedTypeError,
)
from tabula.model import column, identity
from tabula.model.mapper import (
    apply_generated_key,
    build_create_table_spec,
    from_row,
    synthesize_column_type,
    to_row,
)
from tabula.model.resolver import resolve_columns
from tests._support.models import (
    Account,
    FrozenAccount,
    NeedsArgs,
    Note,
    Plain,
    Profile,
    SlottedNote,
    Tagged,
    TwoKeys,
)


def _column(model: type, field_name: str):
    return next(c for c in resolve_columns(model) if c.field_name == field_name)


@dataclass
class Quoted:
    motto: str | None = column(server_default="it's")
    code: str | None = column(server_default="42")
    rate: float | None = column(server_default=1.5)


class TestSynthesizeColumnType:
    def test_varchar_defaults_to_255(self):
        assert synthesize_column_type(_column(Account, "name")) == "VARCHAR(255)"

    def test_varchar_length(self):
        assert synthesize_column_type(_column(Profile, "nickname")) == "VARCHAR(20)"

    def test_text(self):
        assert synthesize_column_type(_column(Profile, "bio")) == "TEXT"

    def test_scalar_types(self):
        assert synthesize_column_type(_column(Profile, "score")) == "DOUBLE"
        assert synthesize_column_type(_column(Profile, "ratio")) == "FLOAT"
        assert synthesize_column_type(_column(Profile, "joined")) == "DATETIME"
        assert synthesize_column_type(_column(Profile, "birthday")) == "DATETIME"
        assert synthesize_column_type(_column(Account, "active")) == "TINYINT"

    def test_identity(self):
        assert synthesize_column_type(_column(Account, "id")) == "INT AUTO_INCREMENT NOT NULL PRIMARY KEY"

    def test_not_null_unique(self):
        assert synthesize_column_type(_column(Profile, "handle")) == "VARCHAR(50) NOT NULL UNIQUE"

    def test_numeric_default_is_bare(self):
        assert synthesize_column_type(_column(Profile, "age")) == "INT DEFAULT 18"
        assert synthesize_column_type(_column(Quoted, "rate")) == "DOUBLE DEFAULT 1.5"

    def test_integer_string_default_is_bare(self):
        assert synthesize_column_type(_column(Quoted, "code")) == "VARCHAR(255) DEFAULT 42"

    def test_string_default_is_quoted(self):
        assert synthesize_column_type(_column(Profile, "status")) == "VARCHAR(255) DEFAULT 'new'"

    def test_embedded_quote_is_doubled(self):
        assert synthesize_column_type(_column(Quoted, "motto")) == "VARCHAR(255) DEFAULT 'it''s'"

    def test_bool_default(self):
        assert synthesize_column_type(_column(Profile, "verified")) == "TINYINT DEFAULT 0"

    def test_constraint_token_order(self):
        spec = synthesize_column_type(_column(Tagged, "id"))
        assert spec.endswith("AUTO_INCREMENT NOT NULL PRIMARY KEY UNIQUE DEFAULT 'x'")
        assert spec == "INT AUTO_INCREMENT NOT NULL PRIMARY KEY UNIQUE DEFAULT 'x'"

    def test_sql_type_override_short_circuits(self):
        assert synthesize_column_type(_column(Profile, "legacy")) == "CHAR(3) NOT NULL"

    def test_unsupported_type(self):
        with pytest.raises(UnsupportedTypeError) as exc_info:
            synthesize_column_type(_column(Tagged, "tags"))
        error = exc_info.value
        assert "list is not supported" in str(error)
        assert error.field_type is list
        assert error.context.model == "Tagged"
        assert error.context.field == "tags"

    def test_unsupported_type_is_a_model_error(self):
        with pytest.raises(ModelError):
            synthesize_column_type(_column(Tagged, "tags"))


class TestBuildCreateTableSpec:
    def test_no_columns(self):
        assert build_create_table_spec(Plain) == {}

    def test_ordered_spec(self):
        spec = build_create_table_spec(Account)
        assert list(spec.items()) == [
            ("id", "INT AUTO_INCREMENT NOT NULL PRIMARY KEY"),
            ("name", "VARCHAR(255)"),
            ("active", "TINYINT"),
        ]

    def test_uses_column_names(self):
        spec = build_create_table_spec(Profile)
        assert spec["user_handle"] == "VARCHAR(50) NOT NULL UNIQUE"
        assert spec["joined_at"] == "DATETIME"
        assert len(spec) == 12

    def test_unsupported_type_yields_nothing(self):
        spec = None
        with pytest.raises(UnsupportedTypeError):
            spec = build_create_table_spec(Tagged)
        assert spec is None

    def test_ambiguous_identity(self):
        with pytest.raises(ModelError):
            build_create_table_spec(TwoKeys)


class TestToRow:
    def test_identity_excluded(self):
        row = to_row(Account(id=0, name="Ann", active=True))
        assert row == {"name": "Ann", "active": True}
        assert "id" not in row

    def test_identity_excluded_when_set(self):
        assert "id" not in to_row(Account(id=99, name="Bob", active=False))

    def test_column_order_and_names(self):
        row = to_row(Profile(handle="ann", joined=datetime(2024, 1, 2, 3, 4, 5)))
        assert list(row)[:2] == ["user_handle", "bio"]
        assert row["joined_at"] == datetime(2024, 1, 2, 3, 4, 5)
        assert "cache" not in row

    def test_unset_fields_are_none(self):
        assert to_row(Note()) == {"body": None, "pinned": False}

    def test_read_failure_is_mapping_error(self):
        note = SlottedNote()
        del note.body
        with pytest.raises(MappingError) as exc_info:
            to_row(note)
        assert exc_info.value.context.field == "body"
        assert isinstance(exc_info.value.cause, AttributeError)


class TestFromRow:
    def test_round_trip_row(self):
        account = from_row(Account, {"id": 7, "name": "Ann", "active": 1})
        account = apply_generated_key(account, None)
        assert account == Account(id=7, name="Ann", active=True)

    @pytest.mark.parametrize("value", [1, True, "true"])
    def test_truthy_booleans(self, value):
        assert from_row(Account, {"active": value}).active is True

    @pytest.mark.parametrize("value", [0, False, "false", None, "yes", "TRUE", 2, 1.0])
    def test_falsy_booleans(self, value):
        assert from_row(Account, {"active": value}).active is False

    def test_missing_key_keeps_default(self):
        account = from_row(Account, {"name": "Ann"})
        assert account.id is None
        assert account.active is None

    def test_missing_boolean_keeps_model_default(self):
        assert from_row(Note, {}).pinned is False

    def test_null_keeps_default(self):
        profile = from_row(Profile, {"user_handle": None, "age": None})
        assert profile.handle is None
        assert profile.age is None

    def test_column_name_lookup(self):
        profile = from_row(Profile, {"user_handle": "ann", "handle": "ignored"})
        assert profile.handle == "ann"

    def test_iso_strings_become_datetimes(self):
        profile = from_row(
            Profile,
            {"joined_at": "2024-01-02 03:04:05", "birthday": "1990-05-06"},
        )
        assert profile.joined == datetime(2024, 1, 2, 3, 4, 5)
        assert profile.birthday == date(1990, 5, 6)

    def test_datetime_narrowed_to_date(self):
        profile = from_row(Profile, {"birthday": datetime(1990, 5, 6, 0, 0)})
        assert profile.birthday == date(1990, 5, 6)
        assert not isinstance(profile.birthday, datetime)

    def test_native_datetime_kept(self):
        joined = datetime(2024, 1, 2, 3, 4, 5)
        assert from_row(Profile, {"joined_at": joined}).joined == joined

    def test_bad_datetime_string(self):
        with pytest.raises(MappingError) as exc_info:
            from_row(Profile, {"joined_at": "not a date"})
        assert exc_info.value.context.column == "joined_at"
        assert exc_info.value.value == "not a date"

    def test_returns_new_instances(self):
        first = from_row(Account, {"name": "Ann"})
        second = from_row(Account, {"name": "Ann"})
        assert first == second
        assert first is not second

    def test_instantiation_error(self):
        with pytest.raises(InstantiationError) as exc_info:
            from_row(NeedsArgs, {"name": "x"})
        assert 'NeedsArgs()' in str(exc_info.value)
        assert isinstance(exc_info.value.cause, ValueError)

    def test_required_field_is_instantiation_error(self):
        @dataclass
        class Required:
            name: str

        with pytest.raises(InstantiationError):
            from_row(Required, {})

    def test_frozen_model_is_mapping_error(self):
        with pytest.raises(MappingError):
            from_row(FrozenAccount, {"name": "Ann"})


class TestApplyGeneratedKey:
    def test_sets_identity(self):
        account = Account(name="Ann")
        result = apply_generated_key(account, 42)
        assert result is account
        assert account.id == 42

    def test_none_key_is_noop(self):
        account = Account(id=3)
        assert apply_generated_key(account, None).id == 3

    def test_model_without_identity_is_noop(self):
        note = Note(body="hi")
        assert apply_generated_key(note, 42) is note
        assert note == Note(body="hi")

    def test_frozen_model(self):
        with pytest.raises(MappingError) as exc_info:
            apply_generated_key(FrozenAccount(), 42)
        assert exc_info.value.value == 42


class TestLocalModels:
    def test_identity_with_column_override(self):
        @dataclass
        class Event:
            key: int | None = identity(name="event_id")
            title: str | None = column(length=80)

        assert build_create_table_spec(Event) == {
            "event_id": "INT AUTO_INCREMENT NOT NULL PRIMARY KEY",
            "title": "VARCHAR(80)",
        }
        event = apply_generated_key(Event(title="launch"), 5)
        assert event.key == 5
        assert to_row(event) == {"title": "launch"}
