"""Tests for ``tabula.model.resolver`` — column discovery."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from tabula.core.errors import ModelError
from tabula.model import Single
from tabula.model.resolver import column_names, resolve_columns, resolve_identity
from tests._support.models import (
    Account,
    ExtendedAccount,
    NotADataclass,
    Note,
    Plain,
    Profile,
    TwoKeys,
)


class TestResolveColumns:
    def test_declaration_order(self):
        names = [c.field_name for c in resolve_columns(Profile)]
        assert names == [
            "id",
            "handle",
            "bio",
            "age",
            "score",
            "ratio",
            "verified",
            "joined",
            "birthday",
            "status",
            "nickname",
            "legacy",
        ]

    def test_fields_without_column_metadata_are_skipped(self):
        names = {c.field_name for c in resolve_columns(Profile)}
        assert "cache" not in names
        assert "scratch" not in names

    def test_model_without_columns(self):
        assert resolve_columns(Plain) == ()

    def test_column_name_override(self):
        handle = next(c for c in resolve_columns(Profile) if c.field_name == "handle")
        assert handle.name == "user_handle"

    def test_column_name_defaults_to_field_name(self):
        bio = next(c for c in resolve_columns(Profile) if c.field_name == "bio")
        assert bio.name == "bio"

    def test_optional_and_annotated_are_unwrapped(self):
        types = {c.field_name: c.python_type for c in resolve_columns(Profile)}
        assert types["id"] is int
        assert types["handle"] is str
        assert types["score"] is float
        assert types["ratio"] is Single
        assert types["verified"] is bool
        assert types["joined"] is datetime
        assert types["birthday"] is date
        assert types["nickname"] is str

    def test_owner_is_model_name(self):
        assert {c.owner for c in resolve_columns(Account)} == {"Account"}

    def test_only_fields_declared_on_the_class(self):
        assert [c.field_name for c in resolve_columns(ExtendedAccount)] == ["email"]

    def test_not_a_dataclass(self):
        with pytest.raises(ModelError, match="NotADataclass is not a dataclass"):
            resolve_columns(NotADataclass)

    def test_two_identity_fields_rejected(self):
        with pytest.raises(ModelError) as exc_info:
            resolve_columns(TwoKeys)
        assert "first, second" in str(exc_info.value)
        assert exc_info.value.context.model == "TwoKeys"

    def test_cached_per_model(self):
        assert resolve_columns(Account) is resolve_columns(Account)


class TestResolveIdentity:
    def test_identity_field(self):
        ident = resolve_identity(Account)
        assert ident is not None
        assert ident.field_name == "id"
        assert ident.identity is True

    def test_no_identity_field(self):
        assert resolve_identity(Note) is None

    def test_ambiguous_identity_fails_fast(self):
        with pytest.raises(ModelError):
            resolve_identity(TwoKeys)

    def test_first_match_when_not_strict(self):
        ident = resolve_identity(TwoKeys, strict=False)
        assert ident is not None
        assert ident.field_name == "first"


class TestColumnNames:
    def test_includes_identity(self):
        assert column_names(Account) == ["id", "name", "active"]

    def test_uses_overrides(self):
        names = column_names(Profile)
        assert "user_handle" in names
        assert "joined_at" in names
        assert "handle" not in names
