"""Unit tests for DDL statement generation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pytest

from horm.domain.errors import UnsupportedFieldTypeError
from horm.domain.services import (
    FIELD_COLUMN_TYPES,
    KIND_TYPES,
    create_table_statement,
    drop_table_statement,
    quote_identifier,
)
from horm.domain.value_objects import classify_column_type


@dataclass
class User:
    name: str
    age: int
    height: float

    @classmethod
    def table_name(cls) -> str:
        return "user"


@dataclass
class Flag:
    __tablename__ = "flags"

    enabled: bool
    note: Optional[str] = None


@dataclass
class Blob:
    __tablename__ = "blobs"

    data: bytes


@dataclass
class Empty:
    __tablename__ = "empty"


@pytest.mark.unit
class TestDropTableStatement:
    """Tests for drop_table_statement."""

    def test_from_name(self) -> None:
        assert drop_table_statement("user") == 'DROP TABLE IF EXISTS "USER"'

    def test_from_model(self) -> None:
        assert drop_table_statement(User) == 'DROP TABLE IF EXISTS "USER"'
        assert drop_table_statement(User("a", 1, 1.0)) == 'DROP TABLE IF EXISTS "USER"'

    def test_quotes_are_escaped(self) -> None:
        assert quote_identifier('we"ird') == '"we""ird"'


@pytest.mark.unit
class TestCreateTableStatement:
    """Tests for create_table_statement."""

    def test_columns_follow_fields(self) -> None:
        assert create_table_statement(User) == (
            'CREATE TABLE "USER" ("NAME" TEXT, "AGE" INTEGER, "HEIGHT" FLOAT)'
        )

    def test_optional_field(self) -> None:
        assert create_table_statement(Flag) == (
            'CREATE TABLE "FLAGS" ("ENABLED" BOOLEAN, "NOTE" TEXT)'
        )

    def test_unsupported_field_type(self) -> None:
        with pytest.raises(UnsupportedFieldTypeError, match="'data'"):
            create_table_statement(Blob)

    def test_no_fields(self) -> None:
        with pytest.raises(UnsupportedFieldTypeError):
            create_table_statement(Empty)

    @pytest.mark.parametrize("field_type", list(FIELD_COLUMN_TYPES))
    def test_column_types_classify_back(self, field_type: type) -> None:
        """Every emitted column type reads back into its field type."""
        kind = classify_column_type(FIELD_COLUMN_TYPES[field_type])

        assert KIND_TYPES[kind] is field_type
