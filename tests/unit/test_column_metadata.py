"""Unit tests for SQLite column metadata resolution."""

from __future__ import annotations

import sqlite3
from typing import Generator

import pytest

from horm.adapters.outbound.sqlite_column_metadata import (
    SqliteColumnMetadata,
    neutralize_parameters,
)
from horm.ports.outbound import align_declared_types


@pytest.fixture
def connection() -> Generator[sqlite3.Connection, None, None]:
    """In-memory connection with a USER table."""
    conn = sqlite3.connect(":memory:", isolation_level=None)
    conn.execute("CREATE TABLE USER (NAME VARCHAR(255), AGE INT(20), HEIGHT FLOAT)")
    conn.execute("CREATE TABLE PET (OWNER VARCHAR(255), NAME TEXT, GOOD BOOLEAN)")
    yield conn
    conn.close()


@pytest.mark.unit
class TestNeutralizeParameters:
    """Tests for neutralize_parameters."""

    @pytest.mark.parametrize(
        "statement,expected",
        [
            ("SELECT * FROM T WHERE A = ?", "SELECT * FROM T WHERE A = NULL"),
            ("SELECT ?1, ?2", "SELECT NULL, NULL"),
            ("SELECT :name, @v, $x", "SELECT NULL, NULL, NULL"),
            ("SELECT '?' , \"a?\" FROM T", "SELECT '?' , \"a?\" FROM T"),
            ("SELECT 'it''s ?' WHERE A = ?", "SELECT 'it''s ?' WHERE A = NULL"),
            ("SELECT 1 -- why?\n, ?", "SELECT 1 -- why?\n, NULL"),
            ("SELECT /* :x */ ?", "SELECT /* :x */ NULL"),
        ],
    )
    def test_markers_outside_literals(self, statement: str, expected: str) -> None:
        assert neutralize_parameters(statement) == expected


@pytest.mark.unit
class TestSqliteColumnMetadata:
    """Tests for SqliteColumnMetadata.describe."""

    def test_table_columns(self, connection: sqlite3.Connection) -> None:
        described = SqliteColumnMetadata().describe(connection, "SELECT * FROM USER")

        assert described == [
            ("NAME", "VARCHAR(255)"),
            ("AGE", "INT(20)"),
            ("HEIGHT", "FLOAT"),
        ]

    def test_parameters_and_terminator(self, connection: sqlite3.Connection) -> None:
        described = SqliteColumnMetadata().describe(
            connection, "SELECT AGE FROM USER WHERE NAME = ?;"
        )

        assert described == [("AGE", "INT(20)")]

    def test_alias_and_join_keep_declared_type(self, connection: sqlite3.Connection) -> None:
        described = SqliteColumnMetadata().describe(
            connection,
            "SELECT u.NAME AS who, p.GOOD FROM USER u JOIN PET p ON p.OWNER = u.NAME",
        )

        assert [declared for _, declared in described] == ["VARCHAR(255)", "BOOLEAN"]

    def test_expression_has_no_declared_type(self, connection: sqlite3.Connection) -> None:
        described = SqliteColumnMetadata().describe(connection, "SELECT COUNT(*) FROM USER")

        assert [declared for _, declared in described] == [""]

    def test_not_a_query(self, connection: sqlite3.Connection) -> None:
        """Statements that cannot be compiled into a view are not described."""
        metadata = SqliteColumnMetadata()

        assert metadata.describe(connection, "DELETE FROM USER") is None

    def test_temporary_view_is_dropped(self, connection: sqlite3.Connection) -> None:
        SqliteColumnMetadata().describe(connection, "SELECT * FROM USER")

        leftover = connection.execute(
            "SELECT name FROM sqlite_temp_master WHERE type = 'view'"
        ).fetchall()
        assert leftover == []


@pytest.mark.unit
class TestAlignDeclaredTypes:
    """Tests for align_declared_types."""

    def test_driver_names_win(self) -> None:
        aligned = align_declared_types(["NAME", "NAME"], [("NAME", "TEXT"), ("NAME:1", "INT")])

        assert aligned == [("NAME", "TEXT"), ("NAME", "INT")]

    def test_missing_description(self) -> None:
        assert align_declared_types(["A"], None) == [("A", "")]

    def test_width_mismatch(self) -> None:
        assert align_declared_types(["A", "B"], [("A", "INT")]) == [("A", ""), ("B", "")]
