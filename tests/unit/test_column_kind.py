"""Unit tests for the column classifier."""

from __future__ import annotations

import pytest

from horm.domain.errors import UnsupportedColumnTypeError
from horm.domain.value_objects import (
    TYPE_PREFIXES,
    ColumnDescriptor,
    ColumnKind,
    classify_column_type,
    describe_columns,
)


@pytest.mark.unit
class TestClassifyColumnType:
    """Tests for classify_column_type."""

    @pytest.mark.parametrize(
        "type_name,kind",
        [
            ("INT", ColumnKind.INTEGER),
            ("INTEGER", ColumnKind.INTEGER),
            ("INT(20)", ColumnKind.INTEGER),
            ("BIGINT", ColumnKind.INTEGER),
            ("VARCHAR(255)", ColumnKind.TEXT),
            ("TEXT", ColumnKind.TEXT),
            ("NVARCHAR(64)", ColumnKind.TEXT),
            ("DECIMAL(10,2)", ColumnKind.REAL),
            ("FLOAT", ColumnKind.REAL),
            ("float64", ColumnKind.REAL),
            ("BOOL", ColumnKind.BOOLEAN),
            ("BOOLEAN", ColumnKind.BOOLEAN),
        ],
    )
    def test_supported_prefixes(self, type_name: str, kind: ColumnKind) -> None:
        """Every documented prefix maps to its kind."""
        assert classify_column_type(type_name) == kind

    def test_case_insensitive(self) -> None:
        """Lower- and mixed-case names classify the same."""
        assert classify_column_type("varchar(10)") == ColumnKind.TEXT
        assert classify_column_type("Bool") == ColumnKind.BOOLEAN
        assert classify_column_type("  int  ") == ColumnKind.INTEGER

    def test_first_prefix_wins(self) -> None:
        """Overlapping prefixes resolve by table order."""
        # INTERVAL is not a real SQLite type but shares the INT prefix
        assert classify_column_type("INTERVAL") == ColumnKind.INTEGER
        assert TYPE_PREFIXES[0] == ("INT", ColumnKind.INTEGER)

    @pytest.mark.parametrize("type_name", ["REAL", "BLOB", "DATETIME", "NUMERIC", "CHAR(3)", ""])
    def test_unsupported(self, type_name: str) -> None:
        """Unrecognized names raise UnsupportedColumnTypeError."""
        with pytest.raises(UnsupportedColumnTypeError) as exc_info:
            classify_column_type(type_name, column="C")

        assert exc_info.value.type_name == type_name
        assert exc_info.value.column == "C"

    def test_none_is_unsupported(self) -> None:
        """A missing declared type is unsupported."""
        with pytest.raises(UnsupportedColumnTypeError):
            classify_column_type(None)

    def test_unknown_is_never_returned(self) -> None:
        """UNKNOWN exists in the enum but no prefix maps to it."""
        assert ColumnKind.UNKNOWN not in {kind for _, kind in TYPE_PREFIXES}


@pytest.mark.unit
class TestDescribeColumns:
    """Tests for describe_columns."""

    def test_describe_in_order(self) -> None:
        """Descriptors keep driver order and names."""
        descriptors = describe_columns(
            [("name", "VARCHAR(255)"), ("Age", "INT(20)"), ("HEIGHT", "float")]
        )

        assert [d.name for d in descriptors] == ["name", "Age", "HEIGHT"]
        assert [d.kind for d in descriptors] == [
            ColumnKind.TEXT,
            ColumnKind.INTEGER,
            ColumnKind.REAL,
        ]
        assert descriptors[1].key == "AGE"

    def test_describe_fails_on_any_unsupported(self) -> None:
        """One unsupported column fails the whole description."""
        with pytest.raises(UnsupportedColumnTypeError, match="'total'"):
            describe_columns([("name", "TEXT"), ("total", "")])

    def test_descriptor_immutable(self) -> None:
        """Descriptors cannot be modified."""
        descriptor = ColumnDescriptor("a", "INT", ColumnKind.INTEGER)

        with pytest.raises(AttributeError):
            descriptor.name = "b"  # type: ignore[misc]
