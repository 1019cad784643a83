"""Column kinds and the column type classifier.

A result set's columns are described once, from the declared type names the
driver reports. The kind decides how every value in the column is scanned;
values are never inspected to guess it.

Classification is a case-insensitive prefix match against an ordered table.
Order matters because prefixes overlap: ``INTERVAL`` would match ``INT``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from horm.domain.errors import UnsupportedColumnTypeError


class ColumnKind(Enum):
    """Semantic kind of a result-set column."""

    INTEGER = "integer"
    TEXT = "text"
    REAL = "real"
    BOOLEAN = "boolean"
    UNKNOWN = "unknown"


# First matching prefix wins.
TYPE_PREFIXES: tuple[tuple[str, ColumnKind], ...] = (
    ("INT", ColumnKind.INTEGER),
    ("BIGINT", ColumnKind.INTEGER),
    ("VARCHAR", ColumnKind.TEXT),
    ("TEXT", ColumnKind.TEXT),
    ("NVARCHAR", ColumnKind.TEXT),
    ("DECIMAL", ColumnKind.REAL),
    ("FLOAT", ColumnKind.REAL),
    ("BOOL", ColumnKind.BOOLEAN),
)


@dataclass(frozen=True, slots=True)
class ColumnDescriptor:
    """Name and kind of one result-set column.

    Attributes:
        name: Column name exactly as reported by the driver.
        declared_type: Declared type name the kind was derived from.
        kind: Semantic kind of every value in the column.
    """

    name: str
    declared_type: str
    kind: ColumnKind

    @property
    def key(self) -> str:
        """Name used for case-insensitive matching."""
        return self.name.upper()


def classify_column_type(type_name: str | None, column: str | None = None) -> ColumnKind:
    """Map a declared column type name to its kind.

    Args:
        type_name: Declared type as reported by the driver (e.g. ``VARCHAR(255)``).
        column: Column name, used only in the error message.

    Returns:
        The kind of the first matching prefix.

    Raises:
        UnsupportedColumnTypeError: If no prefix matches.
    """
    normalized = (type_name or "").strip().upper()
    if normalized:
        for prefix, kind in TYPE_PREFIXES:
            if normalized.startswith(prefix):
                return kind
    raise UnsupportedColumnTypeError(type_name or "", column)


def describe_columns(metadata: Iterable[tuple[str, str | None]]) -> list[ColumnDescriptor]:
    """Build descriptors from ``(name, declared_type)`` pairs in column order."""
    return [
        ColumnDescriptor(
            name=name,
            declared_type=declared_type or "",
            kind=classify_column_type(declared_type, name),
        )
        for name, declared_type in metadata
    ]
