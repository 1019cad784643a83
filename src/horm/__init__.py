"""
horm - a minimal object-relational mapper over SQLite.

Queries run through the stdlib sqlite3 driver; their rows are scanned into
typed cells by declared column type and projected onto dataclass records by
case-insensitive column name.
"""

__version__ = "0.1.0"

from horm.adapters.outbound import SqliteDatabase, connect
from horm.application import DropTable, drop_table
from horm.domain.entities import Cell, Row
from horm.domain.errors import (
    DatabaseConnectionError,
    EmptyResultError,
    ExecError,
    FieldConversionError,
    HormError,
    MultipleRowsError,
    RowScanError,
    StatementBuilderError,
    UnsupportedColumnTypeError,
    UnsupportedFieldTypeError,
)
from horm.domain.services import TableNamed
from horm.domain.value_objects import ColumnDescriptor, ColumnKind, classify_column_type
from horm.ports.inbound import Database, ExecResult

__all__ = [
    "__version__",
    "Cell",
    "ColumnDescriptor",
    "ColumnKind",
    "Database",
    "DatabaseConnectionError",
    "DropTable",
    "EmptyResultError",
    "ExecError",
    "ExecResult",
    "FieldConversionError",
    "HormError",
    "MultipleRowsError",
    "Row",
    "RowScanError",
    "SqliteDatabase",
    "StatementBuilderError",
    "TableNamed",
    "UnsupportedColumnTypeError",
    "UnsupportedFieldTypeError",
    "classify_column_type",
    "connect",
    "drop_table",
]
