"""Value objects describing result-set columns."""

from horm.domain.value_objects.column_kind import (
    TYPE_PREFIXES,
    ColumnDescriptor,
    ColumnKind,
    classify_column_type,
    describe_columns,
)

__all__ = [
    "TYPE_PREFIXES",
    "ColumnDescriptor",
    "ColumnKind",
    "classify_column_type",
    "describe_columns",
]
