"""Outbound ports - dependencies on the storage driver."""

from horm.ports.outbound.column_metadata import ColumnMetadataSource, align_declared_types

__all__ = [
    "ColumnMetadataSource",
    "align_declared_types",
]
