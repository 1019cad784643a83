"""Outbound adapters - SQLite implementations of the ports."""

from horm.adapters.outbound.sqlite_column_metadata import (
    SqliteColumnMetadata,
    neutralize_parameters,
)
from horm.adapters.outbound.sqlite_database import SqliteDatabase, connect

__all__ = [
    "SqliteColumnMetadata",
    "SqliteDatabase",
    "connect",
    "neutralize_parameters",
]
