"""Adapters layer - concrete implementations of ports.

Outbound adapters (driven):
    - SqliteDatabase: Database port over the stdlib sqlite3 driver
    - SqliteColumnMetadata: Declared column types via temporary views
"""

from horm.adapters.outbound import SqliteColumnMetadata, SqliteDatabase, connect

__all__ = [
    "SqliteColumnMetadata",
    "SqliteDatabase",
    "connect",
]
