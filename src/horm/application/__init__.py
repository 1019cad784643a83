"""Application layer for the mapper.

Exports:
    - DropTable: Deferred, fluent DROP TABLE IF EXISTS
    - drop_table: Start a DropTable for a table name or model
"""

from horm.application.statement_builder import DropTable, drop_table

__all__ = [
    "DropTable",
    "drop_table",
]
