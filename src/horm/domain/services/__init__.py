"""Domain services for result-set marshaling.

Exports:
    - RowMaterializer: Scans driver rows into typed cells
    - RowProjector, only: Write rows onto dataclass records; single-row check
    - record_schema, FieldSlot, RecordSchema, TableNamed: Cached field tables
    - create_table_statement, drop_table_statement: DDL from models
"""

from horm.domain.services.ddl import (
    FIELD_COLUMN_TYPES,
    create_table_statement,
    drop_table_statement,
    quote_identifier,
)
from horm.domain.services.record_schema import (
    FieldSlot,
    RecordSchema,
    TableNamed,
    record_schema,
    table_name_of,
)
from horm.domain.services.row_materializer import RowMaterializer
from horm.domain.services.row_projector import KIND_TYPES, RowProjector, convert_cell, only

__all__ = [
    "FIELD_COLUMN_TYPES",
    "KIND_TYPES",
    "FieldSlot",
    "RecordSchema",
    "RowMaterializer",
    "RowProjector",
    "TableNamed",
    "convert_cell",
    "create_table_statement",
    "drop_table_statement",
    "only",
    "quote_identifier",
    "record_schema",
    "table_name_of",
]
