"""DDL statement text derived from Table-Named Models.

Table names are upper-cased. CREATE TABLE column lists come from the
model's dataclass fields; every declared type emitted here classifies back
to the kind of the field it came from.
"""

from __future__ import annotations

from typing import Any

from horm.domain.errors import UnsupportedFieldTypeError
from horm.domain.services.record_schema import record_schema, table_name_of

FIELD_COLUMN_TYPES: dict[type, str] = {
    int: "INTEGER",
    str: "TEXT",
    float: "FLOAT",
    bool: "BOOLEAN",
}


def quote_identifier(name: str) -> str:
    """Quote an SQL identifier, doubling embedded quotes."""
    return '"' + name.replace('"', '""') + '"'


def drop_table_statement(model: Any) -> str:
    """``DROP TABLE IF EXISTS`` for a model or table name."""
    return f"DROP TABLE IF EXISTS {quote_identifier(table_name_of(model).upper())}"


def create_table_statement(model: Any) -> str:
    """``CREATE TABLE`` with one column per field of the model.

    Args:
        model: A dataclass type or instance that declares a table name.

    Raises:
        UnsupportedFieldTypeError: If a field type has no column type.
    """
    record_type = model if isinstance(model, type) else type(model)
    schema = record_schema(record_type)

    columns = []
    for slot in schema.fields:
        column_type = FIELD_COLUMN_TYPES.get(slot.type)  # type: ignore[arg-type]
        if column_type is None:
            raise UnsupportedFieldTypeError(
                f"field {slot.name!r} of {record_type.__name__} has no column type"
            )
        columns.append(f"{quote_identifier(slot.key)} {column_type}")

    if not columns:
        raise UnsupportedFieldTypeError(f"{record_type.__name__} has no fields")

    table = quote_identifier(table_name_of(model).upper())
    return f"CREATE TABLE {table} ({', '.join(columns)})"
