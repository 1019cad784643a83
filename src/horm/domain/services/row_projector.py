"""Row Projector - writes rows onto destination records.

Columns are matched to dataclass fields by name, case-insensitively. The
value of a matched cell is assigned according to its kind:

    INTEGER -> int field
    TEXT    -> str field
    REAL    -> float field
    BOOLEAN -> bool field

``Optional[X]`` fields accept the kind of X; ``Any`` fields accept every
kind. Any other pairing is a FieldConversionError. Fields without a column
keep their zero value and columns without a field are ignored, so schema
drift in either direction is tolerated.

Two modes:
    project_one:  exactly one row, strict about cardinality
    project_many: zero or more rows, one new record per row
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator, TypeVar

from horm.domain.entities import Cell, Row
from horm.domain.errors import EmptyResultError, FieldConversionError, MultipleRowsError
from horm.domain.services.record_schema import FieldSlot, RecordSchema, is_record, record_schema
from horm.domain.value_objects import ColumnKind

T = TypeVar("T")

_NOTHING: Any = object()

KIND_TYPES: dict[ColumnKind, type] = {
    ColumnKind.INTEGER: int,
    ColumnKind.TEXT: str,
    ColumnKind.REAL: float,
    ColumnKind.BOOLEAN: bool,
}


def convert_cell(cell: Cell, slot: FieldSlot) -> Any:
    """Convert a cell's value for assignment to a field.

    Raises:
        FieldConversionError: If the field type does not accept the cell's kind.
    """
    expected = KIND_TYPES.get(cell.kind)
    if expected is None:
        raise FieldConversionError(
            f"column {cell.name!r} has kind {cell.kind.value} which cannot be assigned",
            field=slot.name,
            column=cell.name,
        )
    if slot.type is not None and slot.type is not expected:
        raise FieldConversionError(
            f"cannot assign {cell.kind.value} column {cell.name!r} "
            f"to field {slot.name!r} of type {getattr(slot.type, '__name__', slot.type)}",
            field=slot.name,
            column=cell.name,
        )
    return cell.value


def only(items: Iterable[T]) -> T:
    """Return the single item of a result.

    At most two items are pulled, and the second is only tested for
    presence. Callers can pass raw driver rows so that an extra row is
    reported without being scanned.

    Raises:
        EmptyResultError: If there are no items.
        MultipleRowsError: If there is more than one item.
    """
    iterator: Iterator[T] = iter(items)
    first = next(iterator, _NOTHING)
    if first is _NOTHING:
        raise EmptyResultError("query returned no rows")
    if next(iterator, _NOTHING) is not _NOTHING:
        raise MultipleRowsError("query returned more than one row")
    return first  # type: ignore[return-value]


class RowProjector:
    """Projects materialized rows onto dataclass records."""

    def project(self, dest: T | type[T], row: Row) -> T:
        """Project one row onto a record.

        Args:
            dest: A dataclass type (a new instance is built) or a dataclass
                instance (fields are assigned in place).
            row: The row to project.

        Returns:
            The populated record.

        Raises:
            TypeError: If dest is not a dataclass.
            FieldConversionError: If a matched field cannot take its cell.
        """
        if isinstance(dest, type):
            return self._build(record_schema(dest), row)
        if not is_record(dest):
            raise TypeError(f"destination must be a dataclass, got {type(dest).__name__}")
        return self._assign(record_schema(type(dest)), dest, row)

    def project_one(self, dest: T | type[T], rows: Iterable[Row]) -> T:
        """Project the only row of a result.

        Raises:
            EmptyResultError: If there are no rows.
            MultipleRowsError: If there is more than one row.
        """
        return self.project(dest, only(rows))

    def project_many(
        self,
        record_type: type[T],
        rows: Iterable[Row],
        into: list[T] | None = None,
    ) -> list[T]:
        """Project every row onto a new record.

        Args:
            record_type: Dataclass type of the elements.
            rows: Rows to project, in order.
            into: Optional list to append to. A new list is used if None.

        Returns:
            The list holding one record per row.
        """
        schema = record_schema(record_type)
        records = into if into is not None else []
        for row in rows:
            records.append(self._build(schema, row))
        return records

    def _matches(self, schema: RecordSchema, row: Row) -> Iterator[tuple[FieldSlot, Any]]:
        lookup = row.lookup()
        for slot in schema.fields:
            cell = lookup.get(slot.key)
            if cell is not None:
                yield slot, convert_cell(cell, slot)

    def _build(self, schema: RecordSchema, row: Row) -> Any:
        values = {slot.name: value for slot, value in self._matches(schema, row)}

        kwargs = {}
        late = []
        for slot in schema.fields:
            if slot.init:
                kwargs[slot.name] = (
                    values[slot.name] if slot.name in values else slot.zero_value()
                )
            elif slot.name in values and not schema.frozen:
                late.append((slot.name, values[slot.name]))

        record = schema.record_type(**kwargs)
        for name, value in late:
            setattr(record, name, value)
        return record

    def _assign(self, schema: RecordSchema, record: Any, row: Row) -> Any:
        if schema.frozen:
            return record
        for slot, value in self._matches(schema, row):
            setattr(record, slot.name, value)
        return record
