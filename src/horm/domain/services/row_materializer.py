"""Row Materializer - scans driver rows into typed cells.

The materializer is built once per result set from the column descriptors.
For each fetched row it scans every value into a fresh cell of its column's
kind and returns the cells as a Row. A row is all-or-nothing: if any value
fails to scan, no Row is produced.

Scan rules per kind:
    INTEGER: int, integral float, decimal text
    TEXT:    text, UTF-8 bytes, numbers formatted as text
    REAL:    float, int, numeric text
    BOOLEAN: 0/1 integers, boolean text (1, t, true, 0, f, false, ...)

NULL is not scannable into any kind.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Sequence

from horm.domain.entities import Cell, Row
from horm.domain.errors import RowScanError
from horm.domain.value_objects import ColumnDescriptor, ColumnKind

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_INTEGER_TEXT = re.compile(r"[+-]?[0-9]+")
_REAL_TEXT = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|[+-]?(?:inf|infinity|nan)",
    re.IGNORECASE,
)

_TRUE_TEXT = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_TEXT = frozenset({"0", "f", "F", "FALSE", "false", "False"})


class _ScanError(ValueError):
    pass


def _as_text(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        try:
            return bytes(value).decode("utf-8")
        except UnicodeDecodeError as e:
            raise _ScanError("bytes are not valid UTF-8") from e
    return None


def _scan_integer(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        result = value
    elif isinstance(value, float):
        if not value.is_integer():
            raise _ScanError("float has a fractional part")
        result = int(value)
    else:
        text = _as_text(value)
        if text is None or not _INTEGER_TEXT.fullmatch(text):
            raise _ScanError("not an integer")
        result = int(text)
    if not INT64_MIN <= result <= INT64_MAX:
        raise _ScanError("out of 64-bit range")
    return result


def _scan_text(value: Any) -> str:
    text = _as_text(value)
    if text is not None:
        return text
    if isinstance(value, (int, float)):
        return str(value)
    raise _ScanError("not text")


def _scan_real(value: Any) -> float:
    if isinstance(value, (int, float)):
        return float(value)
    text = _as_text(value)
    if text is None or not _REAL_TEXT.fullmatch(text):
        raise _ScanError("not a number")
    return float(text)


def _scan_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        if value in (0, 1):
            return bool(value)
        raise _ScanError("integer is neither 0 nor 1")
    text = _as_text(value)
    if text in _TRUE_TEXT:
        return True
    if text in _FALSE_TEXT:
        return False
    raise _ScanError("not a boolean")


SCANNERS: dict[ColumnKind, Callable[[Any], int | str | float | bool]] = {
    ColumnKind.INTEGER: _scan_integer,
    ColumnKind.TEXT: _scan_text,
    ColumnKind.REAL: _scan_real,
    ColumnKind.BOOLEAN: _scan_boolean,
}


class RowMaterializer:
    """Turns raw driver rows of one result set into Rows.

    Example:
        >>> descriptors = describe_columns([("NAME", "VARCHAR(255)"), ("AGE", "INT")])
        >>> RowMaterializer(descriptors).materialize(("liucx", 30))
        Row(NAME='liucx', AGE=30)
    """

    def __init__(self, descriptors: Sequence[ColumnDescriptor]) -> None:
        self._descriptors = tuple(descriptors)
        self._scanners = []
        for descriptor in self._descriptors:
            scanner = SCANNERS.get(descriptor.kind)
            if scanner is None:
                raise RowScanError(
                    f"no scanner for kind {descriptor.kind.value}",
                    column=descriptor.name,
                )
            self._scanners.append(scanner)

    @property
    def descriptors(self) -> tuple[ColumnDescriptor, ...]:
        return self._descriptors

    def materialize(self, raw: Sequence[Any]) -> Row:
        """Scan one driver row.

        Args:
            raw: Values of one fetched row in column order.

        Returns:
            A Row with exactly one cell per column.

        Raises:
            RowScanError: If the width is wrong or any value fails to scan.
        """
        if len(raw) != len(self._descriptors):
            raise RowScanError(
                f"row has {len(raw)} values for {len(self._descriptors)} columns"
            )

        cells = []
        for descriptor, scanner, value in zip(self._descriptors, self._scanners, raw):
            if value is None:
                raise RowScanError(
                    f"cannot scan NULL into {descriptor.kind.value} column {descriptor.name!r}",
                    column=descriptor.name,
                    value=value,
                )
            try:
                scanned = scanner(value)
            except _ScanError as e:
                raise RowScanError(
                    f"cannot scan {value!r} into {descriptor.kind.value} "
                    f"column {descriptor.name!r}: {e}",
                    column=descriptor.name,
                    value=value,
                ) from e
            cells.append(Cell(descriptor=descriptor, value=scanned))

        return Row(cells=tuple(cells))
