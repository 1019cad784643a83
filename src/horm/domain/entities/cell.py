"""Cells and rows produced by the row materializer.

A Cell pairs one scanned value with the descriptor of its column. A Row is
the ordered sequence of cells for one fetched result row. Rows are consumed
by the projector as soon as they are built and are not retained.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

from horm.domain.value_objects import ColumnDescriptor, ColumnKind


@dataclass(frozen=True, slots=True)
class Cell:
    """A single scanned value.

    The value's Python type is fixed by the descriptor's kind:
    INTEGER is ``int``, TEXT is ``str``, REAL is ``float``, BOOLEAN is ``bool``.
    """

    descriptor: ColumnDescriptor
    value: int | str | float | bool

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def kind(self) -> ColumnKind:
        return self.descriptor.kind

    def __repr__(self) -> str:
        return f"Cell({self.name}:{self.kind.value}={self.value!r})"


@dataclass(frozen=True, slots=True)
class Row:
    """One result row, one cell per column in driver column order."""

    cells: tuple[Cell, ...]

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def __getitem__(self, key: int | str) -> Cell:
        if isinstance(key, int):
            return self.cells[key]
        try:
            return self.lookup()[key.upper()]
        except KeyError as e:
            raise KeyError(f"Column '{key}' not found") from e

    def lookup(self) -> dict[str, Cell]:
        """Map upper-cased column names to cells. Later duplicates win."""
        return {cell.descriptor.key: cell for cell in self.cells}

    def as_dict(self) -> dict[str, Any]:
        """Column name to value, using the names as reported."""
        return {cell.name: cell.value for cell in self.cells}

    def __repr__(self) -> str:
        pairs = ", ".join(f"{c.name}={c.value!r}" for c in self.cells)
        return f"Row({pairs})"
