"""Column metadata port.

The classifier needs the declared type of every result column. Drivers
expose this differently, so the facade asks a ColumnMetadataSource before
running the query and pairs the answer with the names the driver reports.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Protocol, Sequence


class ColumnMetadataSource(Protocol):
    """Protocol for resolving result-set column metadata."""

    @abstractmethod
    def describe(self, connection: Any, statement: str) -> list[tuple[str, str]] | None:
        """Return ``(name, declared_type)`` for each result column of a query.

        Args:
            connection: Open driver connection the query will run on.
            statement: SQL text of the query.

        Returns:
            One pair per column in result order, with ``""`` for columns
            that have no declared type; None if the statement cannot be
            described.
        """
        ...


def align_declared_types(
    column_names: Sequence[str],
    described: Sequence[tuple[str, str]] | None,
) -> list[tuple[str, str]]:
    """Pair the driver's column names with described declared types.

    The driver's names win. When the description is missing or has a
    different width, every column gets ``""``.
    """
    if described is None or len(described) != len(column_names):
        return [(name, "") for name in column_names]
    return [(name, declared) for name, (_, declared) in zip(column_names, described)]
