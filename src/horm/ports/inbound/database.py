"""Database port - the API application code programs against.

The facade executes write statements and reports their effect, and runs
read statements whose rows are projected onto dataclass records.
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from typing import Any, Protocol, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ExecResult:
    """Effect of a non-query statement.

    Attributes:
        last_insert_id: Row id of the last inserted row (0 if none).
        rows_affected: Rows changed by the statement (0 for DDL).
    """

    last_insert_id: int = 0
    rows_affected: int = 0


class Database(Protocol):
    """Protocol for an open database.

    Thread Safety:
        Calls are synchronous. Writers sharing one connection rely on the
        store's own locking; no extra coordination is added.
    """

    @abstractmethod
    def exec(self, statement: str, *args: Any) -> ExecResult:
        """Run a non-query statement.

        Raises:
            ExecError: If the driver rejects the statement.
        """
        ...

    @abstractmethod
    def query_row_into(self, dest: T | type[T], statement: str, *args: Any) -> T:
        """Run a query that must return exactly one row and project it.

        Raises:
            EmptyResultError: If no row is returned.
            MultipleRowsError: If more than one row is returned.
        """
        ...

    @abstractmethod
    def query_into(
        self,
        record_type: type[T],
        statement: str,
        *args: Any,
        into: list[T] | None = None,
    ) -> list[T]:
        """Run a query and project every row onto a new record."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Release the connection. Closing twice is a no-op."""
        ...
