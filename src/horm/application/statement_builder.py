"""Deferred statement construction.

A builder captures what to do when it is created, is bound to a database
with ``with_db``, and runs with ``exec``:

    drop_table("user").with_db(db).exec()
    drop_table(User).with_db(db).exec()

One builder targets one table, fixed at construction.
"""

from __future__ import annotations

from typing import Any

from horm.domain.errors import StatementBuilderError
from horm.domain.services import drop_table_statement, table_name_of
from horm.ports.inbound import Database, ExecResult


class DropTable:
    """Pending ``DROP TABLE IF EXISTS`` for one table."""

    def __init__(self, target: Any) -> None:
        """Capture the target table.

        Args:
            target: Table name, or a Table-Named Model type or instance.
        """
        self._table_name = table_name_of(target)
        self._db: Database | None = None

    @property
    def table_name(self) -> str:
        return self._table_name

    @property
    def statement(self) -> str:
        """Statement text that exec() will run."""
        return drop_table_statement(self._table_name)

    def with_db(self, db: Database) -> DropTable:
        """Bind the database to run against. Returns self for chaining."""
        self._db = db
        return self

    def exec(self) -> ExecResult:
        """Drop the table. Dropping a table that does not exist succeeds.

        Raises:
            StatementBuilderError: If no database is bound.
            ExecError: If the driver rejects the statement.
        """
        if self._db is None:
            raise StatementBuilderError(
                f"drop of table {self._table_name!r} has no database; call with_db() first"
            )
        return self._db.exec(self.statement)

    def __repr__(self) -> str:
        return f"DropTable({self._table_name!r})"


def drop_table(target: Any) -> DropTable:
    """Start a drop of the given table name or model."""
    return DropTable(target)
