"""SQLite Execution Facade.

This adapter implements the Database port over the stdlib sqlite3 driver.
It opens and pings the database file, executes write statements, and runs
read statements through the Row Materializer and Row Projector.

Usage:
    from horm import SqliteDatabase

    with SqliteDatabase.open("gee.db") as db:
        db.create_table(User)
        db.exec("INSERT INTO USER (NAME, AGE, HEIGHT) VALUES (?, ?, ?)", "liucx", 30, 168.1)
        user = db.query_row_into(User, "SELECT * FROM USER LIMIT 1")
        users = db.query_into(User, "SELECT * FROM USER")

Thread Safety:
    The connection runs in autocommit mode and adds no locking of its own;
    SQLite serializes writers. With check_same_thread=True (the default) the
    connection may only be used from the thread that opened it.
"""

from __future__ import annotations

import sqlite3
import time
from contextlib import closing, contextmanager
from pathlib import Path
from typing import Any, Generator, Iterator, TypeVar

from opentelemetry import trace

from horm.adapters.outbound.sqlite_column_metadata import SqliteColumnMetadata
from horm.domain.entities import Row
from horm.domain.errors import DatabaseConnectionError, ExecError, HormError
from horm.domain.services import (
    RowMaterializer,
    RowProjector,
    create_table_statement,
    drop_table_statement,
    only,
)
from horm.domain.value_objects import describe_columns
from horm.infrastructure.config import Config, get_config
from horm.infrastructure.logging import get_logger
from horm.infrastructure.metrics import MetricsRegistry, get_metrics
from horm.infrastructure.tracing import record_rows, statement_span
from horm.ports.inbound import ExecResult
from horm.ports.outbound import ColumnMetadataSource, align_declared_types

T = TypeVar("T")

logger = get_logger(__name__)


class SqliteDatabase:
    """Database port implementation over one sqlite3 connection.

    Attributes:
        path: Path of the database file.
    """

    def __init__(
        self,
        connection: sqlite3.Connection,
        path: str | Path,
        metadata: ColumnMetadataSource | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        """Wrap an open connection. Use ``open()`` to connect by path."""
        self._connection: sqlite3.Connection | None = connection
        self._path = str(path)
        self._metadata = metadata or SqliteColumnMetadata()
        self._metrics = metrics or get_metrics()
        self._projector = RowProjector()
        self._metrics.connections_open.inc()

    @classmethod
    def open(
        cls,
        path: str | Path,
        *,
        timeout: float = 5.0,
        check_same_thread: bool = True,
        metadata: ColumnMetadataSource | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> SqliteDatabase:
        """Open the database file at path and verify it answers.

        Args:
            path: Database file, or ``":memory:"``.
            timeout: Seconds to wait when the database is locked.
            check_same_thread: Passed through to sqlite3.

        Raises:
            DatabaseConnectionError: If the file cannot be opened or pinged.
        """
        try:
            connection = sqlite3.connect(
                str(path),
                timeout=timeout,
                isolation_level=None,
                check_same_thread=check_same_thread,
            )
        except sqlite3.Error as e:
            logger.error("database open failed", path=str(path), error=str(e))
            raise DatabaseConnectionError(
                f"cannot open database {str(path)!r}: {e}", operation="open"
            ) from e

        try:
            connection.execute("SELECT 1").fetchone()
        except sqlite3.Error as e:
            connection.close()
            logger.error("database ping failed", path=str(path), error=str(e))
            raise DatabaseConnectionError(
                f"cannot reach database {str(path)!r}: {e}", operation="ping"
            ) from e

        logger.info("database opened", path=str(path))
        return cls(connection, path, metadata=metadata, metrics=metrics)

    @property
    def path(self) -> str:
        return self._path

    @property
    def is_open(self) -> bool:
        return self._connection is not None

    def close(self) -> None:
        """Close the connection. A second call does nothing.

        Raises:
            DatabaseConnectionError: If the driver fails to close.
        """
        if self._connection is None:
            return

        connection, self._connection = self._connection, None
        self._metrics.connections_open.dec()
        try:
            connection.close()
        except sqlite3.Error as e:
            logger.error("database close failed", path=self._path, error=str(e))
            raise DatabaseConnectionError(
                f"cannot close database {self._path!r}: {e}", operation="close"
            ) from e
        logger.info("database closed", path=self._path)

    def exec(self, statement: str, *args: Any) -> ExecResult:
        """Run a non-query statement.

        Returns:
            Last inserted row id and number of rows changed.

        Raises:
            ExecError: If the driver rejects the statement.
        """
        with self._operation("exec", statement, args):
            connection = self._require_connection("exec", statement, args)
            try:
                with closing(connection.execute(statement, args)) as cursor:
                    result = ExecResult(
                        last_insert_id=cursor.lastrowid or 0,
                        rows_affected=max(cursor.rowcount, 0),
                    )
            except sqlite3.Error as e:
                raise ExecError(
                    str(e), operation="exec", statement=statement, params=args
                ) from e

        logger.debug(
            "statement executed",
            statement=statement,
            params=args,
            last_insert_id=result.last_insert_id,
            rows_affected=result.rows_affected,
        )
        return result

    def query_row_into(self, dest: T | type[T], statement: str, *args: Any) -> T:
        """Run a query that returns exactly one row and project it onto dest.

        Only the first row is scanned. A second row is detected from the
        driver without being converted.

        Args:
            dest: Dataclass type (a new record is returned) or instance
                (populated in place and returned).

        Raises:
            EmptyResultError: If the query returns no rows.
            MultipleRowsError: If the query returns more than one row.
            UnsupportedColumnTypeError: If a column has no supported type.
            RowScanError: If a value cannot be scanned.
            FieldConversionError: If a column does not fit its field.
            ExecError: If the driver rejects the statement.
        """
        with self._operation("query_row_into", statement, args) as span:
            with self._result("query_row_into", statement, args) as (materializer, raw_rows):
                raw = only(raw_rows)
                record_rows(span, 1)
                record = self._projector.project(dest, self._scan(materializer, raw))
        self._metrics.records_projected_total.labels(mode="single").inc()
        return record

    def query_into(
        self,
        record_type: type[T],
        statement: str,
        *args: Any,
        into: list[T] | None = None,
    ) -> list[T]:
        """Run a query and project every row onto a new record.

        Args:
            record_type: Dataclass type of the records.
            into: Optional list to append to.

        Returns:
            One record per row in result order.
        """
        with self._operation("query_into", statement, args) as span:
            with self._result("query_into", statement, args) as (materializer, raw_rows):
                start = len(into) if into is not None else 0
                records = self._projector.project_many(
                    record_type,
                    (self._scan(materializer, raw) for raw in raw_rows),
                    into=into,
                )
                record_rows(span, len(records) - start)
        self._metrics.records_projected_total.labels(mode="sequence").inc(len(records) - start)
        return records

    def query_rows(self, statement: str, *args: Any) -> list[Row]:
        """Run a query and return its materialized rows without projection."""
        with self._operation("query_rows", statement, args) as span:
            with self._result("query_rows", statement, args) as (materializer, raw_rows):
                rows = [self._scan(materializer, raw) for raw in raw_rows]
                record_rows(span, len(rows))
        return rows

    def drop_table(self, model: Any) -> ExecResult:
        """Drop the model's table if it exists."""
        return self.exec(drop_table_statement(model))

    def create_table(self, model: Any) -> ExecResult:
        """Create the model's table with one column per dataclass field."""
        return self.exec(create_table_statement(model))

    def _require_connection(
        self, operation: str, statement: str, args: tuple[Any, ...]
    ) -> sqlite3.Connection:
        if self._connection is None:
            raise DatabaseConnectionError(
                "database is closed", operation=operation, statement=statement, params=args
            )
        return self._connection

    @contextmanager
    def _operation(
        self, operation: str, statement: str, args: tuple[Any, ...]
    ) -> Generator[trace.Span, None, None]:
        """Trace, time and count one facade call; attach context to failures."""
        start = time.perf_counter()
        status = "success"
        try:
            with statement_span(operation, statement, len(args)) as span:
                yield span
        except HormError as e:
            status = "error"
            e.attach(operation, statement, args)
            logger.error(
                "statement failed",
                operation=operation,
                statement=statement,
                params=args,
                error_type=type(e).__name__,
                error=e.message,
            )
            raise
        except Exception:
            status = "error"
            raise
        finally:
            self._metrics.statements_total.labels(operation=operation, status=status).inc()
            self._metrics.statement_latency_seconds.labels(operation=operation).observe(
                time.perf_counter() - start
            )

    @contextmanager
    def _result(
        self, operation: str, statement: str, args: tuple[Any, ...]
    ) -> Generator[tuple[RowMaterializer, Iterator[tuple[Any, ...]]], None, None]:
        """Execute a query and yield its materializer and raw driver rows.

        Raw rows are fetched lazily and scanned only when the caller asks
        for them. The cursor is closed on every exit path.
        """
        connection = self._require_connection(operation, statement, args)
        described = self._metadata.describe(connection, statement)

        try:
            cursor = connection.execute(statement, args)
        except sqlite3.Error as e:
            raise ExecError(str(e), operation=operation, statement=statement, params=args) from e

        with closing(cursor):
            names = [column[0] for column in cursor.description or ()]
            descriptors = describe_columns(align_declared_types(names, described))
            yield RowMaterializer(descriptors), self._fetch(cursor, operation, statement, args)

    def _fetch(
        self,
        cursor: sqlite3.Cursor,
        operation: str,
        statement: str,
        args: tuple[Any, ...],
    ) -> Iterator[tuple[Any, ...]]:
        while True:
            try:
                raw = cursor.fetchone()
            except sqlite3.Error as e:
                raise ExecError(
                    str(e), operation=operation, statement=statement, params=args
                ) from e
            if raw is None:
                return
            yield raw

    def _scan(self, materializer: RowMaterializer, raw: tuple[Any, ...]) -> Row:
        row = materializer.materialize(raw)
        self._metrics.rows_scanned_total.inc()
        return row

    def __enter__(self) -> SqliteDatabase:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "open" if self.is_open else "closed"
        return f"SqliteDatabase({self._path!r}, {state})"


def connect(
    config: Config | None = None,
    metrics: MetricsRegistry | None = None,
) -> SqliteDatabase:
    """Open the database named by the configuration."""
    config = config or get_config()
    db_config = config.database
    if str(db_config.path) != ":memory:":
        db_config.ensure_parent()
    return SqliteDatabase.open(
        db_config.path,
        timeout=db_config.timeout_seconds,
        check_same_thread=db_config.check_same_thread,
        metrics=metrics,
    )
