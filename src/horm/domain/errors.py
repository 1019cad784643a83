"""Error hierarchy for the mapper.

Every error raised by horm derives from HormError. Errors raised while a
statement is running carry the operation, statement text and arguments so a
failure can be diagnosed without re-running the query.
"""

from __future__ import annotations

from typing import Any, Sequence


class HormError(Exception):
    """Base class for all mapper errors.

    Attributes:
        operation: Facade operation that failed (exec, query_row_into, ...).
        statement: SQL text being executed, if any.
        params: Positional arguments bound to the statement.
    """

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        statement: str | None = None,
        params: Sequence[Any] = (),
    ) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.statement = statement
        self.params = tuple(params)

    def attach(
        self,
        operation: str,
        statement: str,
        params: Sequence[Any] = (),
    ) -> HormError:
        """Record statement context if none was recorded yet. Returns self."""
        if self.operation is None:
            self.operation = operation
        if self.statement is None:
            self.statement = statement
            self.params = tuple(params)
        return self

    def __str__(self) -> str:
        parts = [self.message]
        if self.operation is not None:
            parts.append(f"operation={self.operation}")
        if self.statement is not None:
            parts.append(f"statement={self.statement!r}")
            parts.append(f"params={list(self.params)!r}")
        return ", ".join(parts)


class DatabaseConnectionError(HormError):
    """Opening, pinging or closing the database failed."""


class ExecError(HormError):
    """The driver rejected a statement."""


class RowScanError(HormError):
    """A row's values could not be scanned into typed cells."""

    def __init__(
        self,
        message: str,
        *,
        column: str | None = None,
        value: Any = None,
        **context: Any,
    ) -> None:
        super().__init__(message, **context)
        self.column = column
        self.value = value


class UnsupportedColumnTypeError(HormError):
    """A declared column type has no semantic kind."""

    def __init__(self, type_name: str, column: str | None = None, **context: Any) -> None:
        where = f" for column {column!r}" if column is not None else ""
        super().__init__(f"unsupported column type {type_name!r}{where}", **context)
        self.type_name = type_name
        self.column = column


class EmptyResultError(HormError):
    """A single-record query returned no rows."""


class MultipleRowsError(HormError):
    """A single-record query returned more than one row."""


class FieldConversionError(HormError):
    """A cell's kind does not fit the destination field's type."""

    def __init__(self, message: str, *, field: str, column: str, **context: Any) -> None:
        super().__init__(message, **context)
        self.field = field
        self.column = column


class UnsupportedFieldTypeError(HormError, TypeError):
    """A record field has no column type for DDL generation."""


class StatementBuilderError(HormError):
    """A deferred statement was executed without a database."""
