"""Declared column types for SQLite result sets.

The stdlib sqlite3 driver reports only column names, not the declared
types that ``sqlite3_column_decltype`` would give. This adapter lets SQLite
work them out: the query is compiled into a temporary view and the view's
``PRAGMA table_info`` lists one declared type per result column. Direct
column references carry their table's declared type (through aliases,
joins and subqueries); computed expressions usually carry none.

Views cannot hold bound parameters, so parameter markers are replaced by
NULL before the view is created. Declared types do not depend on the bound
values.

Resolution happens before the real query runs, so no statement is active
on the connection while the view is created and dropped.
"""

from __future__ import annotations

import itertools
import re
import sqlite3

from horm.domain.services import quote_identifier
from horm.infrastructure.logging import get_logger

logger = get_logger(__name__)

_SQL_TOKEN = re.compile(
    r"""
      '(?:[^']|'')*'               # string literal
    | "(?:[^"]|"")*"               # quoted identifier
    | `(?:[^`]|``)*`               # MySQL-style identifier
    | \[[^\]]*\]                   # MS-style identifier
    | --[^\n]*                     # line comment
    | /\*.*?(?:\*/|\Z)             # block comment
    | (?P<param>\?[0-9]*|[:@$][A-Za-z_][A-Za-z0-9_]*)
    """,
    re.VERBOSE | re.DOTALL,
)

_view_ids = itertools.count(1)


def neutralize_parameters(statement: str) -> str:
    """Replace every parameter marker outside literals and comments with NULL."""
    return _SQL_TOKEN.sub(
        lambda m: "NULL" if m.group("param") else m.group(0),
        statement,
    )


def _strip_terminator(statement: str) -> str:
    stripped = statement.rstrip()
    while stripped.endswith(";"):
        stripped = stripped[:-1].rstrip()
    return stripped


class SqliteColumnMetadata:
    """ColumnMetadataSource backed by temporary views.

    Example:
        >>> metadata = SqliteColumnMetadata()
        >>> metadata.describe(conn, "SELECT NAME, AGE FROM USER WHERE AGE > ?")
        [('NAME', 'VARCHAR(255)'), ('AGE', 'INT(20)')]
    """

    def describe(
        self,
        connection: sqlite3.Connection,
        statement: str,
    ) -> list[tuple[str, str]] | None:
        """Resolve ``(name, declared_type)`` for every result column.

        Column names are the view's, which SQLite de-duplicates
        (``NAME``, ``NAME:1``); callers pair the types with the names the
        driver reports.

        Returns:
            One pair per column, ``""`` for columns without a declared type,
            or None if the statement cannot be compiled into a view (it is
            not a SELECT, for example).
        """
        view = quote_identifier(f"_horm_describe_{next(_view_ids)}")
        body = _strip_terminator(neutralize_parameters(statement))

        try:
            connection.execute(f"CREATE TEMP VIEW {view} AS {body}")
        except sqlite3.Error as e:
            logger.debug("column metadata unavailable", statement=statement, error=str(e))
            return None

        # Views over missing tables are accepted by CREATE and fail here
        try:
            info = connection.execute(f"PRAGMA temp.table_info({view})").fetchall()
        except sqlite3.Error as e:
            logger.debug("column metadata unavailable", statement=statement, error=str(e))
            return None
        finally:
            connection.execute(f"DROP VIEW IF EXISTS temp.{view}")

        # table_info rows: (cid, name, type, notnull, dflt_value, pk)
        return [(row[1], row[2] or "") for row in info]
