"""Unit tests for deferred statement builders."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest

from horm.application import DropTable, drop_table
from horm.domain.errors import HormError, StatementBuilderError
from horm.ports.inbound import ExecResult


@dataclass
class User:
    name: str
    age: int
    height: float

    @classmethod
    def table_name(cls) -> str:
        return "user"


class RecordingDatabase:
    """Database double that records executed statements."""

    def __init__(self) -> None:
        self.statements: list[tuple[str, tuple[Any, ...]]] = []

    def exec(self, statement: str, *args: Any) -> ExecResult:
        self.statements.append((statement, args))
        return ExecResult()


@pytest.mark.unit
class TestDropTable:
    """Tests for DropTable."""

    def test_target_fixed_at_construction(self) -> None:
        builder = drop_table("user")

        assert isinstance(builder, DropTable)
        assert builder.table_name == "user"
        assert builder.statement == 'DROP TABLE IF EXISTS "USER"'

    def test_model_target(self) -> None:
        assert drop_table(User).table_name == "user"
        assert drop_table(User("a", 1, 1.0)).statement == 'DROP TABLE IF EXISTS "USER"'

    def test_with_db_chains(self) -> None:
        db = RecordingDatabase()
        builder = drop_table("user")

        assert builder.with_db(db) is builder

    def test_exec_runs_statement(self) -> None:
        db = RecordingDatabase()

        result = drop_table("user").with_db(db).exec()

        assert result == ExecResult(last_insert_id=0, rows_affected=0)
        assert db.statements == [('DROP TABLE IF EXISTS "USER"', ())]

    def test_exec_without_db(self) -> None:
        with pytest.raises(StatementBuilderError, match="with_db"):
            drop_table("user").exec()

    def test_nothing_runs_before_exec(self) -> None:
        db = RecordingDatabase()

        drop_table("user").with_db(db)

        assert db.statements == []

    def test_invalid_target(self) -> None:
        with pytest.raises(HormError):
            drop_table(object())
