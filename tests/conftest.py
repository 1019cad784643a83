"""Pytest configuration and fixtures for horm tests."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Generator

import pytest
from prometheus_client import CollectorRegistry

from horm import SqliteDatabase
from horm.infrastructure.config import Config, DatabaseConfig
from horm.infrastructure.metrics import MetricsRegistry


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_config(temp_dir: Path) -> Config:
    """Provide a test configuration pointing at a temporary database."""
    return Config(
        database=DatabaseConfig(
            path=temp_dir / "data" / "horm.db",
            timeout_seconds=1.0,
        ),
    )


@pytest.fixture
def metrics_registry() -> MetricsRegistry:
    """Provide a fresh metrics registry for each test."""
    # Use a separate registry to avoid conflicts between tests
    registry = CollectorRegistry(auto_describe=True)
    return MetricsRegistry(registry=registry)


@pytest.fixture
def db(temp_dir: Path, metrics_registry: MetricsRegistry) -> Generator[SqliteDatabase, None, None]:
    """Provide an open database file in a temporary directory."""
    database = SqliteDatabase.open(temp_dir / "gee.db", metrics=metrics_registry)
    yield database
    database.close()


@pytest.fixture
def user_db(db: SqliteDatabase) -> SqliteDatabase:
    """Database with a USER table holding two rows."""
    db.exec("CREATE TABLE USER (NAME VARCHAR(255), AGE INT(20), HEIGHT FLOAT)")
    db.exec(
        "INSERT INTO USER (NAME, AGE, HEIGHT) VALUES (?, ?, ?), (?, ?, ?)",
        "liucx", 30, 168.1,
        "wangli", 18, 168.2,
    )
    return db


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests against SQLite files")
    config.addinivalue_line("markers", "slow: Slow tests")
