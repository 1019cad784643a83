"""Inbound ports - API contracts offered to application code."""

from horm.ports.inbound.database import Database, ExecResult

__all__ = [
    "Database",
    "ExecResult",
]
