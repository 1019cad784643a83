"""Ports layer - interface definitions following Hexagonal Architecture.

Ports are abstract interfaces (protocols) that define contracts:
- Inbound ports: APIs offered to clients (Database)
- Outbound ports: Dependencies on the driver (ColumnMetadataSource)

Adapters implement these ports with concrete functionality.
"""

from horm.ports.inbound import Database, ExecResult
from horm.ports.outbound import ColumnMetadataSource

__all__ = [
    "ColumnMetadataSource",
    "Database",
    "ExecResult",
]
