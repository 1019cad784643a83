"""Domain entities for result rows.

Exports:
    - Cell: One scanned value with its column descriptor
    - Row: Ordered cells of one fetched row
"""

from horm.domain.entities.cell import Cell, Row

__all__ = [
    "Cell",
    "Row",
]
