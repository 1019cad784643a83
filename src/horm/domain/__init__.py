"""Domain layer: column kinds, cells, rows and the marshaling services."""
