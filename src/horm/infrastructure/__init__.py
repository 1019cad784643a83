"""Infrastructure layer - cross-cutting concerns."""

from horm.infrastructure.config import Config, get_config
from horm.infrastructure.logging import setup_logging, get_logger
from horm.infrastructure.metrics import setup_metrics, get_metrics, MetricsRegistry
from horm.infrastructure.observability import setup_observability
from horm.infrastructure.tracing import setup_tracing, get_tracer, record_rows, statement_span

__all__ = [
    "Config",
    "get_config",
    "setup_logging",
    "get_logger",
    "setup_metrics",
    "get_metrics",
    "MetricsRegistry",
    "setup_observability",
    "setup_tracing",
    "get_tracer",
    "record_rows",
    "statement_span",
]
