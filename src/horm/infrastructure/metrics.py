"""Prometheus metrics for the mapper."""

from __future__ import annotations

from prometheus_client import (
    REGISTRY,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    Info,
    start_http_server,
)


class MetricsRegistry:
    """Registry of all mapper metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics registry."""
        self._registry = registry if registry is not None else REGISTRY

        self.statements_total = Counter(
            "horm_statements_total",
            "Total number of statements executed",
            ["operation", "status"],  # status: success, error
            registry=self._registry,
        )

        self.statement_latency_seconds = Histogram(
            "horm_statement_latency_seconds",
            "Statement latency in seconds, including row projection",
            ["operation"],
            buckets=(0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 5.0),
            registry=self._registry,
        )

        self.rows_scanned_total = Counter(
            "horm_rows_scanned_total",
            "Total result rows scanned into cells",
            registry=self._registry,
        )

        self.records_projected_total = Counter(
            "horm_records_projected_total",
            "Total records populated from rows",
            ["mode"],  # single, sequence
            registry=self._registry,
        )

        self.connections_open = Gauge(
            "horm_connections_open",
            "Number of open database connections",
            registry=self._registry,
        )

        self.info = Info(
            "horm",
            "Mapper information",
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        """Collector registry the metrics are registered on."""
        return self._registry


# One MetricsRegistry per collector registry; registering twice raises
_bound: dict[CollectorRegistry, MetricsRegistry] = {}

# Global metrics registry
_metrics: MetricsRegistry | None = None


def _metrics_for(registry: CollectorRegistry | None) -> MetricsRegistry:
    target = registry if registry is not None else REGISTRY
    metrics = _bound.get(target)
    if metrics is None:
        metrics = _bound[target] = MetricsRegistry(target)
    return metrics


def setup_metrics(
    port: int | None = None,
    registry: CollectorRegistry | None = None,
) -> MetricsRegistry:
    """
    Set up the metrics registry and, optionally, the HTTP exporter.

    Calling this again for the same collector registry returns the metrics
    registered the first time.

    Args:
        port: Port for the metrics HTTP server; no server is started if None
        registry: Optional custom registry

    Returns:
        The metrics registry
    """
    global _metrics
    _metrics = _metrics_for(registry)

    from horm import __version__
    _metrics.info.info({
        "version": __version__,
    })

    if port is not None:
        start_http_server(port, registry=_metrics.registry)

    return _metrics


def get_metrics() -> MetricsRegistry:
    """Get the global metrics registry."""
    global _metrics
    if _metrics is None:
        _metrics = _metrics_for(None)
    return _metrics
