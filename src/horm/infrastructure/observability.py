"""Wires logging, tracing and metrics from a Config."""

from __future__ import annotations

from prometheus_client import CollectorRegistry

from horm.infrastructure.config import Config, get_config
from horm.infrastructure.logging import get_logger, setup_logging
from horm.infrastructure.metrics import MetricsRegistry, setup_metrics
from horm.infrastructure.tracing import setup_tracing


def setup_observability(
    config: Config | None = None,
    registry: CollectorRegistry | None = None,
) -> MetricsRegistry:
    """Configure logging, tracing and metrics.

    Tracing is only installed when an OTLP endpoint is configured; the
    metrics HTTP exporter only when a metrics port is configured.

    Returns:
        The metrics registry the facade will record into.
    """
    config = config or get_config()
    obs = config.observability

    setup_logging(level=obs.log_level, log_format=obs.log_format)

    if obs.otel_endpoint:
        setup_tracing(service_name=obs.otel_service_name, otlp_endpoint=obs.otel_endpoint)

    metrics = setup_metrics(port=obs.metrics_port, registry=registry)

    get_logger(__name__).info(
        "observability configured",
        log_level=obs.log_level,
        tracing=bool(obs.otel_endpoint),
        metrics_port=obs.metrics_port,
    )
    return metrics
