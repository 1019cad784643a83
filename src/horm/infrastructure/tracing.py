"""OpenTelemetry tracing for statement execution.

Every facade call runs inside one client span named ``horm.<operation>``
that carries the database system, the statement text and the number of
bound arguments. Argument values are never put on spans. Query operations
add the number of rows they consumed once the result has been read.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Generator

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

ROWS_ATTRIBUTE = "horm.rows"

_tracer: trace.Tracer | None = None


def setup_tracing(service_name: str = "horm", otlp_endpoint: str | None = None) -> trace.Tracer:
    """
    Install a tracer provider that exports statement spans over OTLP.

    Args:
        service_name: Service name reported with every span
        otlp_endpoint: OTLP gRPC collector endpoint; spans are not exported if None

    Returns:
        The tracer statement spans are created with
    """
    global _tracer

    from horm import __version__

    provider = TracerProvider(
        resource=Resource.create({"service.name": service_name, "service.version": __version__})
    )
    if otlp_endpoint:
        provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True))
        )
    trace.set_tracer_provider(provider)

    _tracer = provider.get_tracer("horm", __version__)
    return _tracer


def get_tracer() -> trace.Tracer:
    """Tracer from setup_tracing, or one from the global provider."""
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer("horm")
    return _tracer


@contextmanager
def statement_span(
    operation: str,
    statement: str,
    param_count: int = 0,
) -> Generator[trace.Span, None, None]:
    """Span around one facade operation.

    Exceptions escaping the block are recorded on the span and mark it as
    failed.
    """
    attributes = {
        "db.system": "sqlite",
        "db.operation": operation,
        "db.statement": statement,
        "horm.param_count": param_count,
    }
    with get_tracer().start_as_current_span(
        f"horm.{operation}",
        kind=trace.SpanKind.CLIENT,
        attributes=attributes,
    ) as span:
        yield span


def record_rows(span: trace.Span, count: int) -> None:
    """Attach the number of result rows read by a query."""
    span.set_attribute(ROWS_ATTRIBUTE, count)
