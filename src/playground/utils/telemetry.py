"""OpenTelemetry tracing helpers for the playground.

The rest of the codebase calls ``get_tracer()`` without caring whether the
SDK is installed.  Without a configured SDK the API hands out no-op
tracers.

Usage::

    from playground.utils.telemetry import get_tracer

    _tracer = get_tracer(__name__)

    with _tracer.start_as_current_span("playground.sandbox.run") as span:
        span.set_attribute(ATTR_CHANNEL, "master")

To export spans, call :func:`configure_telemetry` once at startup
(requires the ``otel`` extra: ``pip install noir-playground[otel]``).
"""

from __future__ import annotations

from opentelemetry import trace

ATTR_CHANNEL = "playground.channel"
ATTR_COMMAND = "playground.command"
ATTR_EXIT_CODE = "playground.exit_code"
ATTR_TIMED_OUT = "playground.timed_out"

_INSTRUMENTATION_NAME = "playground"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Return a :class:`~opentelemetry.trace.Tracer` for *name*."""
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(
    *,
    service_name: str = "noir-playground",
    otlp_endpoint: str | None = None,
) -> None:
    """Install an SDK tracer provider (requires ``noir-playground[otel]``).

    Spans go to *otlp_endpoint* over OTLP/gRPC when given, otherwise to
    stdout as JSON.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports]
            BatchSpanProcessor,
            ConsoleSpanExporter,
            SimpleSpanProcessor,
        )
    except ImportError as exc:
        msg = "opentelemetry-sdk is required; install noir-playground[otel]"
        raise ImportError(msg) from exc

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))

    if otlp_endpoint is None:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
    else:
        try:
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (  # pyright: ignore[reportMissingImports]
                OTLPSpanExporter,
            )
        except ImportError as exc:
            msg = "opentelemetry-exporter-otlp is required for OTLP export"
            raise ImportError(msg) from exc
        provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint)))

    trace.set_tracer_provider(provider)
