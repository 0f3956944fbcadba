"""
ovsx-client - OpenTelemetry Tracing Module

Registry operations run inside registry_span(). Until configure_tracing()
(or another OpenTelemetry setup in the host application) installs a
provider, spans are no-ops.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor

# Module-level flag for one-time configuration
_configured: bool = False

SERVICE_NAME = "ovsx-client"
ATTRIBUTE_PREFIX = "ovsx."


def configure_tracing(
    service_name: str = SERVICE_NAME,
    console_export: bool = True,
) -> None:
    """Install an SDK tracer provider.

    Only the first call takes effect.

    Args:
        service_name: Name of the service for trace attribution
        console_export: Whether to export spans to console (for development)
    """
    global _configured

    if _configured:
        return

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    if console_export:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)

    _configured = True


def get_tracer(name: str) -> Any:
    """Get a tracer instance for creating spans.

    Args:
        name: Tracer name (typically module name)

    Returns:
        OpenTelemetry Tracer instance
    """
    return trace.get_tracer(name)


@contextmanager
def registry_span(name: str, **attributes: Any) -> Iterator[Any]:
    """Run a block inside a span named ``name``.

    Keyword arguments become ``ovsx.<key>`` span attributes; None values
    are skipped.
    """
    with get_tracer(__name__).start_as_current_span(name) as span:
        for key, value in attributes.items():
            if value is not None:
                span.set_attribute(ATTRIBUTE_PREFIX + key, value)
        yield span


def reset_tracing() -> None:
    """Reset tracing configuration for testing."""
    global _configured
    _configured = False
