"""Tracing configuration for the commit-to-PR server using OpenTelemetry."""

import sys
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Dict, Optional

from opentelemetry import trace
from opentelemetry.exporter.cloud_trace import CloudTraceSpanExporter
from opentelemetry.sdk.resources import Resource, SERVICE_NAME
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

from commit_to_pr.errors import ConfigurationError
from commit_to_pr.logging_config import get_logger

logger = get_logger(__name__)

TRACE_EXPORTERS = ("console", "cloud")


def setup_tracing(
    exporter: str = "console",
    project_id: Optional[str] = None,
    service_name: str = "commit-to-pr-mcp",
) -> trace.Tracer:
    """Initialize OpenTelemetry tracing.

    Args:
        exporter: 'console' writes spans to stderr, 'cloud' ships them to
                  Google Cloud Trace
        project_id: Google Cloud project ID, required for the cloud exporter
        service_name: Service name for trace identification

    Returns:
        Configured tracer instance

    Raises:
        ConfigurationError: If the exporter is unknown or the cloud exporter
                            is selected without a project ID
    """
    resource = Resource.create({SERVICE_NAME: service_name})
    provider = TracerProvider(resource=resource)

    if exporter == "cloud":
        if not project_id:
            raise ConfigurationError(
                "GOOGLE_CLOUD_PROJECT must be set when TRACE_EXPORTER is 'cloud'"
            )
        provider.add_span_processor(
            BatchSpanProcessor(CloudTraceSpanExporter(project_id=project_id))
        )
        logger.info(
            "Cloud Trace tracing enabled",
            extra={"context": {"project_id": project_id, "service_name": service_name}},
        )
    elif exporter == "console":
        # stdout is the protocol channel
        provider.add_span_processor(
            BatchSpanProcessor(ConsoleSpanExporter(out=sys.stderr))
        )
        logger.info(
            "Console tracing enabled",
            extra={"context": {"service_name": service_name}},
        )
    else:
        supported = ", ".join(TRACE_EXPORTERS)
        raise ConfigurationError(
            f"Unsupported trace exporter: '{exporter}'. Supported exporters: {supported}"
        )

    trace.set_tracer_provider(provider)
    return trace.get_tracer(__name__)


def traced(span_name: Optional[str] = None) -> Callable:
    """Decorator to add tracing to methods.

    Args:
        span_name: Optional custom span name. If not provided, uses
                   '{ClassName}.{method_name}' format.

    Returns:
        Decorated function with tracing enabled
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(self, *args: Any, **kwargs: Any) -> Any:
            tracer = trace.get_tracer(__name__)
            name = span_name or f"{self.__class__.__name__}.{func.__name__}"

            with tracer.start_as_current_span(name) as span:
                if hasattr(self, "get_platform_name"):
                    span.set_attribute("platform", self.get_platform_name())

                try:
                    result = func(self, *args, **kwargs)
                    span.set_status(trace.StatusCode.OK)
                    return result
                except Exception as e:
                    span.set_status(trace.StatusCode.ERROR, str(e))
                    span.record_exception(e)
                    raise
        return wrapper
    return decorator


@contextmanager
def custom_span(name: str, attributes: Optional[Dict[str, Any]] = None):
    """Context manager for creating custom spans anywhere in the code.

    Usage:
        with custom_span("tool.get_pr", {"repository": repo}):
            # do work

    Args:
        name: The span name
        attributes: Optional dictionary of span attributes

    Yields:
        The created span
    """
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span(name) as span:
        if attributes:
            for key, value in attributes.items():
                if value is not None:
                    span.set_attribute(key, value)
        try:
            yield span
        except Exception as e:
            span.set_status(trace.StatusCode.ERROR, str(e))
            span.record_exception(e)
            raise
