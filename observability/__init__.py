"""Observability: logging context and optional tracing.

setup_logging / log_context:
    Console + rotating file logging with the invocation id and batch
    item index on every record.

setup_tracing / trace_operation:
    Optional Logfire spans for pipeline runs and stages.

Example:
    >>> from observability import setup_tracing, trace_operation
    >>> setup_tracing(enabled=True, service_name="vibe")
    >>> with trace_operation("pipeline_run", {"variant": "full"}):
    ...     pass
"""

from observability.logging import log_context, setup_logging
from observability.tracing import setup_tracing, trace_operation, TracingContext

__all__ = [
    "log_context",
    "setup_logging",
    "setup_tracing",
    "trace_operation",
    "TracingContext",
]
