"""Optional Logfire tracing for pipeline invocations and stages.

When enabled, every pipeline invocation opens a ``pipeline_run`` span and
every stage a ``stage.<name>`` span; Logfire also instruments PydanticAI,
so each analyzer call nests under its stage. Disabled (the default) or
without logfire installed, the helpers cost one timer and a debug line.

Enable with ENABLE_LOGFIRE=true (and LOGFIRE_TOKEN for the hosted
dashboard) after ``pip install logfire``.
"""

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator

logger = logging.getLogger(__name__)


@dataclass
class TracingContext:
    """Process-wide tracing switch."""
    enabled: bool = False
    service_name: str = "vibe"
    active: bool = False  # logfire configured successfully


_tracing = TracingContext()


def setup_tracing(enabled: bool = False, service_name: str = "vibe", token: str = "") -> TracingContext:
    """Configure Logfire once per process.

    Failures (missing package, bad token) leave tracing off and are logged;
    they never stop the pipeline.

    Returns:
        The process-wide TracingContext
    """
    _tracing.enabled = enabled
    _tracing.service_name = service_name
    if not enabled or _tracing.active:
        return _tracing

    try:
        import logfire
    except ImportError:
        logger.warning("Tracing requested but logfire is not installed | service=%s", service_name)
        return _tracing

    try:
        logfire.configure(service_name=service_name, token=token or None)
        logfire.instrument_pydantic_ai()
    except Exception as e:
        logger.error("Logfire setup failed | error=%s", e)
        return _tracing

    _tracing.active = True
    logger.info("Tracing enabled | service=%s", service_name)
    return _tracing


@contextmanager
def trace_operation(name: str, attributes: dict[str, Any] | None = None) -> Iterator[dict[str, Any]]:
    """Wrap a block in a span named ``name``.

    Yields a dict; anything put in it is attached to the span on exit
    (e.g. the error count of a pipeline run).
    """
    extra: dict[str, Any] = {}
    started = time.perf_counter()
    try:
        if _tracing.enabled and _tracing.active:
            import logfire

            with logfire.span(name, **(attributes or {})) as span:
                yield extra
                for key, value in extra.items():
                    span.set_attribute(key, value)
        else:
            yield extra
    finally:
        logger.debug("Span closed | name=%s elapsed=%.3fs", name, time.perf_counter() - started)
