"""Exceptions that are allowed to escape the pipeline.

Analysis failures never propagate: stages record them in the pipeline
state and the batch scheduler records them per item. The only error a
caller of ``run``/``run_batch`` sees is a ConfigurationError, which
signals a programming mistake (unknown variant, bad arguments) rather
than a data problem.
"""


class ConfigurationError(ValueError):
    """Invalid pipeline invocation: unknown variant or bad entrypoint arguments."""
