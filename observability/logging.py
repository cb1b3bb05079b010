"""Logging setup with structured output and invocation context.

Every pipeline invocation binds a short invocation id (and, inside a
batch, the item index) to context variables. ContextFilter copies them
onto each log record, so interleaved logs from concurrent batch items
can be told apart.

Usage:
    >>> from observability.logging import setup_logging, log_context
    >>> setup_logging(config)
    >>> with log_context(invocation_id="a1b2c3d4", batch_item=3):
    ...     logger.info("Stage complete | stage=sentiment")  # tagged a1b2c3d4#3
"""

import contextvars
import json
import logging
import sys
from contextlib import contextmanager
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from typing import Any, Iterator

invocation_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("invocation_id", default="-")
batch_item_var: contextvars.ContextVar[int | None] = contextvars.ContextVar("batch_item", default=None)

# Attributes every LogRecord has; anything else was passed via extra=
_RESERVED_ATTRS = frozenset({
    "name", "msg", "args", "created", "filename", "funcName", "levelname",
    "levelno", "lineno", "module", "msecs", "pathname", "process",
    "processName", "relativeCreated", "stack_info", "exc_info", "exc_text",
    "thread", "threadName", "taskName", "message", "invocation", "invocation_id",
    "batch_item",
})


@contextmanager
def log_context(invocation_id: str | None = None, batch_item: int | None = None) -> Iterator[None]:
    """Bind an invocation id and/or batch item index for the enclosed block.

    Only the values given are bound; the previous values are restored on
    exit. Context variables are copied per asyncio task, so concurrent
    batch items each keep their own binding.
    """
    tokens: list[tuple[contextvars.ContextVar, contextvars.Token]] = []
    if invocation_id is not None:
        tokens.append((invocation_id_var, invocation_id_var.set(invocation_id)))
    if batch_item is not None:
        tokens.append((batch_item_var, batch_item_var.set(batch_item)))
    try:
        yield
    finally:
        for var, token in reversed(tokens):
            var.reset(token)


class ContextFilter(logging.Filter):
    """Inject invocation context into log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        invocation_id = invocation_id_var.get()
        item = batch_item_var.get()
        record.invocation_id = invocation_id
        record.batch_item = item
        record.invocation = invocation_id if item is None else f"{invocation_id}#{item}"
        return True


class JsonFormatter(logging.Formatter):
    """Single-line JSON records for log aggregation systems.

    Output format:
        {"timestamp": "...", "level": "INFO", "logger": "...", "message": "...",
         "invocation_id": "...", "batch_item": 3}
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "invocation_id": getattr(record, "invocation_id", "-"),
        }

        item = getattr(record, "batch_item", None)
        if item is not None:
            log_data["batch_item"] = item

        if record.levelno >= logging.WARNING:
            log_data["source"] = {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS:
                continue
            try:
                json.dumps(value)
                log_data[key] = value
            except (TypeError, ValueError):
                log_data[key] = str(value)

        return json.dumps(log_data, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """Format: TIMESTAMP [LEVEL] [invocation#item] logger: message"""

    def __init__(self, include_date: bool = False):
        datefmt = "%Y-%m-%d %H:%M:%S" if include_date else "%H:%M:%S"
        super().__init__(
            fmt="%(asctime)s [%(levelname)s] [%(invocation)s] %(name)s: %(message)s",
            datefmt=datefmt,
        )


def setup_logging(config: Any, verbose: bool = False) -> bool:
    """Configure console and rotating file logging.

    If the log directory is not writable, falls back to console-only logging.

    Args:
        config: Application configuration with logging settings
        verbose: If True, use DEBUG level for the console

    Returns:
        True if file logging is enabled, False if console-only (fallback)
    """
    console_level = logging.DEBUG if verbose else getattr(logging, config.log_level, logging.INFO)
    context_filter = ContextFilter()

    if config.log_format == "json":
        console_fmt: logging.Formatter = JsonFormatter()
        file_fmt: logging.Formatter = JsonFormatter()
    else:
        console_fmt = TextFormatter(include_date=False)
        file_fmt = TextFormatter(include_date=True)

    # Logs go to stderr so stdout stays clean for JSON reports
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(console_fmt)
    console.addFilter(context_filter)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    root.addHandler(console)

    file_logging_enabled = False
    try:
        config.log_dir.mkdir(parents=True, exist_ok=True)
        test_file = config.log_dir / ".write_test"
        test_file.touch()
        test_file.unlink()

        log_file = config.log_dir / "vibe.log"
        if config.log_max_bytes > 0:
            file_handler: logging.Handler = RotatingFileHandler(
                log_file,
                maxBytes=config.log_max_bytes,
                backupCount=config.log_backup_count,
                encoding="utf-8",
            )
        else:
            file_handler = TimedRotatingFileHandler(
                log_file,
                when="midnight",
                interval=1,
                backupCount=config.log_backup_count,
                encoding="utf-8",
            )

        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(file_fmt)
        file_handler.addFilter(context_filter)
        root.addHandler(file_handler)
        file_logging_enabled = True

    except OSError as e:
        print(
            f"Warning: Cannot write to log directory '{config.log_dir}': {e}. "
            "Falling back to console-only logging.",
            file=sys.stderr,
        )

    # Reduce noise from HTTP clients used by the model SDKs
    for lib in ("openai", "httpx", "httpcore", "asyncio"):
        logging.getLogger(lib).setLevel(logging.WARNING)

    return file_logging_enabled
