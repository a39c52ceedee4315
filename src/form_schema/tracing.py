"""
Tracing configuration for form-schema.

Validation passes emit trace records on the ``form-schema`` logger.
This module attaches console and JSON Lines handlers to that logger
and provides a decorator that wraps an entry point in start/end
trace records.
"""

import functools
import json
import logging
import sys
import time

from form_schema.config import get_config
from form_schema.constants import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)


class ConsoleTraceHandler(logging.StreamHandler):
    """
    A simple trace handler that prints trace records to the console.

    Useful for development and debugging.
    """

    def __init__(self, verbose: bool = False, stream=None):
        """
        Initialize the console trace handler.

        Args:
            verbose: If True, print every record, not just trace start/end.
            stream: Output stream. Defaults to stderr.
        """
        super().__init__(stream or sys.stderr)
        self.verbose = verbose
        self.setLevel(logging.DEBUG if verbose else logging.INFO)
        self.setFormatter(logging.Formatter("[TRACE %(levelname)s] %(message)s"))

    def filter(self, record: logging.LogRecord) -> bool:
        if not super().filter(record):
            return False
        if self.verbose:
            return True
        return getattr(record, "trace_event", None) is not None


class FileTraceHandler(logging.Handler):
    """
    A trace handler that appends trace records to a JSON Lines file.

    Useful for persistent logging and later analysis.
    """

    def __init__(self, file_path: str = "traces.jsonl"):
        """
        Initialize the file trace handler.

        Args:
            file_path: Path to the output file (JSON Lines format).
        """
        super().__init__(logging.DEBUG)
        self.file_path = file_path

    def emit(self, record: logging.LogRecord) -> None:
        entry = {
            "time": record.created,
            "level": record.levelname,
            "event": getattr(record, "trace_event", None),
            "operation": getattr(record, "trace_operation", None),
            "message": record.getMessage(),
        }
        for extra in ("elapsed_ms", "error_count"):
            if hasattr(record, extra):
                entry[extra] = getattr(record, extra)
        try:
            with open(self.file_path, "a", encoding="utf-8") as f:
                f.write(json.dumps(entry) + "\n")
        except OSError:
            self.handleError(record)


def _trace_handlers() -> list[logging.Handler]:
    return [h for h in logger.handlers if isinstance(h, (ConsoleTraceHandler, FileTraceHandler))]


def setup_tracing(
    enabled: bool = True,
    console: bool = True,
    verbose: bool = False,
    file_path: str | None = None,
) -> None:
    """
    Configure tracing for form-schema.

    Replaces any trace handlers installed by a previous call.

    Args:
        enabled: Whether tracing is enabled.
        console: Whether to print traces to console.
        verbose: Whether to print every rule-level record as well.
        file_path: Optional file path to write traces to.

    Example:
        >>> from form_schema.tracing import setup_tracing
        >>> setup_tracing(console=True, verbose=True)
        >>> # Now every validation pass is traced
    """
    for handler in _trace_handlers():
        logger.removeHandler(handler)
        handler.close()

    if not enabled:
        disable_tracing()
        return

    handlers: list[logging.Handler] = []

    if console:
        handlers.append(ConsoleTraceHandler(verbose=verbose))

    if file_path:
        handlers.append(FileTraceHandler(file_path=file_path))

    for handler in handlers:
        logger.addHandler(handler)

    if handlers:
        logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    enable_tracing()


def disable_tracing() -> None:
    """Disable all tracing."""
    for handler in _trace_handlers():
        handler.addFilter(_drop_all)


def enable_tracing() -> None:
    """Re-enable trace handlers previously disabled."""
    for handler in _trace_handlers():
        handler.removeFilter(_drop_all)


def _drop_all(record: logging.LogRecord) -> bool:
    return False


def trace_validation(operation: str):
    """
    Decorator to trace a validation entry point.

    The wrapped function must return an object with an ``error_count``
    attribute (a ValidationResult).

    Example:
        >>> @trace_validation("submission")
        ... def validate(self, schema, payload): ...
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger.debug(
                f"{operation} validation started",
                extra={"trace_event": "start", "trace_operation": operation},
            )
            started = time.perf_counter()
            result = func(*args, **kwargs)
            elapsed_ms = round((time.perf_counter() - started) * 1000, 3)
            error_count = getattr(result, "error_count", None)
            logger.info(
                f"{operation} validation finished: {error_count} error(s) in {elapsed_ms}ms",
                extra={
                    "trace_event": "end",
                    "trace_operation": operation,
                    "elapsed_ms": elapsed_ms,
                    "error_count": error_count,
                },
            )
            return result

        return wrapper

    return decorator


def configure_from_config() -> None:
    """Apply logging level and tracing settings from the current configuration."""
    config = get_config()
    logger.setLevel(getattr(logging, config.log_level, logging.WARNING))
    if config.enable_tracing:
        setup_tracing(
            enabled=True,
            console=True,
            verbose=config.trace_verbose,
            file_path=config.trace_file,
        )
