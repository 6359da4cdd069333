"""Structured logging and OpenTelemetry spans for floe-tablets.

This module provides:
- Structured logging setup via structlog
- OpenTelemetry span helpers for catalog operations
- Readiness poll logging
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog
from opentelemetry import trace
from opentelemetry.trace import SpanKind, Status, StatusCode

if TYPE_CHECKING:
    from opentelemetry.trace import Span, Tracer
    from structlog.stdlib import BoundLogger

_logger: BoundLogger | None = None
_tracer: Tracer | None = None

TRACER_NAME = "floe.tablets"


def get_logger() -> BoundLogger:
    """Get the module logger, creating it if necessary.

    Returns:
        Configured structlog BoundLogger instance.
    """
    global _logger
    if _logger is None:
        _logger = structlog.get_logger(TRACER_NAME)
    assert _logger is not None  # Type narrowing for mypy
    return _logger


def get_tracer() -> Tracer:
    """Get the OpenTelemetry tracer for floe-tablets.

    Returns:
        OpenTelemetry Tracer instance.
    """
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer(TRACER_NAME)
    return _tracer


def configure_logging(
    *,
    log_level: str = "INFO",
    json_format: bool = True,
    add_timestamp: bool = True,
) -> None:
    """Configure structlog output for applications embedding floe-tablets.

    Call once from the application entry point; importing the package never
    configures logging.

    Args:
        log_level: Minimum stdlib level name (DEBUG, INFO, WARNING, ERROR).
        json_format: Render JSON lines if True, console text otherwise.
        add_timestamp: Prefix each event with an ISO timestamp.

    Example:
        >>> configure_logging(log_level="DEBUG", json_format=False)
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if add_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))
    processors.append(
        structlog.processors.JSONRenderer() if json_format else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", level=getattr(logging, log_level.upper()))

    global _logger
    _logger = None


@contextmanager
def span(
    name: str,
    *,
    kind: SpanKind = SpanKind.INTERNAL,
    attributes: dict[str, Any] | None = None,
    log_start: bool = True,
    log_end: bool = True,
    log_failure: bool = True,
) -> Iterator[Span]:
    """Create an OpenTelemetry span with structured logging.

    Args:
        name: Span name (e.g., "catalog.create_table").
        kind: Span kind (INTERNAL, CLIENT, SERVER, PRODUCER, CONSUMER).
        attributes: Optional span attributes.
        log_start: If True, log span start.
        log_end: If True, log span end.
        log_failure: If True, log an error when the block raises.

    Yields:
        OpenTelemetry Span instance.
    """
    tracer = get_tracer()
    logger = get_logger()
    attrs = attributes or {}

    with tracer.start_as_current_span(name, kind=kind, attributes=attrs) as s:
        if log_start:
            logger.debug(f"{name}_started", **attrs)
        try:
            yield s
            s.set_status(Status(StatusCode.OK))
            if log_end:
                logger.debug(f"{name}_completed", **attrs)
        except Exception as exc:
            s.set_status(Status(StatusCode.ERROR, str(exc)))
            s.record_exception(exc)
            if log_failure:
                logger.error(f"{name}_failed", error=str(exc), **attrs)
            raise


@contextmanager
def catalog_operation(
    operation: str,
    *,
    table: str | None = None,
    object_type: str | None = None,
    table_type: str | None = None,
    log_failure: bool = True,
) -> Iterator[Span]:
    """Create a CLIENT span for catalog operations with standard attributes.

    Args:
        operation: Operation name (e.g., "create_table", "wait_for_table").
        table: Qualified table name.
        object_type: "table" or "index".
        table_type: Wire table type name.
        log_failure: If False, the span records the error without logging it.

    Yields:
        OpenTelemetry Span instance.

    Example:
        >>> with catalog_operation("create_table", table="app.orders"):
        ...     submitter.submit(spec)
    """
    attrs: dict[str, Any] = {"catalog.operation": operation}
    if table:
        attrs["catalog.table"] = table
    if object_type:
        attrs["catalog.object_type"] = object_type
    if table_type:
        attrs["catalog.table_type"] = table_type

    with span(
        f"catalog.{operation}",
        kind=SpanKind.CLIENT,
        attributes=attrs,
        log_failure=log_failure,
    ) as s:
        yield s


def log_poll_attempt(
    table: str,
    attempt: int,
    wait_seconds: float,
    remaining_seconds: float,
) -> None:
    """Log a readiness poll that found the table not yet ready.

    Args:
        table: Qualified table name.
        attempt: Poll number (1-based).
        wait_seconds: Time to sleep before the next poll.
        remaining_seconds: Time left before the deadline.
    """
    logger = get_logger()
    logger.debug(
        "table_not_ready",
        table=table,
        attempt=attempt,
        wait_seconds=round(wait_seconds, 3),
        remaining_seconds=round(remaining_seconds, 3),
    )
